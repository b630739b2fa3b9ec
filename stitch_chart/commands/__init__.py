"""CLI commands.

Each module here defines a `command` object and is picked up by
stitch_chart.registry.discover(). The module docstring is the command's
`stitch-chart help <name>` text.
"""
