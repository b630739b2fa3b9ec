"""Run every command, combine into a single report.

Runs: palette, written, blocks, chart.
Runs pdf too if --pdf is given.

Example:
    stitch-chart all photo.jpg --out ./out
    stitch-chart all photo.jpg --out ./out --json
    stitch-chart all photo.jpg --out ./out --pdf --title "Sunset Bag"
"""

from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='all',
    help='Run palette, written, blocks and chart (plus pdf with --pdf).',
)

# Report order
ORDER = ['palette', 'written', 'blocks', 'chart', 'pdf']


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    from stitch_chart.registry import all_commands

    commands = all_commands()
    want_pdf = args.pdf
    for name in ORDER:
        if name == 'pdf' and not want_pdf:
            continue
        commands[name].execute(pattern, report, args)
