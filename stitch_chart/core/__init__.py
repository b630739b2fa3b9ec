"""stitch_chart.core — Foundation layer.

Contains the palette and yarn table, type definitions, the photo-to-chart
pipeline (quantize, mapper, encoder, formatter), grid operations, rendering
and the report builder.
This module has NO dependencies on stitch_chart.commands or stitch_chart.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
