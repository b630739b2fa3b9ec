"""List the chart palette: id, symbol, hex, yarn name and stitch count.

Palette entries come from median-cut quantization of the photo. Each
colour is named after the nearest yarn shade in the built-in table and
given a chart symbol (symbols repeat once the palette outgrows them).

Example:
    stitch-chart palette photo.jpg --width 60 --colours 6
"""

from stitch_chart.core.grid import colour_counts
from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='palette',
    help='List palette colours with yarn names, symbols and stitch counts.',
)


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    counts = colour_counts(pattern.grid)
    colours = [
        {
            'id': entry.id,
            'name': entry.name,
            'hex': entry.hex,
            'symbol': entry.symbol,
            'stitches': counts.get(entry.id, 0),
        }
        for entry in pattern.palette
    ]
    report.add('palette', {'colours': colours})
