"""Compact block pattern using chart symbols and working-direction arrows.

    Row 1 (RS) <-: X 12, O 3, X 25
    Row 2 (WS) ->: X 24, O 5, X 11

Example:
    stitch-chart blocks photo.jpg
"""

from stitch_chart.core.encoder import encode_rows
from stitch_chart.core.formatter import bottom_up, format_blocks_row
from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='blocks',
    help='Block pattern with symbols and direction arrows, bottom-up.',
)


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    lookup = pattern.lookup()
    lines = [format_blocks_row(row, lookup) for row in bottom_up(encode_rows(pattern.grid))]
    report.add('blocks', {'lines': lines})
