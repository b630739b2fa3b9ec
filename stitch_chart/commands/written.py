"""Written row-by-row instructions, starting from row 1 at the bottom.

Odd rows are right side (RS) and read right to left, even rows are
wrong side (WS) and read left to right. Each row lists colour runs in
the order they are worked:

    Row 1 (RS): Navy x12, Pure White x3, Navy x25

Example:
    stitch-chart written photo.jpg --width 40 --colours 4
"""

from stitch_chart.core.encoder import encode_rows
from stitch_chart.core.formatter import format_written
from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='written',
    help='Written instructions per row (RS/WS, colour runs), bottom-up.',
)


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    lines = format_written(encode_rows(pattern.grid), pattern.lookup())
    report.add('written', {'lines': lines})
