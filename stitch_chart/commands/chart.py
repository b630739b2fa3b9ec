"""Render the stitch chart as a PNG.

One cell per stitch, grid lines every stitch (bold every 10), palette
symbols drawn on each cell and 'R{n} (RS|WS)' labels down the left.
Saves to <out>/chart.png.

Example:
    stitch-chart chart photo.jpg --out ./out --cell-size 16
"""

import os

from stitch_chart.core.render import render_chart
from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='chart',
    help='Render the chart (colours, symbols, row labels) to <out>/chart.png.',
)


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    os.makedirs(args.out, exist_ok=True)
    path = os.path.join(args.out, 'chart.png')
    img = render_chart(pattern, cell_size=args.cell_size)
    img.save(path)
    report.record_file(path)
    report.add('chart', {'file': path, 'width': img.width, 'height': img.height})
