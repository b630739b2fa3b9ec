"""Export a printable PDF: title page with chart, colour key, block pattern
and written instructions.

The file name is derived from --title: lowercase, anything other than
a-z and 0-9 replaced by '-'. Saves to <out>/stitch-chart-<title>.pdf.

Sections can be left out with --no-chart, --no-blocks and --no-written.
The colour key is dropped only when all three are left out.

Example:
    stitch-chart pdf photo.jpg --out ./out --title "Sunset Bag"
    stitch-chart pdf photo.jpg --no-blocks
"""

import os
import re

from stitch_chart.core.render import render_pdf
from stitch_chart.core.types import Command, Pattern, Report

command = Command(
    name='pdf',
    help='Export chart, colour key, block pattern and written instructions to a PDF.',
)


def pdf_filename(title: str) -> str:
    safe = re.sub(r'[^a-z0-9]', '-', title.lower())
    return f'stitch-chart-{safe}.pdf'


@command.run
def run(pattern: Pattern, report: Report, args) -> None:
    os.makedirs(args.out, exist_ok=True)
    path = os.path.join(args.out, pdf_filename(args.title))
    pages = render_pdf(
        pattern,
        path,
        title=args.title,
        cell_size=args.cell_size,
        include_chart=not args.no_chart,
        include_blocks=not args.no_blocks,
        include_written=not args.no_written,
    )
    report.record_file(path)
    report.add('pdf', {'file': path, 'pages': pages})
