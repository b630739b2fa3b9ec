"""Report builder — text and JSON output for stitch-chart results."""

import json
import os
from typing import Any

from stitch_chart.core.types import Report


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'stitch-chart: {os.path.basename(report.image_path) or "<pixels>"}'
    if report.image_width and report.image_height:
        header += f' ({report.image_width}×{report.image_height})'
    header += f' → {report.cols}×{report.rows} stitches'
    lines.append(header)
    lines.append('')

    for name, data in report.sections.items():
        lines.append(f'── {name}')
        if name == 'palette' and 'colours' in data:
            for c in data['colours']:
                symbol = c.get('symbol') or ' '
                lines.append(f'  {c["id"]:>3} {symbol} {c["hex"]}  {c["name"]:<14} {c["stitches"]} sts')
        elif name in ('written', 'blocks') and 'lines' in data:
            for line in data['lines']:
                lines.append(f'  {line}')
        elif 'file' in data:
            lines.append(f'  wrote {data["file"]}')
        else:
            # Generic fallback
            for k, v in data.items():
                lines.append(f'  {name}.{k}: {v}')
        lines.append('')

    return '\n'.join(lines).rstrip() + '\n'


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'grid': {'rows': report.rows, 'cols': report.cols},
        'sections': report.sections,
    }
    if report.files:
        obj['files'] = report.files
    return json.dumps(obj, indent=2)
