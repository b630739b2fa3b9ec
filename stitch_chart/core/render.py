"""Chart image and PDF export with Pillow.

render_chart() draws one cell per stitch with grid lines (bold every 10),
optional symbols in a contrasting colour and 'R{n} (RS|WS)' row labels.

render_pdf() writes a simple multi-page A4 document: title page with the
chart, colour key, block pattern and written instructions bottom-up,
paginated as needed. Chart, blocks and written sections can be left out.
"""

import textwrap
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from stitch_chart.core.encoder import encode_rows, row_number, row_side
from stitch_chart.core.formatter import bottom_up, format_blocks_row, format_written
from stitch_chart.core.grid import colour_counts
from stitch_chart.core.palette import contrast_colour, hex_to_rgb
from stitch_chart.core.types import Pattern

MISSING_RGB = (128, 128, 128)
THIN_LINE = (220, 220, 220)
BOLD_LINE = (100, 100, 100)

# A4 at 100 dpi
PAGE_SIZE = (827, 1169)
PAGE_DPI = 100.0
MARGIN = 60
LINE_HEIGHT = 16


def _font():
    return ImageFont.load_default()


def render_chart(pattern: Pattern, cell_size: int = 20, symbols: bool = True, labels: bool = True) -> Image.Image:
    """Draw the pattern grid as an RGB image."""
    pattern.validate()
    font = _font()
    rows, cols = pattern.rows, pattern.cols
    lookup = pattern.lookup()

    label_w = 0
    if labels:
        longest = max(
            (f'R{row_number(r, rows)} ({row_side(row_number(r, rows))})' for r in range(rows)),
            key=len,
        )
        label_w = int(font.getlength(longest)) + 8

    img = Image.new('RGB', (label_w + cols * cell_size + 1, rows * cell_size + 1), (255, 255, 255))
    draw = ImageDraw.Draw(img)

    for r, row in enumerate(pattern.grid):
        top = r * cell_size
        if labels:
            number = row_number(r, rows)
            draw.text(
                (label_w - 4, top + cell_size // 2),
                f'R{number} ({row_side(number)})',
                font=font,
                fill=(50, 50, 50),
                anchor='rm',
            )
        for c, cell in enumerate(row):
            left = label_w + c * cell_size
            entry = lookup.get(cell)
            rgb = entry.rgb if entry is not None else MISSING_RGB
            draw.rectangle([left, top, left + cell_size, top + cell_size], fill=rgb)
            if symbols and entry is not None and entry.symbol:
                draw.text(
                    (left + cell_size // 2, top + cell_size // 2),
                    entry.symbol,
                    font=font,
                    fill=hex_to_rgb(contrast_colour(entry.hex)),
                    anchor='mm',
                )

    for c in range(cols + 1):
        x = label_w + c * cell_size
        draw.line([(x, 0), (x, rows * cell_size)], fill=BOLD_LINE if c % 10 == 0 else THIN_LINE, width=1)
    for r in range(rows + 1):
        # Bold lines count from the bottom row, matching row numbers
        y = r * cell_size
        bold = (rows - r) % 10 == 0
        draw.line([(label_w, y), (label_w + cols * cell_size, y)], fill=BOLD_LINE if bold else THIN_LINE, width=1)

    return img


def _new_page() -> tuple[Image.Image, ImageDraw.ImageDraw]:
    page = Image.new('RGB', PAGE_SIZE, (255, 255, 255))
    return page, ImageDraw.Draw(page)


def _fit(img: Image.Image, box: tuple[int, int]) -> Image.Image:
    scale = min(box[0] / img.width, box[1] / img.height, 1.0)
    if scale == 1.0:
        return img
    size = (max(1, int(img.width * scale)), max(1, int(img.height * scale)))
    return img.resize(size, Image.Resampling.NEAREST)


def _cover_page(pattern: Pattern, title: str, cell_size: int, include_chart: bool) -> Image.Image:
    page, draw = _new_page()
    font = _font()
    draw.text((MARGIN, MARGIN), title, font=font, fill=(0, 0, 0))
    draw.text(
        (MARGIN, MARGIN + LINE_HEIGHT),
        f'Dimensions: {pattern.cols}W x {pattern.rows}H    Colours: {len(pattern.palette)}',
        font=font,
        fill=(80, 80, 80),
    )
    if include_chart:
        top = MARGIN + 3 * LINE_HEIGHT
        box = (PAGE_SIZE[0] - 2 * MARGIN, PAGE_SIZE[1] - top - MARGIN)
        page.paste(_fit(render_chart(pattern, cell_size=cell_size), box), (MARGIN, top))
    return page


def _key_page(pattern: Pattern) -> Image.Image:
    page, draw = _new_page()
    font = _font()
    counts = colour_counts(pattern.grid)
    draw.text((MARGIN, MARGIN), 'Colour Key', font=font, fill=(0, 0, 0))
    y = MARGIN + 2 * LINE_HEIGHT
    swatch = 2 * LINE_HEIGHT - 8
    for entry in pattern.palette:
        draw.rectangle([MARGIN, y, MARGIN + swatch, y + swatch], fill=entry.rgb, outline=(200, 200, 200))
        if entry.symbol:
            draw.text(
                (MARGIN + swatch // 2, y + swatch // 2),
                entry.symbol,
                font=font,
                fill=hex_to_rgb(contrast_colour(entry.hex)),
                anchor='mm',
            )
        label = f'{entry.name}  {entry.hex}  {counts.get(entry.id, 0)} sts'
        draw.text((MARGIN + swatch + 12, y + swatch // 2), label, font=font, fill=(50, 50, 50), anchor='lm')
        y += 2 * LINE_HEIGHT
    return page


def _text_pages(heading: str, lines: list[str]) -> list[Image.Image]:
    """Lay out `lines` under `heading`, wrapping long lines and starting new pages as needed."""
    font = _font()
    width_chars = max(20, (PAGE_SIZE[0] - 2 * MARGIN) // 7)
    bottom = PAGE_SIZE[1] - MARGIN - LINE_HEIGHT

    pages = []
    page, draw = _new_page()
    draw.text((MARGIN, MARGIN), heading, font=font, fill=(0, 0, 0))
    y = MARGIN + 2 * LINE_HEIGHT
    for line in lines:
        wrapped = textwrap.wrap(line, width=width_chars, subsequent_indent='    ') or ['']
        if y + len(wrapped) * LINE_HEIGHT > bottom:
            pages.append(page)
            page, draw = _new_page()
            y = MARGIN
        for part in wrapped:
            draw.text((MARGIN, y), part, font=font, fill=(0, 0, 0))
            y += LINE_HEIGHT
        y += LINE_HEIGHT // 2
    pages.append(page)
    return pages


def _blocks_pages(pattern: Pattern) -> list[Image.Image]:
    lookup = pattern.lookup()
    lines = [format_blocks_row(row, lookup) for row in bottom_up(encode_rows(pattern.grid))]
    return _text_pages('Block Pattern (Start Bottom-Up)', lines)


def _written_pages(pattern: Pattern) -> list[Image.Image]:
    return _text_pages('Written Instructions', format_written(encode_rows(pattern.grid), pattern.lookup()))


def render_pdf(
    pattern: Pattern,
    path: str | Path,
    title: str = 'Pattern',
    cell_size: int = 20,
    include_chart: bool = True,
    include_blocks: bool = True,
    include_written: bool = True,
) -> int:
    """Write the pattern to a PDF. Returns the page count.

    The title page is always present. The colour key follows when any
    section is included, then the block pattern and written instructions.
    """
    pattern.validate()
    pages = [_cover_page(pattern, title, cell_size, include_chart)]
    if include_chart or include_blocks or include_written:
        pages.append(_key_page(pattern))
    if include_blocks:
        pages.extend(_blocks_pages(pattern))
    if include_written:
        pages.extend(_written_pages(pattern))

    total = len(pages)
    font = _font()
    for i, page in enumerate(pages, start=1):
        ImageDraw.Draw(page).text(
            (PAGE_SIZE[0] - MARGIN, PAGE_SIZE[1] - MARGIN // 2),
            f'Page {i} of {total}',
            font=font,
            fill=(150, 150, 150),
            anchor='rm',
        )

    pages[0].save(str(path), 'PDF', save_all=True, append_images=pages[1:], resolution=PAGE_DPI)
    return total
