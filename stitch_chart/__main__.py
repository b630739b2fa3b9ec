"""stitch-chart — Turn a photo into a tapestry crochet / colourwork chart.

Usage: stitch-chart <command> <image> [options]

Commands are auto-discovered from stitch_chart/commands/.
Each command module's docstring is its documentation.
Run `stitch-chart help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, stitch-chart looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.

  STITCH_CHART_WIDTH, STITCH_CHART_COLOURS, STITCH_CHART_CELL_SIZE,
  STITCH_CHART_SAMPLE_STEP, STITCH_CHART_ALPHA_THRESHOLD set the defaults
  for the matching options.
"""

import argparse
import importlib
import os
import sys

from PIL import Image, UnidentifiedImageError

from stitch_chart import registry
from stitch_chart.core.config import Settings
from stitch_chart.core.env import load_env
from stitch_chart.core.errors import ChartError
from stitch_chart.core.grid import background_id, fit_grid, gauge_dimensions, pad_grid
from stitch_chart.core.importer import import_image
from stitch_chart.core.report import format_json, format_text
from stitch_chart.core.types import Pattern, Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'stitch_chart.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  stitch-chart written photo.jpg --width 40 --colours 6\n'
        '  stitch-chart chart photo.jpg --out ./out\n'
        '  stitch-chart all photo.jpg --out ./out --pdf --title "Sunset Bag"\n'
        '  stitch-chart all photo.jpg --gauge 10 8 4 5 --json\n'
        '  stitch-chart help written\n'
    )
    parser = argparse.ArgumentParser(
        prog='stitch-chart',
        description='Turn a photo into a stitch chart with written row instructions.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('image', help='Path to photo (PNG/JPG)')
        p.add_argument('-w', '--width', type=int, default=None, help='Grid width in stitches')
        p.add_argument('-c', '--colours', type=int, default=None, help='Maximum palette size')
        p.add_argument(
            '-g',
            '--gauge',
            type=float,
            nargs=4,
            metavar=('WIDTH_IN', 'HEIGHT_IN', 'STS_PER_IN', 'ROWS_PER_IN'),
            default=None,
            help='Size the grid from finished size and gauge (overrides --width)',
        )
        p.add_argument('--pad', type=int, default=0, metavar='N', help='Add N background stitches on every edge')
        p.add_argument('-o', '--out', default='.', help='Output directory for chart/pdf files')
        p.add_argument('-t', '--title', default='Pattern', help='Pattern title (pdf)')
        p.add_argument('--cell-size', type=int, default=None, help='Chart cell size in pixels')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        if name == 'all':
            p.add_argument('--pdf', action='store_true', help='Also export a PDF')
        if name in ('all', 'pdf'):
            p.add_argument('--no-chart', action='store_true', help='Leave the chart out of the PDF')
            p.add_argument('--no-blocks', action='store_true', help='Leave the block pattern out of the PDF')
            p.add_argument('--no-written', action='store_true', help='Leave the written instructions out of the PDF')

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: stitch-chart help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _build_pattern(image: Image.Image, args: argparse.Namespace, settings: Settings) -> Pattern:
    """Import the photo, then apply gauge sizing and padding."""
    width = args.width if args.width is not None else settings.width
    colours = args.colours if args.colours is not None else settings.colours

    target_rows = None
    if args.gauge:
        target_rows, width = gauge_dimensions(*args.gauge)

    if args.pad < 0:
        raise ChartError(f'--pad must be >= 0, got {args.pad}')
    if width < 1 or colours < 1:
        raise ChartError(f'width and colours must be >= 1 (got width={width}, colours={colours})')
    if args.cell_size is not None and args.cell_size < 1:
        raise ChartError(f'--cell-size must be >= 1, got {args.cell_size}')

    pattern = import_image(
        image,
        width,
        colours,
        sample_step=settings.sample_step,
        alpha_threshold=settings.alpha_threshold,
    )
    fill = background_id(pattern.palette)
    if target_rows is not None and target_rows != pattern.rows:
        pattern.grid = fit_grid(pattern.grid, target_rows, width, fill)
    if args.pad:
        pattern.grid = pad_grid(pattern.grid, 'all', args.pad, fill)
    return pattern


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'stitch-chart: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)

    try:
        settings = Settings.from_env()
        if args.cell_size is None:
            args.cell_size = settings.cell_size
        with Image.open(args.image) as img:
            image = img.convert('RGBA')
        pattern = _build_pattern(image, args, settings)
    except UnidentifiedImageError:
        print(f'Error: not a readable image: {args.image}', file=sys.stderr)
        sys.exit(1)
    except ChartError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    print(
        f'stitch-chart: {pattern.cols}x{pattern.rows} grid, {len(pattern.palette)} colours',
        file=sys.stderr,
    )

    report = Report(
        image_path=args.image,
        image_width=image.width,
        image_height=image.height,
        rows=pattern.rows,
        cols=pattern.cols,
    )

    registry.get(args.command).execute(pattern, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report), end='')


if __name__ == '__main__':
    main()
