from __future__ import annotations

from pathlib import Path
import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from app.photocollage.collage import (
    DEFAULT_ROW_HEIGHT,
    DEFAULT_SPACING,
    load_sized_images,
    save_collage,
)
from app.photocollage.errors import CollageError
from app.photocollage.layout.pipeline import compute_layout
from app.photocollage.models import CollageLayout, LayoutConfig
from app.photocollage.render.surface import TRANSPARENT, parse_color
from app.photocollage.utils.sources import is_data_uri, is_url

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".gif", ".tif", ".tiff"}

logger = logging.getLogger(__name__)


def expand_inputs(inputs: Sequence[str]) -> List[str]:
    """Expand directories to their image files (sorted); keep everything else."""
    out: List[str] = []
    for item in inputs:
        if is_url(item) or is_data_uri(item):
            out.append(item)
            continue
        p = Path(item).expanduser()
        if p.is_dir():
            out.extend(
                str(child)
                for child in sorted(p.iterdir())
                if child.is_file() and child.suffix.lower() in IMAGE_SUFFIXES
            )
        else:
            out.append(item)
    return out


def layout_to_dict(layout: CollageLayout) -> dict:
    width, height = layout.canvas.size
    rows = []
    index = 0
    for row, positions in zip(layout.rows, layout.positions):
        cells = []
        for thumb, pos in zip(row, positions):
            cells.append(
                {
                    "index": index,
                    "x": round(pos.x, 2),
                    "y": round(pos.y, 2),
                    "width": round(thumb.width, 2),
                    "height": round(thumb.height, 2),
                }
            )
            index += 1
        rows.append(cells)
    return {"canvas": {"width": width, "height": height}, "rows": rows}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Arrange images into a justified-row collage")
    parser.add_argument("inputs", nargs="+", help="Image paths, directories or URLs (in order)")
    parser.add_argument("-o", "--output", default="collage.png", help="Output file")
    parser.add_argument("--max-width", type=float, default=1200, help="Collage width in px")
    parser.add_argument("--columns", type=int, default=0, help="Images per row window (0 = auto)")
    parser.add_argument("--row-height", type=float, default=DEFAULT_ROW_HEIGHT, help="Target row height in px")
    parser.add_argument("--spacing", type=float, default=DEFAULT_SPACING, help="Gap/margin in px")
    parser.add_argument("--format", default=None, help="png, jpeg, webp... (default: from output suffix)")
    parser.add_argument("--background", default=None, help="#RRGGBB or #RRGGBBAA (default: transparent)")
    parser.add_argument("--quality", type=int, default=90, help="JPEG/WebP quality")
    parser.add_argument("--workers", type=int, default=0, help="Parallel loaders (0 = auto)")
    parser.add_argument("--timeout", type=float, default=20.0, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING...")
    parser.add_argument("--layout-only", action="store_true", help="Print the layout as JSON, do not render")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run(args: argparse.Namespace) -> int:
    sources = expand_inputs(args.inputs)
    background = parse_color(args.background) if args.background else TRANSPARENT

    if args.layout_only:
        config = LayoutConfig(
            container_width=args.max_width,
            target_row_height=args.row_height,
            columns_count=args.columns,
            spacing=args.spacing,
        ).validate()
        images = load_sized_images(sources, workers=args.workers, timeout=args.timeout)
        print(json.dumps(layout_to_dict(compute_layout(images, config)), indent=2))
        return 0

    out = save_collage(
        args.output,
        sources,
        args.max_width,
        args.columns,
        args.format,
        target_row_height=args.row_height,
        spacing=args.spacing,
        background=background,
        quality=args.quality,
        workers=args.workers,
        timeout=args.timeout,
    )
    print(f"Collage written: {out.resolve()}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return run(args)
    except CollageError as exc:
        logger.debug("collage failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
