import argparse
import json
import logging
from pathlib import Path

from .config import Direction, LayoutConfig
from .errors import InvalidInputShape
from .pipeline import calculate_tree_layout
from .records import read_records_csv
from .render import render_svg

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ancestry-layout",
        description="Lay out a family tree from a CSV file of person records.",
    )
    parser.add_argument(
        "input_csv",
        type=Path,
        help="Records with id;father_id;mother_id;sibling_order columns.",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=float,
        default=1200.0,
        help="Viewport width in px (default: 1200).",
    )
    parser.add_argument(
        "--sep", default=";", help="CSV column separator (default: ';')."
    )
    parser.add_argument("--father-column", default="father_id")
    parser.add_argument("--mother-column", default="mother_id")
    parser.add_argument("--root", help="Lay out only the branch below this id.")
    parser.add_argument("--rtl", action="store_true", help="Right-to-left display.")
    parser.add_argument(
        "--no-photos", action="store_true", help="Size every card as text-only."
    )
    parser.add_argument(
        "--widening",
        type=float,
        default=1.0,
        help="Generation spacing factor (default: 1.0).",
    )
    parser.add_argument(
        "--svg", type=Path, help="Write a preview drawing to this SVG file."
    )
    parser.add_argument(
        "--json",
        type=Path,
        help="Write nodes, connections and diagnostics as JSON.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rename = {}
    if args.father_column != "father_id":
        rename[args.father_column] = "father_id"
    if args.mother_column != "mother_id":
        rename[args.mother_column] = "mother_id"

    config = LayoutConfig(
        direction=Direction.RTL if args.rtl else Direction.LTR,
        show_photos=not args.no_photos,
        widening_factor=args.widening,
    )
    try:
        records = read_records_csv(args.input_csv, sep=args.sep, rename=rename)
        result = calculate_tree_layout(records, args.width, config, root_id=args.root)
    except InvalidInputShape as exc:
        logger.error("invalid input: %s", exc)
        return 2

    for diagnostic in result.diagnostics:
        print(f"{diagnostic.kind.value}: {diagnostic.message}")
    print(f"{len(result.nodes)} nodes, {len(result.connections)} connections")

    if args.json:
        layout = json.dumps(result.to_dict(), indent=2, default=str)
        args.json.write_text(layout, encoding="utf-8")
    if args.svg:
        render_svg(result, args.svg, direction=config.direction)

    return 0 if result.ok and result.nodes else 1
