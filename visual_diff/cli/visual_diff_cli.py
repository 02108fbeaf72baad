"""
visual-diff command-line tool.

    visual-diff compare      -a ref.png -b shot.png [-o diff-output.png]
    visual-diff compare-diff -a ref.png -b shot.png [-o diff-only-output.png]
    visual-diff batch        -a ref.png -d screenshots/ [-o diffs/]
"""

import argparse
import json
import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..exceptions import VisualDiffError
from ..models.rgb_color import RGBColor
from ..models.visual_diff_options import VisualDiffOptions
from ..models.visual_diff_result import VisualDiffResult
from ..pipeline.compare_images import compare_images, save_diff_image
from ..pipeline.batch_compare import compare_against_reference, summarize_batch
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISMATCH = 2

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else os.getenv("VISUAL_DIFF_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt='%H:%M:%S')


def report_path_for(output_path: Path) -> Path:
    """diff.png -> diff.txt; anything without an image suffix gets .txt appended."""
    text = str(output_path)
    replaced = re.sub(r"\.(png|jpg|jpeg)$", ".txt", text, flags=re.IGNORECASE)
    return Path(replaced if replaced != text else text + ".txt")


def format_report(result: VisualDiffResult, output_path: Path) -> str:
    return (
        "=== Comparison Results ===\n"
        f"Match: {'YES' if result.is_match else 'NO'}\n"
        f"Difference: {result.difference_percentage:.2f}%\n"
        f"Different Pixels: {result.different_pixel_count}\n"
        f"Colored Area: {result.colored_area_percentage:.2f}%\n"
        f"Dimensions: {result.dimensions}\n"
        f"Output Image: {output_path}\n"
    )


def _options_from_args(args: argparse.Namespace, only_show_differences: bool) -> VisualDiffOptions:
    return VisualDiffOptions.from_env(
        threshold=args.threshold,
        color1=args.color_a,
        color2=args.color_b,
        color_threshold=args.color_threshold,
        only_show_differences=only_show_differences,
    )


def compare_and_save(args: argparse.Namespace, only_show_differences: bool) -> int:
    image_repository = ImageRepository()
    image_a = image_repository.read_bytes(args.image_a)
    image_b = image_repository.read_bytes(args.image_b)

    logger.info("Comparing images...")
    result = compare_images(image_a, image_b, _options_from_args(args, only_show_differences))

    output_path = save_diff_image(result, args.output)
    report_text = format_report(result, output_path)

    text_output_path = report_path_for(output_path)
    with open(text_output_path, "w", encoding="utf-8") as fh:
        fh.write(report_text)

    if args.json:
        # stdout carries only the JSON document
        print(json.dumps({**result.to_dict(), "output_image": str(output_path)}, indent=2))
        print(f"Report saved to: {text_output_path}", file=sys.stderr)
    else:
        print(f"\n{report_text}")
        print(f"Report saved to: {text_output_path}")

    if args.fail_on_mismatch and not result.is_match:
        return EXIT_MISMATCH
    return EXIT_OK


def run_batch(args: argparse.Namespace) -> int:
    reference = ImageRepository().read_bytes(args.image_a)
    entries = compare_against_reference(
        reference,
        args.directory,
        options=_options_from_args(args, args.only_show_differences),
        output_dir=args.output,
        recursive=args.recursive,
    )
    summary = summarize_batch(entries)

    if args.json:
        print(json.dumps({"summary": summary, "entries": [e.to_dict() for e in entries]}, indent=2))
    else:
        for entry in entries:
            if entry.failed:
                print(f"ERROR  {entry.path.name}: {entry.error}")
            else:
                verdict = "MATCH" if entry.result.is_match else "DIFF "
                print(f"{verdict}  {entry.path.name}: {entry.result.difference_percentage:.2f}%")
        print(
            f"\n{summary['total']} compared: {summary['matched']} matched, "
            f"{summary['mismatched']} mismatched, {summary['failed']} failed"
        )

    if summary["failed"]:
        return EXIT_ERROR
    if args.fail_on_mismatch and summary["mismatched"]:
        return EXIT_MISMATCH
    return EXIT_OK


def _add_common_options(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("-a", "--image-a", required=True, type=Path,
                    help="Path to the first image (reference)")
    ap.add_argument("-t", "--threshold", type=float, default=None,
                    help="Threshold for considering images as matching (0-100, default: 0)")
    ap.add_argument("--color-a", type=RGBColor.parse, default=None,
                    help='RGB color for image A (e.g., "255,0,0")')
    ap.add_argument("--color-b", type=RGBColor.parse, default=None,
                    help='RGB color for image B (e.g., "0,255,0")')
    ap.add_argument("--color-threshold", type=int, default=None,
                    help="Minimum RGB threshold for colored pixels (0-255, default: 30)")
    ap.add_argument("--json", action="store_true", help="Print a JSON summary")
    ap.add_argument("--fail-on-mismatch", action="store_true",
                    help=f"Exit with status {EXIT_MISMATCH} when images do not match")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="visual-diff",
        description="CLI tool for comparing images and generating visual diffs",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    compare = sub.add_parser(
        "compare",
        help="Compare two images and generate a full diff image with grayscale background",
    )
    _add_common_options(compare)
    compare.add_argument("-b", "--image-b", required=True, type=Path,
                         help="Path to the second image (screenshot)")
    compare.add_argument("-o", "--output", type=Path, default=Path("./diff-output.png"),
                         help="Output path for diff image")

    compare_diff = sub.add_parser(
        "compare-diff",
        help="Compare two images and generate a diff image showing only the differences",
    )
    _add_common_options(compare_diff)
    compare_diff.add_argument("-b", "--image-b", required=True, type=Path,
                              help="Path to the second image (screenshot)")
    compare_diff.add_argument("-o", "--output", type=Path, default=Path("./diff-only-output.png"),
                              help="Output path for diff image")

    batch = sub.add_parser(
        "batch",
        help="Compare one reference image against every image in a folder",
    )
    _add_common_options(batch)
    batch.add_argument("-d", "--directory", required=True, type=Path,
                       help="Folder holding the screenshots")
    batch.add_argument("-o", "--output", type=Path, default=None,
                       help="Folder for <name>-diff.png images (not saved when omitted)")
    batch.add_argument("-r", "--recursive", action="store_true", help="Descend into sub-folders")
    batch.add_argument("--only-show-differences", action="store_true",
                       help="Black out matching pixels in saved diffs")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "batch":
            return run_batch(args)
        return compare_and_save(args, only_show_differences=args.command == "compare-diff")
    except (VisualDiffError, OSError) as err:
        logger.error(f"Error: {err}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
