"""
Batch Comparison Pipeline
Compares one reference image against every image in a folder.
The reference is decoded once and reused for all comparisons.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List
from dotenv import load_dotenv

from ..exceptions import VisualDiffError
from ..models.monochrome_image import MonochromeImage
from ..models.visual_diff_options import VisualDiffOptions
from ..models.visual_diff_result import VisualDiffResult
from ..repositories.image_repository import ImageRepository, ImageBytes
from .compare_images import (
    compare_monochrome_images,
    convert_to_monochrome_a,
    convert_to_monochrome_b,
    save_diff_image,
)

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "4"))


@dataclass(frozen=True)
class BatchComparisonEntry:
    """
    Outcome for one candidate image. Exactly one of `result` / `error` is set.
    """
    path: Path
    result: VisualDiffResult | None = None
    error: str | None = None
    diff_path: Path | None = None  # Where the diff image was saved, if anywhere

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "diff_path": str(self.diff_path) if self.diff_path else None,
        }


def diff_name_for(path: Path, folder: Path) -> str:
    """
    Diff file name for `path`, unique within `folder`.
    Sub-folders are flattened with "__": nested/page.png -> nested__page-diff.png.
    """
    relative = path.relative_to(folder).with_suffix("")
    return "__".join(relative.parts) + "-diff.png"


def _compare_one(
    path: Path,
    folder: Path,
    monochrome_a: MonochromeImage,
    options: VisualDiffOptions,
    output_dir: Path | None,
    image_repository: ImageRepository,
) -> BatchComparisonEntry:
    try:
        monochrome_b = convert_to_monochrome_b(image_repository.read_bytes(path), options.color2)
        result = compare_monochrome_images(
            monochrome_a,
            monochrome_b,
            threshold=options.threshold,
            only_show_differences=options.only_show_differences,
            color_threshold=options.color_threshold,
        )
        diff_path = None
        if output_dir is not None:
            diff_path = save_diff_image(result, output_dir / diff_name_for(path, folder))
    except (VisualDiffError, OSError) as err:
        # Comparisons are independent, so one bad file does not stop the batch
        logger.warning(f"Skipping {path.name}: {err}")
        return BatchComparisonEntry(path=path, error=str(err))

    return BatchComparisonEntry(path=path, result=result, diff_path=diff_path)


def compare_against_reference(
    reference_image: ImageBytes,
    folder: str | Path,
    *,
    options: VisualDiffOptions | None = None,
    output_dir: str | Path | None = None,
    recursive: bool = False,
    exts: Iterable[str] | None = None,
    max_workers: int | None = None,
    image_repository: ImageRepository | None = None,
) -> List[BatchComparisonEntry]:
    """
    Compare `reference_image` against every image found in `folder`.

    Args:
        reference_image: Encoded reference image bytes.
        folder: Folder holding the screenshots.
        options: Comparison options, defaults when None.
        output_dir: If given, each diff is saved there as <stem>-diff.png
            (<sub>__<stem>-diff.png for images in sub-folders).
        recursive: Descend into sub-folders.
        exts: Allowed extensions, defaults to VALID_IMAGE_EXTENSIONS.
        max_workers: Thread count, defaults to BATCH_MAX_WORKERS.

    Returns:
        List[BatchComparisonEntry]: one entry per candidate, in sorted path order.
    """
    options = options or VisualDiffOptions()
    image_repository = image_repository or ImageRepository()
    folder = Path(folder)
    output_dir = Path(output_dir) if output_dir is not None else None

    # Decoded once; a bad reference aborts the whole batch
    monochrome_a = convert_to_monochrome_a(reference_image, options.color1)

    paths = image_repository.list_dir(folder, recursive=recursive, exts=exts)
    logger.info(f"Comparing {len(paths)} images in {folder} against reference")

    with ThreadPoolExecutor(max_workers=max_workers or MAX_WORKERS) as pool:
        entries = list(pool.map(
            lambda p: _compare_one(p, folder, monochrome_a, options, output_dir, image_repository),
            paths,
        ))

    summary = summarize_batch(entries)
    logger.info(
        f"Batch done: {summary['matched']} matched, "
        f"{summary['mismatched']} mismatched, {summary['failed']} failed"
    )
    return entries


def summarize_batch(entries: List[BatchComparisonEntry]) -> dict:
    matched = sum(1 for e in entries if e.result is not None and e.result.is_match)
    failed = sum(1 for e in entries if e.failed)
    return {
        "total": len(entries),
        "matched": matched,
        "mismatched": len(entries) - matched - failed,
        "failed": failed,
    }
