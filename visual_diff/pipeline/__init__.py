from .compare_images import (
    compare_images,
    compare_monochrome_images,
    convert_to_monochrome_a,
    convert_to_monochrome_b,
    save_diff_image,
)
from .batch_compare import BatchComparisonEntry, compare_against_reference, summarize_batch
