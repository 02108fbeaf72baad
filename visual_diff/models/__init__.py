from .rgb_color import RGBColor, DEFAULT_COLOR_A, DEFAULT_COLOR_B
from .monochrome_image import MonochromeImage
from .visual_diff_result import Dimensions, DiffStatistics, VisualDiffResult
from .visual_diff_options import VisualDiffOptions
