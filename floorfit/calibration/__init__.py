"""Calibration — turn user-drawn reference lines into a pixel/mm scale.

Submodules:
  models        ReferenceLine, AxisScales, LineValidation, Calibration.
  lines         Reference line creation (misclick filter, axis snapping).
  scale         Averaging, axis split, consistency validation, calibrate().
  serialization JSON conversion.
"""

from .models import ReferenceLine, AxisScales, LineValidation, Calibration
from .lines import create_reference_line
from .scale import (
    line_scale,
    calculate_scale_from_lines,
    calculate_separate_scales,
    validate_reference_lines,
    mismatch_severity,
    calibration_hint,
    calibrate,
)
from .serialization import (
    scale_to_dict, parse_scale,
    reference_line_to_dict, parse_reference_line, parse_reference_lines,
    calibration_to_dict,
)

__all__ = [
    # Models
    "ReferenceLine", "AxisScales", "LineValidation", "Calibration",
    # Lines
    "create_reference_line",
    # Scale
    "line_scale", "calculate_scale_from_lines", "calculate_separate_scales",
    "validate_reference_lines", "mismatch_severity", "calibration_hint",
    "calibrate",
    # Serialization
    "scale_to_dict", "parse_scale",
    "reference_line_to_dict", "parse_reference_line", "parse_reference_lines",
    "calibration_to_dict",
]
