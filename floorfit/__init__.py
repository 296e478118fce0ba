"""floorfit — floor-plan scale calibration and fixture auto-placement.

Packages, in data-flow order:

  geometry     Point / Rect / ScaleInfo and pixel ↔ millimetre conversion
  calibration  reference lines → scale (+ consistency check)
  placer       fixtures + area + obstacles → non-overlapping placements
  library      fixture templates loaded from library/*.json
  web          FastAPI server over the above
"""

__version__ = "0.1.0"
