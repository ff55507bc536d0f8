from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Area epsilon for degenerate triangle checks.
EPS_AREA = 1e-12

# Shape-quality ratio threshold used for sliver detection.
EPS_SLIVER_RATIO = 1e-3

# Coordinate magnitude above which float64 precision loss becomes visible.
EPS_HUGE_COORD = 1e6
