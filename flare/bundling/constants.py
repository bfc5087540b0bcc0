"""
Bundling Constants
"""

# Force simulation defaults
ALPHA_MIN: float = 0.001  # Layout ends once alpha cools below this
VELOCITY_DECAY: float = 0.4  # Fraction of velocity lost per tick
JIGGLE_SCALE: float = 1e-6  # Offset applied to exactly coincident nodes

# Force defaults
LINK_DISTANCE: float = 30.0  # Rest length of a link
CHARGE_STRENGTH: float = -30.0  # Negative repels, positive attracts
CHARGE_DISTANCE_MIN: float = 1.0  # Softening distance for the charge force
POSITION_STRENGTH: float = 0.1  # Pull of the x/y positioning forces

# Bundle curve
CURVE_BETA: float = 0.85  # 1 = plain B-spline, 0 = straight line
CURVE_SAMPLES: int = 8  # Points sampled per spline segment
