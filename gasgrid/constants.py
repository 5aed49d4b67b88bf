"""Simulation constants. Empty = kind 0 with density 0; grid indexed [y, x], y grows downward."""

EMPTY_ID = 0
# Density assumed for a kind the registry does not know. Same as Empty, so an
# unknown kind rises like the lightest gas instead of failing the tick.
UNKNOWN_DENSITY = 0
DEFAULT_WIDTH, DEFAULT_HEIGHT = 200, 200
# Row offsets of the two vertical neighbors.
ABOVE, BELOW = -1, 1
