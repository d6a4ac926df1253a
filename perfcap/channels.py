"""Channel paths and capture defaults.

A baked recording produces two channels per tracked node:

    transform.position   — 3 components (x, y, z)
    transform.rotation   — 4 components (x, y, z, w), w is the scalar part
"""

# Channel paths
POSITION_CHANNEL = "transform.position"
ROTATION_CHANNEL = "transform.rotation"

# Order in which channels are emitted per entity
CHANNELS = (POSITION_CHANNEL, ROTATION_CHANNEL)

# Default simplification tolerance, in units of the projected scalar signal
DEFAULT_EPSILON = 0.001

# Above this quaternion dot product slerp falls back to normalized lerp
SLERP_LINEAR_THRESHOLD = 0.9995
