import numpy as np


def lerp_one(x, y, t):
    """Single-precision linear interpolation from x to y, in the form x + (y - x)*t."""
    x = np.float32(x)
    y = np.float32(y)
    t = np.float32(t)
    return x + (y - x)*t
