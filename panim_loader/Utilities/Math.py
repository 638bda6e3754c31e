import math


def clamp(value, lower, upper):
    return max(lower, min(value, upper))


def clamp_frame(frame, frame_start, frame_end):
    """
    Clamps a fractional frame into [frame_start, frame_end]. NaN maps to frame_start, so the result is always a finite
    number that can be safely floored and converted to an integer.
    """
    if math.isnan(frame):
        return float(frame_start)
    return clamp(float(frame), float(frame_start), float(frame_end))
