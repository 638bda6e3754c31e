import enum
import logging
import math

import numpy as np

from .PanimBinary import PanimBinary
from ...Errors import PanimFileError
from ....Utilities.Bits import unpack_semver
from ....Utilities.Interpolation import lerp_one
from ....Utilities.Math import clamp_frame

logger = logging.getLogger(__name__)


class AnimationValueType(enum.IntEnum):
    FLOAT = 0


class Animation:
    """
    An animation for a single property of a single object, sampled once per frame from frame_start to frame_end
    (inclusive).

    Raises ValueError if the number of frame values does not match the frame range.
    """
    __slots__ = ("object_name", "property_name", "frame_start", "frame_end", "typ", "frame_values")

    def __init__(self, object_name, property_name, frame_start, frame_end, frame_values, typ=0):
        self.object_name   = object_name
        self.property_name = property_name
        self.frame_start   = frame_start
        self.frame_end     = frame_end
        self.typ           = typ

        # Take a private copy so the animation never aliases the buffer it was decoded from
        values = np.array(frame_values, dtype=np.float32)
        if len(values) != frame_end - frame_start + 1:
            raise ValueError(f"Animation '{object_name}.{property_name}' over frames {frame_start}-{frame_end} needs "
                             f"{frame_end - frame_start + 1} values, but {len(values)} were given.")
        values.flags.writeable = False
        self.frame_values = values

    @classmethod
    def from_binary(cls, binary):
        return cls(binary.object_name,
                   binary.property_name,
                   binary.frame_start,
                   binary.frame_end,
                   binary.values,
                   binary.typ)

    def __eq__(self, other):
        if not isinstance(other, Animation):
            return NotImplemented
        return self.object_name   == other.object_name   \
           and self.property_name == other.property_name \
           and self.frame_start   == other.frame_start   \
           and self.frame_end     == other.frame_end     \
           and self.typ           == other.typ           \
           and np.array_equal(self.frame_values, other.frame_values)

    def __repr__(self):
        return f"Animation({self.object_name!r}, {self.property_name!r}, frames {self.frame_start}-{self.frame_end})"

    @property
    def value_type(self):
        """The kind of value stored by this animation, or None if the tag is not recognised."""
        try:
            return AnimationValueType(self.typ)
        except ValueError:
            return None

    @property
    def frame_count(self):
        return len(self.frame_values)

    def duration(self, fps):
        """Length of the animation in seconds at the given frame rate. A frame rate of 0 gives an infinite length."""
        if fps == 0:
            return math.inf
        return (self.frame_end - self.frame_start) / fps

    def get_value_at_exact_frame(self, frame):
        return value_at_exact_frame(self, frame)

    def get_interpolated_value_at_frame(self, frame):
        return value_at_frame(self, frame)


class PropertiesAnimation:
    """
    A Properties Animation file containing all the animations for all exported properties of all objects in a scene.
    """
    __slots__ = ("raw_version", "fps", "animations")

    def __init__(self, raw_version, fps, animations=()):
        self.raw_version = raw_version
        self.fps         = fps
        self.animations  = tuple(animations)

    @classmethod
    def from_file(cls, path):
        logger.info("Loading properties animation: %s", path)
        try:
            with open(path, 'rb') as F:
                bytestring = F.read()
        except OSError as e:
            raise PanimFileError(e.strerror or str(e), path) from e
        return cls.from_bytes(bytestring)

    @classmethod
    def from_bytes(cls, bytestring):
        binary = PanimBinary()
        binary.unpack(bytestring)
        return cls.from_binary(binary)

    @classmethod
    def from_binary(cls, binary):
        return cls(binary.version,
                   binary.fps,
                   [Animation.from_binary(anim) for anim in binary.animations])

    def __eq__(self, other):
        if not isinstance(other, PropertiesAnimation):
            return NotImplemented
        return self.raw_version == other.raw_version \
           and self.fps         == other.fps         \
           and self.animations  == other.animations

    def __repr__(self):
        return f"PropertiesAnimation(version={self.version}, fps={self.fps}, {len(self.animations)} animations)"

    @property
    def version(self):
        """Version of the file format as a (major, minor, patch) tuple."""
        return unpack_semver(self.raw_version)

    def find_animation(self, object_name, property_name):
        for animation in self.animations:
            if animation.object_name == object_name and animation.property_name == property_name:
                return animation
        return None

    def get_animation_value_at_time(self, animation, elapsed_time):
        return value_at_time(self, animation, elapsed_time)


def decode(bytestring):
    return PropertiesAnimation.from_bytes(bytestring)


def from_file(path):
    return PropertiesAnimation.from_file(path)


###################
# SAMPLING ENGINE #
###################
def value_at_exact_frame(animation, frame):
    """
    Returns the value of the animation at an integer frame.
    Frames before the start of the animation return the first value, and frames after the end return the last value.
    """
    if frame <= animation.frame_start:
        return float(animation.frame_values[0])
    elif frame >= animation.frame_end:
        return float(animation.frame_values[-1])

    return float(animation.frame_values[frame - animation.frame_start])


def value_at_frame(animation, frame):
    """
    Returns the value of the animation at a possibly-fractional frame, linearly interpolating between the two
    neighbouring integer frames. Out-of-range frames (including NaN and infinities) are clamped to the animation's
    frame range first, so this never fails.
    """
    frame = np.float32(clamp_frame(frame, animation.frame_start, animation.frame_end))
    lower_frame = np.floor(frame)
    fraction = frame - lower_frame

    lower_frame = int(lower_frame)
    upper_frame = lower_frame + 1

    lower_value = value_at_exact_frame(animation, lower_frame)
    upper_value = value_at_exact_frame(animation, upper_frame)

    return float(lerp_one(lower_value, upper_value, fraction))


def value_at_time(document, animation, elapsed_time):
    """Returns the value of the animation 'elapsed_time' seconds into playback at the document's frame rate."""
    with np.errstate(over='ignore', invalid='ignore'):
        frame = np.float32(document.fps) * np.float32(elapsed_time)
    if math.isnan(frame):
        logger.debug("Time %r produced no valid frame for '%s.%s'; using the first frame",
                     elapsed_time, animation.object_name, animation.property_name)
    return value_at_frame(animation, frame)
