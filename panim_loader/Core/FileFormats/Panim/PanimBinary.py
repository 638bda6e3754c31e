import logging

from ...Errors import InvalidFrameRangeError
from ...serialization.Serializable import Serializable

logger = logging.getLogger(__name__)


class PanimBinary(Serializable):
    """
    A class to read Properties Animation (panim) files. These files are split into two main sections:
        1. The header, which gives a packed semver version and the frame rate shared by every animation in the file.
        2. A list of animation records, running until the end of the file. There is no record count in the header.

    Each animation record is self-describing; see AnimationBinary.

    Completion status
    ------
    (o) PanimBinary can successfully parse all panim files with version 0.2.x.
    (o) PanimBinary can fully interpret all data in panim files, other than the reserved bytes of each record.
    (x) PanimBinary cannot write data to panim files.
    """
    def __init__(self):
        super().__init__()

        self.version = None
        self.fps = None
        self.animations = []

    def read_write(self, rw):
        self.rw_header(rw)
        self.rw_animations(rw)

    def rw_header(self, rw):
        self.version = rw.rw_uint32(self.version)
        self.fps     = rw.rw_float32(self.fps)

    def rw_animations(self, rw):
        self.animations = []
        while not rw.at_eof():
            self.animations.append(rw.rw_obj(AnimationBinary()))
        logger.debug("Read %d animation records", len(self.animations))


class AnimationBinary(Serializable):
    """
    A single animation record. Records are laid out as:
        1. Two zero-terminated UTF-8 strings: the object name and the property name.
        2. The first and last frames of the animation (both inclusive) as uint32s.
        3. A uint8 tag for the kind of value stored.
        4. 32 reserved bytes.
        5. One float32 per frame in [frame_start, frame_end].
    """
    RESERVED_BYTES = 32

    def __init__(self):
        super().__init__()

        self.object_name   = None
        self.property_name = None
        self.frame_start   = None
        self.frame_end     = None
        self.typ           = None

        self.values = None

    def read_write(self, rw):
        self.rw_header(rw)
        self.rw_values(rw)

    def rw_header(self, rw):
        self.object_name   = rw.rw_cstr(self.object_name)
        self.property_name = rw.rw_cstr(self.property_name)
        self.frame_start   = rw.rw_uint32(self.frame_start)
        self.frame_end     = rw.rw_uint32(self.frame_end)
        self.typ           = rw.rw_uint8(self.typ)
        rw.rw_skip(self.RESERVED_BYTES)

    def rw_values(self, rw):
        if self.frame_end < self.frame_start:
            raise rw.make_error(InvalidFrameRangeError,
                                f"Animation '{self.object_name}.{self.property_name}' ends on frame {self.frame_end}, "
                                f"before its start frame {self.frame_start}",
                                "frame_range", rw.tell())
        self.values = rw.rw_float32s(self.values, self.value_count)
        logger.debug("Read animation '%s.%s' over frames %d-%d",
                     self.object_name, self.property_name, self.frame_start, self.frame_end)

    @property
    def value_count(self):
        return self.frame_end - self.frame_start + 1
