import io
import struct

from ..Errors import DecodeError, TruncatedInputError, InvalidUtf8Error
from .utils import hex_preview, HEX_PREVIEW_LENGTH


class Context:
    __slots__ = ("endianness")

    def __init__(self):
        self.endianness = "<"


class BinaryTargetBase:
    __slots__ = ("bytestream", "context")

    type_names = {
        'B': "uint8",
        'I': "uint32",
        'f': "float32",
        'x': "reserved",
    }

    ############################
    # Main Behaviour Functions #
    ############################

    def __init__(self, bytestream=None):
        self.bytestream = bytestream
        self.context = Context()

    #######################
    # Interface Functions #
    #######################

    def rw_obj(self, obj, *args, **kwargs):
        previous_context = self.context
        self.context = obj.context
        obj.read_write(self, *args, **kwargs)
        self.context = previous_context
        return obj

    # RW functions
    def rw_uint8   (self, value, endianness=None): return self._rw_single('B', 1, value, endianness)
    def rw_uint32  (self, value, endianness=None): return self._rw_single('I', 4, value, endianness)
    def rw_float32 (self, value, endianness=None): return self._rw_single('f', 4, value, endianness)

    def rw_float32s(self, value, shape, endianness=None): return self._rw_multiple('f', 4, value, shape, endianness)

    ####################################
    # Bytestream Interaction Functions #
    ####################################

    def tell(self):
        return self.bytestream.tell()

    def seek(self, offset, whence=0):
        self.bytestream.seek(offset, whence)

    ##########################
    # Pure Virtual Functions #
    ##########################

    def _rw_single(self, typecode, size, value, endianness=None):
        raise NotImplementedError

    def _rw_multiple(self, typecode, size, value, shape, endianness=None):
        raise NotImplementedError

    def rw_cstr(self, value, encoding='utf8'):
        raise NotImplementedError

    def rw_skip(self, count):
        raise NotImplementedError

    def at_eof(self):
        raise NotImplementedError


class Reader(BinaryTargetBase):
    """
    Reads primitives from an in-memory bytestream. Every read either consumes exactly the requested bytes or raises a
    DecodeError describing the cursor position and the unconsumed bytes at the point of failure.
    """
    CSTR_CHUNK_SIZE = 0x1000

    @classmethod
    def from_bytes(cls, bytestring):
        return cls(io.BytesIO(bytes(bytestring)))

    def _read_exact(self, size, rule):
        start = self.tell()
        data = self.bytestream.read(size)
        if len(data) != size:
            raise self.make_error(TruncatedInputError,
                                  f"Expected {size} bytes, but only {len(data)} remained",
                                  rule, start)
        return data

    def _rw_single(self, typecode, size, value, endianness=None):
        if endianness is None:
            endianness = self.context.endianness
        data = self._read_exact(size, self.type_names[typecode])
        return struct.unpack(endianness + typecode, data)[0]

    def _rw_multiple(self, typecode, size, value, shape, endianness=None):
        if endianness is None:
            endianness = self.context.endianness

        # Check the bytes are present before building the format string, so a corrupt count fails quickly
        data = self._read_exact(size * shape, f"{self.type_names[typecode]}[{shape}]")
        return struct.unpack(f"{endianness}{shape}{typecode}", data)

    def rw_cstr(self, value, encoding='utf8', end_char=b"\x00"):
        start = self.tell()
        out = bytearray()
        while True:
            chunk = self.bytestream.read(self.CSTR_CHUNK_SIZE)
            if not chunk:
                raise self.make_error(TruncatedInputError,
                                      "Reached end of input before string terminator",
                                      "cstr", start)
            end = chunk.find(end_char)
            if end != -1:
                out += chunk[:end]
                break
            out += chunk
        self.seek(start + len(out) + len(end_char))
        try:
            return out.decode(encoding)
        except UnicodeDecodeError as e:
            raise self.make_error(InvalidUtf8Error,
                                  f"String is not valid {encoding}: {e.reason}",
                                  "cstr", start) from e

    def rw_skip(self, count):
        self._read_exact(count, f"{self.type_names['x']}[{count}]")

    def at_eof(self):
        pos = self.tell()
        at_end = self.bytestream.read(1) == b''
        self.seek(pos)
        return at_end

    def make_error(self, error_type, msg, rule, offset):
        """
        Builds a DecodeError with a preview of the bytes remaining from 'offset' onwards. Leaves the cursor at
        'offset'.
        """
        if not issubclass(error_type, DecodeError):
            raise TypeError(f"{error_type} is not a DecodeError")
        self.seek(0, 2)
        remaining_size = self.tell() - offset
        self.seek(offset)
        remaining = hex_preview(self.bytestream.read(HEX_PREVIEW_LENGTH), remaining_size)
        self.seek(offset)
        return error_type(msg, offset, rule, remaining)
