import struct

import numpy as np
import pytest

from panim_loader.Utilities.Bits import pack_semver


def _cstr(value):
    if isinstance(value, str):
        value = value.encode("utf8")
    return value + b"\x00"


def build_record(object_name, property_name, frame_start, frame_end, values, typ=0, reserved=b"\x00"*32):
    out  = _cstr(object_name)
    out += _cstr(property_name)
    out += struct.pack("<IIB", frame_start, frame_end, typ)
    out += reserved
    out += struct.pack(f"<{len(values)}f", *values)
    return out


def build_file(records=(), version=pack_semver(0, 2, 0), fps=24.0):
    return struct.pack("<If", version, fps) + b"".join(records)


@pytest.fixture
def opacity_values():
    """21 values rising linearly from 0 to 1, for frames 80 to 100."""
    return [float(np.float32(i / 20)) for i in range(21)]


@pytest.fixture
def cube_record(opacity_values):
    return build_record("Cube", "opacity", 80, 100, opacity_values)


@pytest.fixture
def single_anim(cube_record):
    return build_file([cube_record], version=2048, fps=24.0)


@pytest.fixture
def panim_file(tmp_path):
    """Writes a panim bytestring to a temporary file and returns the path."""
    def _creator(file_name, data):
        path = tmp_path / file_name
        with open(path, 'wb') as F:
            F.write(data)
        return path
    return _creator
