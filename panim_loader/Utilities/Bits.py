MAJOR_SHIFT = 20
MINOR_SHIFT = 10
MAJOR_MASK  = 0xFFF
MINOR_MASK  = 0x3FF
PATCH_MASK  = 0x3FF


def unpack_semver(value):
    """
    Splits a packed version word into (major, minor, patch).

    Bits 31-20 hold the major version, bits 19-10 the minor version, and bits 9-0 the patch version.
    """
    major = (value >> MAJOR_SHIFT) & MAJOR_MASK
    minor = (value >> MINOR_SHIFT) & MINOR_MASK
    patch = value & PATCH_MASK
    return major, minor, patch


def pack_semver(major, minor, patch):
    if major > MAJOR_MASK or minor > MINOR_MASK or patch > PATCH_MASK:
        raise ValueError(f"Version {major}.{minor}.{patch} does not fit in a packed version word.")
    return (major << MAJOR_SHIFT) | (minor << MINOR_SHIFT) | patch
