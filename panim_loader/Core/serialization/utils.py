HEX_PREVIEW_LENGTH = 16


def hex_preview(bytestring, total_size=None):
    """
    Formats the leading bytes of 'bytestring' as space-separated hex, noting how many further bytes were cut off if
    'total_size' is larger than the preview.
    """
    if total_size is None:
        total_size = len(bytestring)
    preview = ' '.join(f"{b:02x}" for b in bytestring[:HEX_PREVIEW_LENGTH])
    hidden = total_size - min(len(bytestring), HEX_PREVIEW_LENGTH)
    if hidden > 0:
        preview += f" ... (+{hidden} bytes)"
    return preview
