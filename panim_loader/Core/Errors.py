class DecodeError(Exception):
    """
    Raised when a bytestream does not match the PANIM grammar.

    Attributes
    ------
    offset    -- position of the cursor in the bytestream when the failing rule was attempted.
    rule      -- name of the grammar rule that failed.
    remaining -- hex preview of the first few unconsumed bytes at the point of failure.
    """
    __slots__ = ("msg", "offset", "rule", "remaining")

    def __init__(self, msg, offset=None, rule=None, remaining=""):
        self.msg       = msg
        self.offset    = offset
        self.rule      = rule
        self.remaining = remaining
        super().__init__(self.format_message())

    def format_message(self):
        if self.offset is None:
            return self.msg
        out = f"{self.msg} [rule '{self.rule}' at offset 0x{self.offset:x}]"
        if self.remaining:
            out += f", remaining bytes: {self.remaining}"
        else:
            out += ", no bytes remaining"
        return out


class TruncatedInputError(DecodeError):
    pass


class InvalidUtf8Error(DecodeError):
    pass


class InvalidFrameRangeError(DecodeError):
    pass


class PanimFileError(Exception):
    """Raised when a PANIM file cannot be read from disk. Never raised for malformed contents."""
    __slots__ = ("msg", "path")

    def __init__(self, msg, path):
        self.msg  = msg
        self.path = path
        super().__init__(f"Error opening file '{path}': {msg}")
