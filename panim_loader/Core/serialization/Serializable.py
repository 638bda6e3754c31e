import copy

from .BinaryTargets import Reader, Context


class Serializable:
    """
    Provides an interface for operating on binary data.
    To use, inherit from Serializable, and define a "read_write" method.
    Calling "unpack" on the object will then execute this method,
    with a Reader as the operating object.
    """
    __slots__ = ("context",)

    def __init__(self, context=None):
        if context is None:
            self.context = Context()
        else:
            self.context = copy.deepcopy(context)

    def unpack(self, bytestring, *args, **kwargs):
        rw = Reader.from_bytes(bytestring)
        rw.rw_obj(self, *args, **kwargs)
        return self

    def read_write(self, rw):
        raise NotImplementedError
