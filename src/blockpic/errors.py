class BlockpicError(Exception):
    """Base class for errors raised by blockpic."""


class DecodeError(BlockpicError):
    """Image data is malformed, truncated or in an unrecognised format."""


class UnsupportedFormatError(BlockpicError):
    """The decoded pixel layout cannot be normalised to RGBA."""


class StaleViewError(BlockpicError):
    """An ImageView was read after its image was handed out for mutation."""
