"""
Exception types raised by the huffpack codec.
"""


class HuffpackError(Exception):
    """Base class for every error raised by the codec."""


class MalformedContainerError(HuffpackError, ValueError):
    """The container bytes do not follow the table/header/payload layout."""


class TruncatedPayloadError(MalformedContainerError):
    """The payload ran out before the declared number of symbols was decoded."""


class InternalConsistencyError(HuffpackError, RuntimeError):
    """
    Raised when the code table and the data disagree, e.g. a byte with no code.
    This points at a bug in the codec rather than at bad input.
    """
