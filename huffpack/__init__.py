from .compression import HuffmanCompressor, compress, decompress
from .errors import (
    HuffpackError,
    InternalConsistencyError,
    MalformedContainerError,
    TruncatedPayloadError,
)

__version__ = "0.1.0"
