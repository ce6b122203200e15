from .http.body import HTTPBody, HTTPBodyStream, Closable, WithTrailers  # NOQA: F401
from .http.chunked import (  # NOQA: F401
	Chunked,
	ChunkedBody,
	ChunkedState,
	TrailerMode,
	chunkable,
	chunked,
)
from .http.model import HTTPResponseParts  # NOQA: F401

__version__: str = "1.0.0"

# EOF
