from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Mapping, MutableMapping, cast

from ..utils.codec import ChunkedEncoder
from ..utils.io import asBytes
from ..utils.logging import debug, exception, logged, warning
from .body import (
	Closable,
	HTTPBody,
	TBodyChunk,
	WithTrailers,
	hasCapability,
	trailerPairs,
)
from .headers import delHeader, hasHeader, setHeader
from .model import HTTPResponseParts
from .status import STATUS_WITH_NO_ENTITY_BODY

# --
# == Chunked transfer-coding
#
# Applies the chunked transfer-coding to responses that don't declare their
# length, so that they can be streamed over a persistent HTTP/1.1
# connection.
#
# SEE: https://httpwg.org/specs/rfc9112.html#chunked.encoding

# Pre-HTTP/1.0 (informally "HTTP/0.9") requests did not have a version, and
# neither HTTP/1.0 nor HTTP/0.9 know about transfer-codings.
UNCHUNKABLE_PROTOCOLS: frozenset[str] = frozenset(("HTTP/1.0", "HTTP/0.9"))

TApplication = Callable[
	[Any], tuple[int, MutableMapping[str, str], Iterable[TBodyChunk]]
]


class TrailerMode(Enum):
	"""Tells if a chunked body emits trailer fields after its last chunk."""

	Off = 0
	Trailers = 1


class ChunkedState(Enum):
	"""The states of a chunked body, which only ever move forward."""

	Pending = 0
	Streaming = 1
	Terminated = 2
	Trailers = 3
	Complete = 4
	Closed = 10


# -----------------------------------------------------------------------------
#
# BODY
#
# -----------------------------------------------------------------------------


class ChunkedBody(HTTPBody):
	"""Wraps a body so that each of its non-empty chunks is framed as a chunk,
	followed by the last chunk, the trailers (in `TrailerMode.Trailers`)
	and the final line."""

	__slots__ = ["body", "mode", "state", "encoder", "_close", "_trailers"]

	def __init__(
		self, body: Iterable[TBodyChunk], mode: TrailerMode = TrailerMode.Off
	):
		super().__init__()
		self.body: Iterable[TBodyChunk] = body
		self.mode: TrailerMode = mode
		self.state: ChunkedState = ChunkedState.Pending
		self.encoder: ChunkedEncoder = ChunkedEncoder()
		self._close: Callable[[], Any] | None = (
			cast(Closable, body).close if hasCapability(body, "close") else None
		)
		self._trailers: WithTrailers | None = None
		if mode is TrailerMode.Trailers:
			if hasCapability(body, "trailers"):
				self._trailers = cast(WithTrailers, body)
			else:
				warning(
					"Trailer declared but body has no trailers",
					Body=type(body).__name__,
				)

	def _advance(self, state: ChunkedState) -> bool:
		# A closed body stays closed, and must not look complete.
		if self.state is ChunkedState.Closed:
			return False
		self.state = state
		return True

	def __iter__(self) -> Iterator[bytes]:
		if self.state is not ChunkedState.Pending:
			raise RuntimeError(
				f"Chunked body can only be iterated once, it is: {self.state.name}"
			)
		self.state = ChunkedState.Streaming
		encoder: ChunkedEncoder = self.encoder
		for chunk in self.body:
			if self.state is ChunkedState.Closed:
				return
			frame: bytes | None = encoder.feed(asBytes(chunk))
			if frame:
				yield frame
		if not self._advance(ChunkedState.Terminated):
			return
		yield encoder.flush()
		if self._trailers is not None:
			if not self._advance(ChunkedState.Trailers):
				return
			for name, value in trailerPairs(self._trailers.trailers):
				yield encoder.trailer(name, value)
		if not self._advance(ChunkedState.Complete):
			return
		yield encoder.end()

	def close(self) -> None:
		"""Closes the wrapped body at most once, whether it was fully
		iterated or not."""
		if self.state is ChunkedState.Closed:
			return
		self.state = ChunkedState.Closed
		if self._close:
			self._close()


# -----------------------------------------------------------------------------
#
# DECISION
#
# -----------------------------------------------------------------------------


def chunkable(protocol: str | None) -> bool:
	"""Tells if the given request protocol supports the chunked
	transfer-coding. A missing protocol is HTTP/0.9, and any protocol that
	is not known to be older than HTTP/1.1 is assumed to support it."""
	return protocol is not None and protocol not in UNCHUNKABLE_PROTOCOLS


def chunked(
	status: int,
	headers: MutableMapping[str, str],
	body: Iterable[TBodyChunk],
	protocol: str | None,
) -> HTTPResponseParts:
	"""Applies the chunked transfer-coding to the given response when the
	protocol supports it, the status allows a body and the headers don't
	declare a length or transfer-coding already.

	The `headers` are updated in place and returned as part of the result,
	the `body` is wrapped, never modified. When the encoding does not apply,
	the response is returned as-is."""
	if (
		not chunkable(protocol)
		or int(status) in STATUS_WITH_NO_ENTITY_BODY
		or hasHeader(headers, "Content-Length")
		or hasHeader(headers, "Transfer-Encoding")
	):
		logged(debug) and debug(
			"Chunked encoding skipped", Protocol=protocol, Status=status
		)
		return HTTPResponseParts(status, headers, body)
	delHeader(headers, "Content-Length")
	setHeader(headers, "Transfer-Encoding", "chunked")
	mode: TrailerMode = (
		TrailerMode.Trailers if hasHeader(headers, "Trailer") else TrailerMode.Off
	)
	logged(debug) and debug(
		"Chunked encoding applied",
		Protocol=protocol,
		Status=status,
		Trailers=mode is TrailerMode.Trailers,
	)
	return HTTPResponseParts(status, headers, ChunkedBody(body, mode))


# -----------------------------------------------------------------------------
#
# MIDDLEWARE
#
# -----------------------------------------------------------------------------


def protocolOf(request: Any) -> str | None:
	"""Returns the protocol of the given request, which is either an object
	with a `protocol` attribute or an environ-like mapping."""
	if isinstance(request, Mapping):
		return request.get("SERVER_PROTOCOL")
	else:
		return getattr(request, "protocol", None)


class Chunked:
	"""Middleware that applies the chunked transfer-coding to the responses
	of the wrapped application that don't declare their length."""

	__slots__ = ["app"]

	def __init__(self, app: TApplication):
		self.app: TApplication = app

	def __call__(self, request: Any) -> HTTPResponseParts:
		try:
			status, headers, body = self.app(request)
		except Exception as e:
			raise exception(e, "Application failed to respond")
		return chunked(status, headers, body, protocolOf(request))


# EOF
