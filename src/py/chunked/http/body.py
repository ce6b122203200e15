from abc import ABC, abstractmethod
from inspect import getattr_static
from typing import (
	Any,
	Callable,
	Iterable,
	Iterator,
	Mapping,
	Protocol,
	TypeAlias,
	cast,
)

from mypy_extensions import mypyc_attr

# -----------------------------------------------------------------------------
#
# CAPABILITIES
#
# -----------------------------------------------------------------------------
# A body is anything that can be iterated for its chunks. Closing and trailers
# are optional capabilities, which are resolved once when a body is wrapped.

TBodyChunk: TypeAlias = bytes | bytearray | memoryview | str
TTrailers: TypeAlias = Mapping[str, str] | Iterable[tuple[str, str]]


class Closable(Protocol):
	"""A body that holds resources to be released once written."""

	def close(self) -> Any: ...


class WithTrailers(Protocol):
	"""A body that produces trailer fields, only available once the body has
	been fully iterated."""

	@property
	def trailers(self) -> TTrailers: ...


def hasCapability(body: Any, name: str) -> bool:
	"""Tells if the body exposes the given capability, without evaluating it:
	trailers are only defined once the body is exhausted."""
	return getattr_static(body, name, None) is not None


def trailerPairs(trailers: TTrailers | None) -> Iterator[tuple[str, str]]:
	"""Iterates on the `(name, value)` pairs of the given trailer set."""
	if not trailers:
		return
	elif isinstance(trailers, Mapping):
		yield from trailers.items()
	else:
		yield from trailers


# -----------------------------------------------------------------------------
#
# BODIES
#
# -----------------------------------------------------------------------------


@mypyc_attr(allow_interpreted_subclasses=True)
class HTTPBody(ABC):
	"""Base class for response bodies, which are single-pass streams of
	chunks."""

	__slots__ = ()

	@abstractmethod
	def __iter__(self) -> Iterator[TBodyChunk]: ...


class HTTPBodyStream(HTTPBody):
	"""An HTTP body that is generated from a stream, optionally producing
	trailers once the stream is exhausted. Trailers can be given as a mapping,
	as a list of pairs, or as a function called after the last chunk."""

	__slots__ = ["stream", "_trailers", "isExhausted", "isClosed"]

	def __init__(
		self,
		stream: Iterable[TBodyChunk],
		trailers: TTrailers | Callable[[], TTrailers] | None = None,
	):
		super().__init__()
		self.stream: Iterable[TBodyChunk] = stream
		self._trailers: TTrailers | Callable[[], TTrailers] | None = trailers
		self.isExhausted: bool = False
		self.isClosed: bool = False

	def __iter__(self) -> Iterator[TBodyChunk]:
		for chunk in self.stream:
			yield chunk
		# A closed stream ends early, its trailers are not available.
		if not self.isClosed:
			self.isExhausted = True

	@property
	def trailers(self) -> TTrailers:
		if not self.isExhausted or self._trailers is None:
			return ()
		elif callable(self._trailers):
			return self._trailers()
		else:
			return self._trailers

	def close(self) -> None:
		if self.isClosed:
			return
		self.isClosed = True
		if hasCapability(self.stream, "close"):
			cast(Closable, self.stream).close()


# EOF
