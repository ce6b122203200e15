from abc import ABC, abstractmethod
from typing import Literal
from .io import EOL, asBytes


class BytesTransform(ABC):
	"""An abstract bytes transform."""

	@abstractmethod
	def feed(self, chunk: bytes, more: bool = False) -> bytes | None | Literal[False]:
		"""Feeds bytes to the transform, may return a value."""

	@abstractmethod
	def flush(self) -> bytes | None | Literal[False]:
		"""Ensures that the bytes transform is flushed, for chunked encodings this will produce the last chunk."""


# SEE: https://httpwg.org/specs/rfc9112.html#chunked.encoding
class ChunkedEncoder(BytesTransform):
	"""Frames bytes as the chunks of the chunked transfer-coding, keeping
	track of how many chunks and bytes were framed."""

	TAIL: bytes = b"0" + EOL

	__slots__ = ["chunks", "size"]

	def __init__(self) -> None:
		super().__init__()
		self.chunks: int = 0
		self.size: int = 0

	def feed(self, chunk: bytes, more: bool = False) -> bytes | None:
		"""Returns the frame for the given chunk, or `None` when the chunk
		is empty, as an empty frame would end the body."""
		n: int = len(chunk)
		if not n:
			return None
		self.chunks += 1
		self.size += n
		return b"".join((f"{n:x}".encode("ascii"), EOL, chunk, EOL))

	def flush(self) -> bytes:
		return self.TAIL

	def trailer(self, name: str | bytes, value: str | bytes | int) -> bytes:
		"""Returns the trailer field line for the given name and value."""
		return b"".join(
			(
				asBytes(name),
				b": ",
				asBytes(value if isinstance(value, (str, bytes)) else str(value)),
				EOL,
			)
		)

	def end(self) -> bytes:
		return EOL


# EOF
