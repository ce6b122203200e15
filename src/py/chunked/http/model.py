from typing import Iterable, Iterator, MutableMapping, NamedTuple, cast

from ..utils.io import asBytes
from .body import Closable, TBodyChunk, hasCapability
from .headers import headername
from .status import HTTP_STATUS

# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponseParts(NamedTuple):
	"""The status, headers and body of a response, as exchanged between the
	application and the server. Being a tuple, it compares equal to a plain
	`(status, headers, body)` triple."""

	status: int
	headers: MutableMapping[str, str]
	body: Iterable[TBodyChunk]

	def head(self, protocol: str = "HTTP/1.1") -> bytes:
		"""Serializes the status line and headers as a payload."""
		message: str = HTTP_STATUS.get(self.status, "Unknown Status")
		lines: list[str] = [f"{headername(k)}: {v}" for k, v in self.headers.items()]
		lines.insert(0, f"{protocol} {self.status} {message}")
		lines.append("")
		lines.append("")
		return "\r\n".join(lines).encode("ascii")

	def serialize(self, protocol: str = "HTTP/1.1") -> Iterator[bytes]:
		"""Yields the head and then the body of the response, closing the
		body once written or abandoned."""
		try:
			yield self.head(protocol)
			for chunk in self.body:
				yield asBytes(chunk)
		finally:
			if hasCapability(self.body, "close"):
				cast(Closable, self.body).close()


# EOF
