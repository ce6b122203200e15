"""
Chunked Streaming Example

This serves a streamed response through the `Chunked` middleware, using a bare
AsyncIO server as the transport.
Features shown:
- Chunked transfer-coding of a generator body
- Trailer fields computed once the body has been produced
- Pass-through for HTTP/1.0 clients

Usage:
    python streaming.py

Test with:
    curl --raw http://localhost:8000/
    curl --raw --http1.0 http://localhost:8000/
"""

import asyncio
import hashlib
from typing import NamedTuple

from chunked import Chunked, HTTPBodyStream
from chunked.utils.logging import exception, info


class Request(NamedTuple):
	method: str
	path: str
	protocol: str


def application(request: Request):
	digest = hashlib.sha256()

	def stream():
		for i in range(5):
			line = f"line {i}\n".encode("utf8")
			digest.update(line)
			yield line

	return (
		200,
		{"Content-Type": "text/plain", "Trailer": "X-Checksum"},
		HTTPBodyStream(stream(), lambda: {"X-Checksum": digest.hexdigest()}),
	)


app = Chunked(application)


async def handle_client(reader, writer):
	try:
		line = (await reader.readline()).decode("ascii").strip()
		while (await reader.readline()).strip():
			pass
		method, path, *rest = line.split(" ")
		request = Request(method, path, rest[0] if rest else "HTTP/0.9")
		info("Request received", Method=method, Path=path, Protocol=request.protocol)
		for chunk in app(request).serialize(request.protocol):
			writer.write(chunk)
			await writer.drain()
	except Exception as e:
		exception(e)
	finally:
		writer.close()


async def main():
	server = await asyncio.start_server(handle_client, "localhost", 8000)
	async with server:
		await server.serve_forever()


if __name__ == "__main__":
	asyncio.run(main())

# EOF
