from chunked import ChunkedBody, HTTPBodyStream, TrailerMode, chunkable, chunked


def drain(body) -> bytes:
	return b"".join(body)


# -----------------------------------------------------------------------------
# Protocols
# -----------------------------------------------------------------------------


def test_chunkable_protocols():
	assert chunkable("HTTP/1.1")
	assert chunkable("HTTP/2")
	assert chunkable("SOMETHING/9.9")
	assert not chunkable("HTTP/1.0")
	assert not chunkable("HTTP/0.9")
	assert not chunkable(None)
	assert chunkable("")


def test_empty_protocol_is_chunked():
	res = chunked(200, {}, [b"a"], "")
	assert isinstance(res.body, ChunkedBody)
	assert b"".join(res.body) == b"1\r\na\r\n0\r\n\r\n"


def test_old_protocols_pass_through():
	for protocol in ("HTTP/1.0", "HTTP/0.9", None):
		headers = {"Content-Type": "text/plain"}
		body = [b"ab"]
		res = chunked(200, headers, body, protocol)
		assert res == (200, headers, body)
		assert res.body is body
		assert headers == {"Content-Type": "text/plain"}


# -----------------------------------------------------------------------------
# Statuses
# -----------------------------------------------------------------------------


def test_no_body_statuses_pass_through():
	for status in (100, 101, 199, 204, 304):
		headers: dict[str, str] = {}
		body = [b"ignored"]
		res = chunked(status, headers, body, "HTTP/1.1")
		assert res == (status, headers, body)
		assert headers == {}


def test_no_content_is_untouched():
	headers = {"X-Custom": "1"}
	body = iter([b"whatever"])
	status, res_headers, res_body = chunked(204, headers, body, "HTTP/1.1")
	assert status == 204
	assert res_headers is headers and res_headers == {"X-Custom": "1"}
	assert res_body is body


def test_other_statuses_are_chunked():
	for status in (200, 201, 206, 404, 500):
		res = chunked(status, {}, [b"x"], "HTTP/1.1")
		assert isinstance(res.body, ChunkedBody)


# -----------------------------------------------------------------------------
# Headers
# -----------------------------------------------------------------------------


def test_declared_length_passes_through():
	for name in ("Content-Length", "content-length", "CONTENT-LENGTH"):
		headers = {name: "2"}
		body = [b"ab"]
		res = chunked(200, headers, body, "HTTP/1.1")
		assert res == (200, {name: "2"}, body)


def test_declared_transfer_encoding_passes_through():
	for name in ("Transfer-Encoding", "transfer-encoding"):
		headers = {name: "gzip"}
		body = [b"ab"]
		res = chunked(200, headers, body, "HTTP/1.1")
		assert res == (200, {name: "gzip"}, body)
		assert res.body is body


def test_chunked_headers():
	headers = {"Content-Type": "text/plain"}
	res = chunked(200, headers, [b"ab"], "HTTP/1.1")
	# Headers are updated in place
	assert res.headers is headers
	assert headers == {"Content-Type": "text/plain", "Transfer-Encoding": "chunked"}
	assert not any(_.lower() == "content-length" for _ in headers)


# -----------------------------------------------------------------------------
# Wire format
# -----------------------------------------------------------------------------


def test_chunked_body():
	res = chunked(200, {}, [b"ab", b"", b"cde"], "HTTP/1.1")
	assert drain(res.body) == b"2\r\nab\r\n3\r\ncde\r\n0\r\n\r\n"


def test_chunked_body_one_frame_per_chunk():
	res = chunked(200, {}, [b"ab", b"", b"cde"], "HTTP/1.1")
	assert list(res.body) == [b"2\r\nab\r\n", b"3\r\ncde\r\n", b"0\r\n", b"\r\n"]


def test_chunked_empty_body():
	res = chunked(200, {}, [], "HTTP/1.1")
	assert drain(res.body) == b"0\r\n\r\n"
	res = chunked(200, {}, [b"", b"", b""], "HTTP/1.1")
	assert drain(res.body) == b"0\r\n\r\n"


def test_chunk_size_is_lowercase_hex():
	payload = b"x" * 255
	res = chunked(200, {}, [payload, b"y" * 16], "HTTP/1.1")
	assert drain(res.body) == (
		b"ff\r\n" + payload + b"\r\n" + b"10\r\n" + b"y" * 16 + b"\r\n0\r\n\r\n"
	)


def test_chunk_payload_is_opaque():
	payload = bytes(range(256))
	res = chunked(200, {}, [payload], "HTTP/1.1")
	assert drain(res.body) == b"100\r\n" + payload + b"\r\n0\r\n\r\n"


def test_text_chunks_are_encoded():
	res = chunked(200, {}, ["é"], "HTTP/1.1")
	assert drain(res.body) == b"2\r\n\xc3\xa9\r\n0\r\n\r\n"


# -----------------------------------------------------------------------------
# Trailers
# -----------------------------------------------------------------------------


def test_chunked_trailers():
	body = HTTPBodyStream([b"ab", b"", b"cde"], trailers=[("X", "42")])
	res = chunked(200, {"Trailer": "X"}, body, "HTTP/1.1")
	assert res.body.mode is TrailerMode.Trailers
	assert drain(res.body) == b"2\r\nab\r\n3\r\ncde\r\n0\r\nX: 42\r\n\r\n"


def test_trailer_header_any_case():
	body = HTTPBodyStream([b"a"], trailers={"X-One": "1", "X-Two": "2"})
	res = chunked(200, {"trailer": "X-One, X-Two"}, body, "HTTP/1.1")
	assert drain(res.body) == b"1\r\na\r\n0\r\nX-One: 1\r\nX-Two: 2\r\n\r\n"


def test_trailers_without_trailer_header_are_ignored():
	body = HTTPBodyStream([b"a"], trailers={"X": "1"})
	res = chunked(200, {}, body, "HTTP/1.1")
	assert res.body.mode is TrailerMode.Off
	assert drain(res.body) == b"1\r\na\r\n0\r\n\r\n"


def test_trailer_header_without_trailers():
	res = chunked(200, {"Trailer": "X"}, [b"a"], "HTTP/1.1")
	assert drain(res.body) == b"1\r\na\r\n0\r\n\r\n"


def test_trailers_not_read_before_body_ends():
	class LateTrailers:
		def __init__(self):
			self.isExhausted = False

		def __iter__(self):
			yield b"ab"
			self.isExhausted = True

		@property
		def trailers(self):
			if not self.isExhausted:
				raise RuntimeError("Trailers read before the body ended")
			return [("X", "42")]

	res = chunked(200, {"Trailer": "X"}, LateTrailers(), "HTTP/1.1")
	assert res.body.mode is TrailerMode.Trailers
	assert drain(res.body) == b"2\r\nab\r\n0\r\nX: 42\r\n\r\n"


def test_trailers_computed_after_body():
	produced: list[bytes] = []

	def stream():
		for _ in (b"abc", b"de"):
			produced.append(_)
			yield _

	body = HTTPBodyStream(stream(), lambda: [("X-Size", str(sum(len(_) for _ in produced)))])
	res = chunked(200, {"Trailer": "X-Size"}, body, "HTTP/1.1")
	assert drain(res.body) == b"3\r\nabc\r\n2\r\nde\r\n0\r\nX-Size: 5\r\n\r\n"


# EOF
