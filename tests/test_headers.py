from chunked.http.headers import delHeader, getHeader, hasHeader, headername, setHeader


def test_headername():
	assert headername("content-length") == "Content-Length"
	assert headername("TRANSFER-ENCODING") == "Transfer-Encoding"
	assert headername("trailer") == "Trailer"


def test_lookup_is_case_insensitive():
	headers = {"content-type": "text/plain", "X-Custom": "1"}
	assert hasHeader(headers, "Content-Type")
	assert hasHeader(headers, "x-custom")
	assert not hasHeader(headers, "Content-Length")
	assert getHeader(headers, "CONTENT-TYPE") == "text/plain"
	assert getHeader(headers, "Trailer") is None


def test_presence_with_empty_value():
	headers = {"content-length": ""}
	assert hasHeader(headers, "Content-Length")
	assert getHeader(headers, "Content-Length") == ""


def test_delete_all_casings():
	headers = {"content-length": "1", "Content-Length": "1", "Host": "localhost"}
	assert delHeader(headers, "CONTENT-LENGTH") == 2
	assert headers == {"Host": "localhost"}
	assert delHeader(headers, "Content-Length") == 0


def test_set_replaces_other_casings():
	headers = {"transfer-encoding": "gzip"}
	assert setHeader(headers, "transfer-encoding", "chunked") == "Transfer-Encoding"
	assert headers == {"Transfer-Encoding": "chunked"}


# EOF
