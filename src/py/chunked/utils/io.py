DEFAULT_ENCODING: str = "utf8"
EOL: bytes = b"\r\n"


def asBytes(value: str | bytes | bytearray | memoryview | None) -> bytes:
	"""Returns the given value as bytes, encoding strings with the default
	encoding and leaving binary payloads untouched."""
	if isinstance(value, bytes):
		return value
	elif isinstance(value, bytearray) or isinstance(value, memoryview):
		return bytes(value)
	elif isinstance(value, str):
		return value.encode(DEFAULT_ENCODING)
	elif value is None:
		return b""
	else:
		raise ValueError(f"Expected bytes or str, got: {value!r}")


# EOF
