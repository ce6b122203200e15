from typing import Iterator, Mapping, MutableMapping

# NOTE: Headers are kept in plain dictionaries, as the rest of the toolkit
# does, so lookups need to be case-insensitive by hand.


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	if name in headers:
		return headers[name]
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


def headerKeys(headers: Mapping[str, str], name: str) -> Iterator[str]:
	"""Yields the keys of `headers` that match `name`, whatever their casing."""
	key: str = name.lower()
	for k in headers:
		if k.lower() == key:
			yield k


def hasHeader(headers: Mapping[str, str], name: str) -> bool:
	if name in headers:
		return True
	for _ in headerKeys(headers, name):
		return True
	return False


def getHeader(headers: Mapping[str, str], name: str) -> str | None:
	if name in headers:
		return headers[name]
	for k in headerKeys(headers, name):
		return headers[k]
	return None


def setHeader(headers: MutableMapping[str, str], name: str, value: str) -> str:
	"""Sets the header under its normalized name, replacing any existing
	entry with another casing."""
	delHeader(headers, name)
	key: str = headername(name)
	headers[key] = value
	return key


def delHeader(headers: MutableMapping[str, str], name: str) -> int:
	"""Removes all the entries for the given header, returning how many
	were removed."""
	keys: list[str] = list(headerKeys(headers, name))
	for k in keys:
		del headers[k]
	return len(keys)


# EOF
