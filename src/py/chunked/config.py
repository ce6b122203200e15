from os import getenv
from .utils.io import DEFAULT_ENCODING  # NOQA: F401

# Minimum level (`Debug`, `Info`, `Warning`, `Error`, `Exception`) of the
# entries written to stderr.
LOG_LEVEL: str = getenv("CHUNKED_LOG_LEVEL", "Warning")

# EOF
