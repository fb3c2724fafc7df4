"""Process-wide client constants."""

CLIENT_NAME = "pyexchange"
VERSION = "0.1.0"
USER_AGENT = f"{CLIENT_NAME} {VERSION}"

ACCEPT_ENCODING = "gzip,deflate"
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=utf-8"
DEFAULT_CHARSET = "utf-8"

# Methods that carry data in the request body instead of the query string
BODY_METHODS = frozenset({"POST", "PUT"})

READ_CHUNK_SIZE = 65536
