"""Errors raised while decoding a query string."""


class DecodeError(ValueError):
    """Base class for query string decoding failures.

    ``raw`` holds the undecoded name or value the failure occurred in.
    """

    def __init__(self, message, raw=None):
        super().__init__(message)
        self.raw = raw


class MalformedEscape(DecodeError):
    """A ``%`` was not followed by exactly two hex digits."""

    def __init__(self, raw, position):
        super().__init__(
            f"Malformed percent-escape at offset {position} in {raw!r}", raw
        )
        self.position = position


class InvalidEncoding(DecodeError):
    """The decoded bytes are not valid in the configured charset."""

    def __init__(self, raw, charset, cause=None):
        super().__init__(f"Query part {raw!r} is not valid {charset}", raw)
        self.charset = charset
        if cause is not None:
            self.__cause__ = cause


class TooManyParameters(DecodeError):
    def __init__(self, limit, count):
        super().__init__(
            f"Query string has {count} parameters, the limit is {limit}"
        )
        self.limit = limit
        self.count = count


__all__ = [
    "DecodeError",
    "MalformedEscape",
    "InvalidEncoding",
    "TooManyParameters",
]
