"""Decoding of ``application/x-www-form-urlencoded`` query strings.

Everything here is a pure function of its arguments, so it is safe to call
from any number of threads or tasks at once.
"""
from wsgiquery.datastructures import DUPLICATE_POLICIES, QueryMap
from wsgiquery.exceptions import InvalidEncoding, MalformedEscape, TooManyParameters

_HEXDIGITS = frozenset(b"0123456789abcdefABCDEF")


def _to_bytes(raw, charset, strict=True):
    if raw is None:
        return b""
    if isinstance(raw, str):
        try:
            return raw.encode(charset)
        except UnicodeEncodeError as e:
            if strict:
                raise InvalidEncoding(raw, charset, cause=e)
            return raw.encode(charset, errors="replace")
    return bytes(raw)


def _percent_decode(part, strict, original=None):
    """Resolve ``%XY`` escapes in ``part`` (bytes) and return bytes.

    ``original`` is the undecoded text reported in errors; it must line up
    with ``part`` byte for byte.
    """
    if b"%" not in part:
        return part
    out = bytearray()
    i = 0
    n = len(part)
    while i < n:
        byte = part[i]
        if byte == 0x25:  # %
            if (
                i + 2 < n
                and part[i + 1] in _HEXDIGITS
                and part[i + 2] in _HEXDIGITS
            ):
                out.append(int(part[i + 1:i + 3], 16))
                i += 3
                continue
            if strict:
                raise MalformedEscape((original or part).decode("latin-1"), i)
        out.append(byte)
        i += 1
    return bytes(out)


def unquote_plus(part, strict=True, charset="utf-8"):
    """Decode one query name or value.

    Literal ``+`` becomes a space before escapes are resolved, so ``%2B``
    still yields ``+``.
    """
    original = _to_bytes(part, charset, strict)
    decoded = _percent_decode(original.replace(b"+", b" "), strict, original)
    try:
        return decoded.decode(charset)
    except UnicodeDecodeError as e:
        if strict:
            raise InvalidEncoding(original.decode("latin-1"), charset, cause=e)
        return decoded.decode(charset, errors="replace")


def _iter_segments(raw, separator):
    for segment in raw.split(separator):
        if segment:
            yield segment


def parse_pairs(raw, strict=True, separator="&", charset="utf-8", max_params=None):
    """Decode ``raw`` into an ordered list of ``(key, value)`` pairs.

    Segments without ``=`` get an empty value. Segments whose key decodes
    to the empty string are dropped.
    """
    raw = _to_bytes(raw, charset, strict)
    sep = _to_bytes(separator, charset)
    if not sep:
        raise ValueError("Separator must not be empty")

    segments = list(_iter_segments(raw, sep))
    if max_params is not None and len(segments) > max_params:
        raise TooManyParameters(max_params, len(segments))

    pairs = []
    for segment in segments:
        name, _, value = segment.partition(b"=")
        key = unquote_plus(name, strict, charset)
        if not key:
            continue
        pairs.append((key, unquote_plus(value, strict, charset)))
    return pairs


def decode(raw, *, strict=True, duplicates="last", separator="&",
           charset="utf-8", max_params=None):
    """Decode a raw query string into a :class:`QueryMap`.

    ``raw`` is the part of the request target after ``?``, as ``str`` or
    ``bytes``. With ``strict`` (the default) a malformed ``%`` escape raises
    :class:`~wsgiquery.exceptions.MalformedEscape` and undecodable bytes
    raise :class:`~wsgiquery.exceptions.InvalidEncoding`; otherwise the
    escape is kept literally and bad bytes become U+FFFD.

    >>> decode("a=1&a=2&name=John+Doe")["a"]
    '2'
    """
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicate policy {duplicates!r}")
    pairs = parse_pairs(
        raw,
        strict=strict,
        separator=separator,
        charset=charset,
        max_params=max_params,
    )
    return QueryMap(pairs, duplicates=duplicates)
