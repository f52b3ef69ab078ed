"""wsgiquery -- form-urlencoded query string decoding for WSGI requests."""

__version__ = "0.1.0"

from wsgiquery.config import Config, DecodeOptions
from wsgiquery.datastructures import QueryMap
from wsgiquery.decoder import decode, parse_pairs, unquote_plus
from wsgiquery.exceptions import (
    DecodeError,
    InvalidEncoding,
    MalformedEscape,
    TooManyParameters,
)
from wsgiquery.middleware import QueryParser, query_parser
from wsgiquery.signals import query_populated, query_rejected
from wsgiquery.store import QUERY_KEY, get, is_populated, populate, queries
from wsgiquery.wrappers import Request

__all__ = [
    "__version__",
    "Config",
    "DecodeOptions",
    "QueryMap",
    "decode",
    "parse_pairs",
    "unquote_plus",
    "DecodeError",
    "InvalidEncoding",
    "MalformedEscape",
    "TooManyParameters",
    "QueryParser",
    "query_parser",
    "query_populated",
    "query_rejected",
    "QUERY_KEY",
    "get",
    "is_populated",
    "populate",
    "queries",
    "Request",
]
