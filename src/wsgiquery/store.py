"""Per-request storage of the decoded query string.

The decoded :class:`~wsgiquery.datastructures.QueryMap` lives in the
request's WSGI environ under :data:`QUERY_KEY`, so it is created with the
request and discarded with it. Every function takes the request explicitly,
either as the environ dict itself or as any object with an ``environ``
attribute such as :class:`~wsgiquery.wrappers.Request`.

A request starts out unpopulated. :func:`populate` moves it to populated;
:func:`get` and :func:`queries` can be called in either state and simply
see nothing before population.
"""
from wsgiquery.config import DecodeOptions
from wsgiquery.datastructures import EMPTY

#: The environ key the decoded query map is stored under.
QUERY_KEY = "wsgiquery.query"

_default_options = DecodeOptions()


def _environ_of(request):
    if isinstance(request, dict):
        return request
    environ = getattr(request, "environ", None)
    if environ is None:
        raise TypeError(
            f"Expected a WSGI environ or a request with an environ, got"
            f" {type(request).__name__}"
        )
    return environ


def populate(request, raw_query, options=None):
    """Decode ``raw_query`` and store the result on ``request``.

    Any previously stored map is replaced. Decode errors propagate and
    leave the request as it was.
    """
    if options is None:
        options = _default_options
    queries = options.decode(raw_query)
    _environ_of(request)[QUERY_KEY] = queries
    return queries


def is_populated(request):
    return QUERY_KEY in _environ_of(request)


def queries(request):
    """Return the stored map, or an empty one if ``populate`` never ran."""
    return _environ_of(request).get(QUERY_KEY, EMPTY)


def get(request, key, default=None):
    """Look up one decoded value; ``default`` when absent or unpopulated."""
    return queries(request).get(key, default)
