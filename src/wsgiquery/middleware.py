"""WSGI middleware that decodes the query string once per request."""
from werkzeug.exceptions import BadRequest

from wsgiquery import store
from wsgiquery.config import Config, DecodeOptions
from wsgiquery.exceptions import DecodeError
from wsgiquery.logging import create_logger
from wsgiquery.signals import query_populated, query_rejected
from wsgiquery.wrappers import raw_query_bytes


class QueryParser:
    """Wrap a WSGI application so every request reaches it populated.

    The query string is decoded before ``app`` runs and stored in the
    environ, where :class:`~wsgiquery.wrappers.Request` and the functions
    in :mod:`wsgiquery.store` find it. A query string that fails to decode
    is answered with ``400 Bad Request`` and ``app`` is not called.

    Settings come from ``config`` (a mapping of ``QUERY_*`` keys, see
    :data:`~wsgiquery.config.DEFAULT_CONFIG`), then keyword overrides
    matching :class:`~wsgiquery.config.DecodeOptions` fields::

        app = QueryParser(app, strict=False, duplicates="first")
    """

    def __init__(self, app, config=None, **options):
        self.app = app
        self.config = config if isinstance(config, Config) else Config(config)
        self.options = DecodeOptions.from_config(self.config).replace(**options)
        self.logger = create_logger(__name__, debug=self.debug)

    @property
    def debug(self):
        return bool(self.config.get("DEBUG"))

    def populate(self, environ):
        raw = raw_query_bytes(environ)
        queries = store.populate(environ, raw, self.options)
        self.logger.debug(
            "Decoded %d query parameter(s) for %s",
            len(queries),
            environ.get("PATH_INFO", "/"),
            extra={"environ": environ},
        )
        query_populated.send(self, environ=environ, queries=queries)
        return queries

    def reject(self, environ, error):
        self.logger.warning(
            "Rejecting query string %r: %s",
            environ.get("QUERY_STRING", ""),
            error,
            extra={"environ": environ},
        )
        query_rejected.send(self, environ=environ, error=error)
        if self.debug:
            exc = BadRequest(str(error))
        else:
            exc = BadRequest()
        exc.__cause__ = error
        return exc

    def __call__(self, environ, start_response):
        try:
            self.populate(environ)
        except DecodeError as e:
            return self.reject(environ, e)(environ, start_response)
        return self.app(environ, start_response)

    def __repr__(self):
        return f"<{type(self).__name__} {self.app!r}>"


def query_parser(config=None, **options):
    """Decorator form of :class:`QueryParser`::

        @query_parser(strict=False)
        def application(environ, start_response):
            ...
    """

    def decorator(app):
        return QueryParser(app, config, **options)

    return decorator
