"""Handler-facing request wrapper."""
from wsgiquery import store


class Request:
    """A thin wrapper around a WSGI environ.

    It carries no state of its own: decoded queries live in the environ, so
    any number of ``Request`` objects built for the same environ agree.
    """

    def __init__(self, environ):
        self._environ = environ

    @property
    def environ(self):
        return self._environ

    @property
    def method(self):
        return self._environ.get("REQUEST_METHOD", "GET").upper()

    @property
    def path(self):
        script_name = self._environ.get("SCRIPT_NAME", "") or ""
        path = self._environ.get("PATH_INFO", "") or ""
        full_path = script_name.rstrip("/") + path
        if not full_path.startswith("/"):
            full_path = "/" + full_path
        return full_path

    @property
    def query_string(self):
        """The raw query string as handed over by the server."""
        return self._environ.get("QUERY_STRING", "") or ""

    @property
    def url(self):
        environ = self._environ
        scheme = environ.get("wsgi.url_scheme") or "http"
        host = environ.get("HTTP_HOST")
        if not host:
            server_name = environ.get("SERVER_NAME", "localhost")
            server_port = environ.get("SERVER_PORT")
            if server_port and server_port not in ("80", "443"):
                host = f"{server_name}:{server_port}"
            else:
                host = server_name
        qs = self.query_string
        if qs:
            return f"{scheme}://{host}{self.path}?{qs}"
        return f"{scheme}://{host}{self.path}"

    def populate(self, options=None):
        """Decode this request's own query string into its store."""
        return store.populate(self, raw_query_bytes(self._environ), options)

    @property
    def queries(self):
        return store.queries(self)

    args = queries

    def query(self, key, default=None):
        """Return the decoded value for ``key``, or ``default``."""
        return store.get(self, key, default)

    def __repr__(self):
        return f"<{type(self).__name__} {self.url!r} [{self.method}]>"


def raw_query_bytes(environ):
    """Recover the original bytes of ``QUERY_STRING``.

    WSGI servers hand the query over as a latin-1 decoded ``str``.
    """
    qs = environ.get("QUERY_STRING", "") or ""
    if isinstance(qs, bytes):
        return qs
    try:
        return qs.encode("latin-1")
    except UnicodeEncodeError:
        # not PEP 3333 compliant, the server already decoded it as text
        return qs.encode("utf-8")
