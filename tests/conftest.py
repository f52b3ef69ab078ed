"""Shared test fixtures for wsgiquery."""
import io


def make_environ(method="GET", path="/", query_string="", headers=None,
                 host="localhost", port=80, scheme="http", errors=None):
    """Create a minimal WSGI environ dict for testing.

    ``query_string`` may be ``bytes``; it is stored the way a PEP 3333
    server would, as a latin-1 decoded ``str``.
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query_string,
        "SERVER_NAME": host,
        "SERVER_PORT": str(port),
        "HTTP_HOST": f"{host}:{port}" if port != 80 else host,
        "wsgi.version": (1, 0),
        "wsgi.url_scheme": scheme,
        "wsgi.input": io.BytesIO(b""),
        "wsgi.errors": errors if errors is not None else io.StringIO(),
        "wsgi.multithread": False,
        "wsgi.multiprocess": False,
        "wsgi.run_once": False,
        "SCRIPT_NAME": "",
    }
    if headers:
        for key, value in headers.items():
            environ[f"HTTP_{key.upper().replace('-', '_')}"] = value
    return environ
