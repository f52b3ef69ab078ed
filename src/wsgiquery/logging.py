"""Logging helpers.

Records logged with ``extra={"environ": environ}`` are written to that
request's ``wsgi.errors`` stream; everything else goes to stderr.
"""
import io
import logging
import sys


class WSGIErrorsHandler(logging.StreamHandler):
    def __init__(self):
        super().__init__(sys.stderr)

    def _stream_for(self, record):
        environ = getattr(record, "environ", None)
        if environ is not None:
            return environ.get("wsgi.errors") or sys.stderr
        return sys.stderr

    def emit(self, record):
        try:
            msg = self.format(record) + self.terminator
            stream = self._stream_for(record)
            if isinstance(stream, io.BytesIO):
                msg = msg.encode("utf-8")
            stream.write(msg)
            stream.flush()
        except Exception:
            self.handleError(record)


default_handler = WSGIErrorsHandler()
default_handler.setFormatter(
    logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")
)


def has_level_handler(logger):
    """True when some handler from ``logger`` up to where propagation stops
    would emit records at the logger's effective level.
    """
    level = logger.getEffectiveLevel()
    while logger is not None:
        for handler in logger.handlers:
            if handler.level <= level:
                return True
        logger = logger.parent if logger.propagate else None
    return False


def create_logger(name=None, debug=False):
    """Return the logger for ``name`` (default ``"wsgiquery"``).

    In debug mode an unset level becomes DEBUG. :data:`default_handler` is
    attached only when nothing up the chain would emit at that level.
    """
    logger = logging.getLogger(name or "wsgiquery")
    if debug and not logger.level:
        logger.setLevel(logging.DEBUG)
    if not has_level_handler(logger):
        logger.addHandler(default_handler)
    return logger
