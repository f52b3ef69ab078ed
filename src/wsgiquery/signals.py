"""Signals sent by the query parser middleware."""
import contextlib


class Signal:
    """A list of receivers called in connection order.

    A receiver connected with a ``sender`` only hears sends from that exact
    sender; one connected without hears everything.
    """

    def __init__(self, name=None):
        self.name = name
        self._receivers = []

    def connect(self, receiver, sender=None):
        self._receivers.append((receiver, sender))
        return receiver

    def disconnect(self, receiver, sender=None):
        self._receivers = [
            (r, s) for r, s in self._receivers if r is not receiver or s is not sender
        ]

    @property
    def receivers(self):
        return [r for r, _ in self._receivers]

    def send(self, sender=None, **kwargs):
        """Call matching receivers; return ``[(receiver, return_value)]``."""
        results = []
        for receiver, expected_sender in list(self._receivers):
            if expected_sender is None or expected_sender is sender:
                results.append((receiver, receiver(sender, **kwargs)))
        return results

    @contextlib.contextmanager
    def connected_to(self, receiver, sender=None):
        self.connect(receiver, sender=sender)
        try:
            yield
        finally:
            self.disconnect(receiver, sender=sender)

    def __repr__(self):
        return f"<Signal {self.name!r}>"


#: Sent as ``(middleware, environ=, queries=)`` after a query string was
#: decoded and stored.
query_populated = Signal("query-populated")
#: Sent as ``(middleware, environ=, error=)`` when a query string failed to
#: decode and the request is about to be rejected.
query_rejected = Signal("query-rejected")

__all__ = [
    "Signal",
    "query_populated",
    "query_rejected",
]
