"""The decoded query mapping."""
from collections.abc import Mapping

#: Duplicate-key policies understood by :class:`QueryMap`.
DUPLICATE_POLICIES = ("last", "first")


class QueryMap(Mapping):
    """An immutable mapping from parameter name to decoded value.

    Built from ``(key, value)`` pairs in input order. When a key repeats,
    ``duplicates`` decides which value plain lookups see: ``"last"`` (the
    default) or ``"first"``. Every value is kept, so ``getlist`` returns all
    of them in the order they appeared::

        >>> q = QueryMap([("a", "1"), ("b", "2"), ("a", "3")])
        >>> q["a"], q.getlist("a")
        ('3', ['1', '3'])

    A mapping may be passed instead of pairs; list values are expanded.
    """

    __slots__ = ("_lists", "_pairs", "_duplicates")

    def __init__(self, pairs=(), duplicates="last"):
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Unknown duplicate policy {duplicates!r}, expected one of"
                f" {', '.join(DUPLICATE_POLICIES)}"
            )
        if isinstance(pairs, Mapping):
            pairs = _iter_mapping_pairs(pairs)
        pairs = tuple(pairs)
        lists = {}
        for key, value in pairs:
            lists.setdefault(key, []).append(value)
        self._lists = lists
        self._pairs = pairs
        self._duplicates = duplicates

    @property
    def duplicates(self):
        return self._duplicates

    def __getitem__(self, key):
        values = self._lists[key]
        if self._duplicates == "first":
            return values[0]
        return values[-1]

    def __iter__(self):
        return iter(self._lists)

    def __len__(self):
        return len(self._lists)

    def __contains__(self, key):
        return key in self._lists

    def getlist(self, key):
        """Return every value for ``key`` in input order (a new list)."""
        return list(self._lists.get(key, ()))

    def items(self, multi=False):
        if multi:
            return iter(self._pairs)
        return super().items()

    def to_dict(self, flat=True):
        """Return a plain ``dict``; with ``flat=False`` values are lists."""
        if flat:
            return dict(self.items())
        return {key: list(values) for key, values in self._lists.items()}

    def __repr__(self):
        return f"{type(self).__name__}({list(self._pairs)!r})"


def _iter_mapping_pairs(mapping):
    for key, value in mapping.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value


EMPTY = QueryMap()
