"""Configuration for the query parser.

Settings are uppercase keys in a :class:`Config`. The ``QUERY_*`` keys are
turned into a validated :class:`DecodeOptions` once, when a
:class:`~wsgiquery.middleware.QueryParser` is built, so a bad setting fails
at startup rather than on every request.
"""
import codecs
import dataclasses
import json as _json
import os
from typing import Optional

from wsgiquery.datastructures import DUPLICATE_POLICIES

#: Default configuration values.
DEFAULT_CONFIG = {
    "DEBUG": False,
    "QUERY_STRICT": True,
    "QUERY_DUPLICATES": "last",
    "QUERY_SEPARATOR": "&",
    "QUERY_CHARSET": "utf-8",
    "QUERY_MAX_PARAMS": None,
}


class Config(dict):
    """A dict of uppercase settings in the style of Flask's ``Config``.

    Starts from :data:`DEFAULT_CONFIG` and can be updated from mappings,
    settings classes, files and prefixed environment variables.
    """

    def __init__(self, defaults=None, root_path=None):
        self.root_path = os.fspath(root_path) if root_path else os.getcwd()
        super().__init__(DEFAULT_CONFIG)
        if defaults:
            self.update(defaults)

    def from_mapping(self, mapping=None, **kwargs):
        """Merge ``QUERY_*`` (or any other) settings from a mapping, an
        iterable of pairs, or keyword arguments. Keywords win.
        """
        self.update(mapping or (), **kwargs)
        return True

    def from_object(self, obj):
        """Copy the uppercase attributes of a settings class or module::

            class QuerySettings:
                QUERY_DUPLICATES = "first"

            config.from_object(QuerySettings)
        """
        self.update(
            (name, getattr(obj, name)) for name in dir(obj) if name.isupper()
        )
        return True

    def from_file(self, filename, load, silent=False, text=True):
        """Update config from a file using a custom loader.

        Usage::

            import json
            config.from_file("query.json", load=json.load)

            import tomllib
            config.from_file("query.toml", load=tomllib.load, text=False)

        Returns True on success, False if silent and file not found.
        """
        filename = os.fspath(filename)
        if not os.path.isabs(filename):
            filename = os.path.join(self.root_path, filename)
        try:
            mode = "r" if text else "rb"
            with open(filename, mode) as f:
                obj = load(f)
        except FileNotFoundError:
            if silent:
                return False
            raise OSError(
                f"[Errno 2] Unable to load configuration file"
                f" (No such file or directory): {filename!r}"
            )
        return self.from_mapping(obj)

    def from_prefixed_env(self, prefix="WSGIQUERY", loads=_json.loads):
        """Update config from environment variables with the given prefix.

        ``WSGIQUERY_QUERY_STRICT=false`` sets ``config["QUERY_STRICT"]`` to
        ``False``. Values go through ``loads``; if that fails the raw
        string is kept.
        """
        prefix = prefix + "_"
        plen = len(prefix)
        for key in sorted(os.environ):
            if not key.startswith(prefix):
                continue
            value = os.environ[key]
            try:
                value = loads(value)
            except ValueError:
                pass
            self[key[plen:]] = value
        return True

    def get_namespace(self, namespace, lowercase=True, trim_namespace=True):
        """Collect the settings under ``namespace``.

        ``get_namespace("QUERY_")`` gives ``{"strict": True, ...}``, the
        keyword form :class:`DecodeOptions` takes.
        """
        start = len(namespace) if trim_namespace else 0
        result = {}
        for key, value in self.items():
            if key.startswith(namespace):
                name = key[start:]
                result[name.lower() if lowercase else name] = value
        return result

    def __repr__(self):
        return f"<{type(self).__name__} {dict.__repr__(self)}>"


@dataclasses.dataclass(frozen=True)
class DecodeOptions:
    """The decoder settings one middleware applies to every request.

    Values are checked on construction and raise ``ValueError``.
    """

    strict: bool = True
    duplicates: str = "last"
    separator: str = "&"
    charset: str = "utf-8"
    max_params: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.strict, bool):
            raise ValueError(f"QUERY_STRICT must be a bool, got {self.strict!r}")
        if self.duplicates not in DUPLICATE_POLICIES:
            raise ValueError(
                f"QUERY_DUPLICATES must be one of {', '.join(DUPLICATE_POLICIES)},"
                f" got {self.duplicates!r}"
            )
        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError(
                f"QUERY_SEPARATOR must be a non-empty string, got {self.separator!r}"
            )
        try:
            codecs.lookup(self.charset)
        except (LookupError, TypeError):
            raise ValueError(f"QUERY_CHARSET {self.charset!r} is not a known codec")
        if self.max_params is not None and (
            isinstance(self.max_params, bool)
            or not isinstance(self.max_params, int)
            or self.max_params < 0
        ):
            raise ValueError(
                f"QUERY_MAX_PARAMS must be a non-negative int or None,"
                f" got {self.max_params!r}"
            )

    @classmethod
    def from_config(cls, config):
        if not isinstance(config, Config):
            config = Config(config)
        ns = config.get_namespace("QUERY_")
        fields = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in ns.items() if k in fields})

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def decode(self, raw):
        from wsgiquery.decoder import decode
        return decode(
            raw,
            strict=self.strict,
            duplicates=self.duplicates,
            separator=self.separator,
            charset=self.charset,
            max_params=self.max_params,
        )
