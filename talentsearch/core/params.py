"""Loosely-typed request parameters with typed accessors.

Array parameters may be spelled either ``name`` or ``name[]`` (the query
string convention). Both spellings resolve to the same key, and a scalar
stored under an array key reads back as a one-element list.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import parse_qsl

logger = logging.getLogger(__name__)

Scalar = str | int | float | bool

_ARRAY_SUFFIX = "[]"


def _bare(key: str) -> str:
    return key[: -len(_ARRAY_SUFFIX)] if key.endswith(_ARRAY_SUFFIX) else key


class Params:
    """Read-only, string-keyed parameter map.

    Usage::

        params = Params.from_query_string("work_roles[]=DevOps&company_id=6")
        params.strings("work_roles")   # ["DevOps"]
        params.integers("company_id")  # [6]
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Scalar | list[Scalar]] = {}
        for key, value in (values or {}).items():
            name = _bare(key)
            if isinstance(value, (list, tuple)):
                self._values[name] = list(value)
            elif key.endswith(_ARRAY_SUFFIX):
                self._values[name] = [value]
            else:
                self._values[name] = value

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Scalar]]) -> "Params":
        """Build from ordered pairs; repeated ``name[]`` keys accumulate in order."""
        values: dict[str, Any] = {}
        for key, value in pairs:
            if key.endswith(_ARRAY_SUFFIX):
                values.setdefault(key, []).append(value)
            else:
                values[key] = value
        return cls(values)

    @classmethod
    def from_query_string(cls, query: str) -> "Params":
        """Parse a URL query string (``a=1&b[]=x&b[]=y``)."""
        return cls.from_pairs(parse_qsl(query.lstrip("?"), keep_blank_values=True))

    def with_default(self, key: str, value: Scalar | list[Scalar]) -> "Params":
        """Return a copy with ``key`` set to ``value`` unless already present."""
        values: dict[str, Any] = dict(self._values)
        values.setdefault(_bare(key), value)
        return Params(values)

    def __contains__(self, key: str) -> bool:
        return _bare(key) in self._values

    def __repr__(self) -> str:
        return f"Params({self._values!r})"

    def get(self, key: str) -> Scalar | None:
        """Return the scalar stored under ``key``, or None if absent or an array."""
        value = self._values.get(_bare(key))
        if isinstance(value, list):
            return None
        return value

    def get_array(self, key: str) -> list[Scalar]:
        """Return the ordered values under ``key``; empty list if absent."""
        value = self._values.get(_bare(key))
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    # -- typed accessors ----------------------------------------------------

    def text(self, key: str) -> str | None:
        """Return the value under ``key`` only if it is a string."""
        value = self.get(key)
        return value if isinstance(value, str) else None

    def strings(self, key: str) -> list[str]:
        """Return the non-empty string values under ``key``."""
        return [str(v) for v in self.get_array(key) if not isinstance(v, bool) and str(v) != ""]

    def integers(self, key: str) -> list[int]:
        """Return the integer values under ``key``, skipping unparseable ones."""
        result: list[int] = []
        for value in self.get_array(key):
            if isinstance(value, bool):
                logger.debug("Ignoring boolean value for '%s'", key)
                continue
            if isinstance(value, int):
                result.append(value)
                continue
            try:
                result.append(int(str(value).strip()))
            except ValueError:
                logger.debug("Ignoring non-integer value %r for '%s'", value, key)
        return result
