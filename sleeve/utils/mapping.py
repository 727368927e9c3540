# Sleeve Mapping Utilities
# Key filtering and attribute-style access over plain dicts

from collections.abc import Hashable, Mapping
from typing import Any, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def only(mapping: Mapping[K, V], *keys: K) -> dict[K, V]:
    """
    Return a new dict with only the specified keys.

    For example:
        only({"a": 1, "b": 2, "c": 3}, "a", "c")  -> {"a": 1, "c": 3}

    Keys missing from the mapping are skipped.
    """
    return {key: mapping[key] for key in keys if key in mapping}


def exclude(mapping: Mapping[K, V], *keys: K) -> dict[K, V]:
    """
    Return a new dict without the specified keys.

    For example:
        exclude({"a": 1, "b": 2, "c": 3}, "a", "c")  -> {"b": 2}
    """
    dropped = set(keys)
    return {key: value for key, value in mapping.items() if key not in dropped}


class OpenObject(dict):
    """
    Dict with attribute access to its keys.

        obj = OpenObject(name="core")
        obj.name          -> "core"
        obj.version = "1" -> obj["version"] == "1"
        obj.missing       -> None
    """

    def __init__(self, source: Mapping[str, Any] | None = None, **kwargs: Any):
        super().__init__()
        if source:
            self.update(source)
        self.update(kwargs)

    def __getattr__(self, name: str) -> Any:
        # Dunder lookups (copy, pickle) must keep normal attribute semantics
        if name.startswith("__"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"
