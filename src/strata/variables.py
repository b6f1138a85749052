"""Variable storage for rendering contexts.

A variable provider is the mutable key → value environment a template is
evaluated against. The view never mutates a caller's provider when it nests:
sections and partials get either a ``clone()`` or a ``scope_copy()``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

_MISSING = object()


class VariableProvider(Protocol):
    """Interface the view and the node tree need from variable storage."""

    def add(self, key: str, value: Any) -> None: ...

    def get(self, path: str, default: Any = None) -> Any: ...

    def clone(self) -> VariableProvider: ...

    def scope_copy(self, overlay: Mapping[str, Any] | None = None) -> VariableProvider: ...


class StandardVariableProvider:
    """Dict-backed variable provider.

    Lookups accept dotted paths (``user.name``) that walk mappings first and
    attributes second, so both dicts and plain objects can be passed in.

    Example:
        >>> provider = StandardVariableProvider({"user": {"name": "Ada"}})
        >>> provider.get("user.name")
        'Ada'
        >>> scoped = provider.scope_copy({"title": "Hi"})
        >>> scoped.get("title"), provider.get("title")
        ('Hi', None)

    """

    __slots__ = ("_variables",)

    def __init__(self, variables: Mapping[str, Any] | None = None):
        self._variables: dict[str, Any] = dict(variables) if variables else {}

    def add(self, key: str, value: Any) -> None:
        self._variables[key] = value

    def remove(self, key: str) -> None:
        self._variables.pop(key, None)

    def get(self, path: str, default: Any = None) -> Any:
        """Resolve a variable, walking dotted paths into nested values."""
        head, _, rest = path.partition(".")
        value = self._variables.get(head, _MISSING)
        if value is _MISSING:
            return default
        if not rest:
            return value
        for segment in rest.split("."):
            value = _lookup_segment(value, segment)
            if value is _MISSING:
                return default
        return value

    def exists(self, key: str) -> bool:
        return key in self._variables

    def get_all(self) -> dict[str, Any]:
        """Shallow copy of all variables."""
        return dict(self._variables)

    def keys(self) -> list[str]:
        return list(self._variables)

    def clone(self) -> StandardVariableProvider:
        """Independent provider with the same bindings.

        Adding, replacing or removing a key on either provider is never
        visible on the other. Values themselves are shared.
        """
        return StandardVariableProvider(self._variables)

    def scope_copy(self, overlay: Mapping[str, Any] | None = None) -> StandardVariableProvider:
        """New provider seeded from this one, with ``overlay`` applied on top."""
        scoped = StandardVariableProvider(self._variables)
        if overlay:
            scoped._variables.update(overlay)
        return scoped

    def __contains__(self, key: object) -> bool:
        return key in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"StandardVariableProvider({sorted(self._variables)!r})"


def _lookup_segment(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    if isinstance(value, (list, tuple)) and segment.isdigit():
        index = int(segment)
        return value[index] if index < len(value) else _MISSING
    return getattr(value, segment, _MISSING)
