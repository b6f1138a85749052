"""Source loaders for TemplatePaths.

Loaders turn a relative file name (``Blog/Show.html``, ``Default.html``)
into template source. They implement ``get_source(name)`` returning
``(source, filename)`` and raise TemplateNotFoundError when they have
nothing for the name.

Built-in Loaders:
- `FileSystemLoader`: Read from one or more root directories
- `DictLoader`: Serve from an in-memory mapping (tests, embedded views)
- `ChoiceLoader`: Try several loaders in order (overrides over defaults)
- `FunctionLoader`: Wrap a callable

Thread-Safety:
All built-in loaders only read shared state and are safe for concurrent
``get_source()`` calls.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from strata.exceptions import TemplateNotFoundError


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...


class FileSystemLoader:
    """Read sources from root directories, first match wins.

    Example:
            >>> loader = FileSystemLoader(["overrides/Layouts/", "Resources/Layouts/"])
            >>> source, filename = loader.get_source("Default.html")
            >>> filename
            'Resources/Layouts/Default.html'

    Raises:
        TemplateNotFoundError: If no root holds the file

    """

    __slots__ = ("_encoding", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        for base in self._paths:
            path = base / name
            if path.is_file():
                return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"'{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self, suffix: str = ".html") -> list[str]:
        """Relative names of every file ending in ``suffix`` under the roots."""
        names = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob(f"*{suffix}"):
                    names.add(path.relative_to(base).as_posix())
        return sorted(names)


class DictLoader:
    """Serve sources from a mapping of file name → source.

    Example:
            >>> loader = DictLoader({"Default/Index.html": "Hello"})
            >>> loader.get_source("Default/Index.html")
            ('Hello', None)

    Raises:
        TemplateNotFoundError: If the name is not a key; suggests a close
            match when there is one

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            msg = f"'{name}' not found"
            matches = get_close_matches(name, sorted(self._mapping), n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self, suffix: str = "") -> list[str]:
        return sorted(name for name in self._mapping if name.endswith(suffix))


class ChoiceLoader:
    """Try loaders in order and return the first hit.

    Example:
            >>> loader = ChoiceLoader([
            ...     DictLoader({"Card.html": "custom card"}),
            ...     FileSystemLoader("Resources/Partials/"),
            ... ])

    Raises:
        TemplateNotFoundError: If every loader misses

    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: list[Loader]):
        self._loaders = loaders

    def get_source(self, name: str) -> tuple[str, str | None]:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(f"'{name}' not found in any of {len(self._loaders)} loaders")


class FunctionLoader:
    """Wrap a callable returning source, ``(source, filename)`` or ``None``."""

    __slots__ = ("_load_func",)

    def __init__(self, load_func: Callable[[str], str | tuple[str, str | None] | None]):
        self._load_func = load_func

    def get_source(self, name: str) -> tuple[str, str | None]:
        result = self._load_func(name)
        if result is None:
            raise TemplateNotFoundError(f"'{name}' not found")
        if isinstance(result, str):
            return result, "<function>"
        return result
