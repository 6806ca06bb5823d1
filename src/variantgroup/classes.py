# -------------------------------------
# class attribute assembly
# -------------------------------------
"""
Fold expanded class names into something a template can use.

    uno("text-(blue lg)", "placeholder:(italic text-(red sm))")
      -> Classes("text-blue text-lg placeholder:italic placeholder:text-red placeholder:text-sm")

Only static strings are accepted: anything that is not a str, or that
still carries template placeholders, is rejected before expansion.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from .expander import expand

_TEMPLATE_MARKERS = ("{{", "{%", "${")


class NonLiteralToken(TypeError):
    pass


def ensure_literal(token: object) -> str:
    """Return token unchanged if it is a static class string, else raise NonLiteralToken."""
    if not isinstance(token, str):
        raise NonLiteralToken(
            f"only string literals can be expanded, got {type(token).__name__}"
        )
    for marker in _TEMPLATE_MARKERS:
        if marker in token:
            raise NonLiteralToken(f"templated class string {token!r} cannot be expanded")
    return token


class Classes:
    """
    Ordered set of class names.

    Strings holding several whitespace separated classes are split;
    a class already present keeps its first position.
    """

    def __init__(self, classes: Iterable[str] = ()):
        self._names: dict[str, None] = {}
        self.extend(classes)

    def push(self, value: str) -> None:
        for name in value.split():
            self._names.setdefault(name, None)

    def extend(self, values: Iterable[str]) -> None:
        if isinstance(values, str):
            values = [values]
        for v in values:
            self.push(v)

    def to_list(self) -> list[str]:
        return list(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Classes):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __str__(self) -> str:
        return " ".join(self._names)

    def __repr__(self) -> str:
        return f"Classes({str(self)!r})"


def uno(*tokens: str) -> Classes:
    """Expand literal class tokens and collect them into a Classes instance."""
    return Classes(expand([ensure_literal(t) for t in tokens]))


def class_attr(*tokens: str) -> str:
    """Space joined class attribute value for the given tokens."""
    return str(uno(*tokens))
