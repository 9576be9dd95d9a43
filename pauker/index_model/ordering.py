"""Sibling ordering: folders first, then case-insensitive natural name order."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import replace

from .types import IndexTree, Node

_DIGITS_RE = re.compile(r"(\d+)")


def natural_name_key(name: str) -> tuple[object, ...]:
    """Key comparing digit runs numerically and text case-insensitively.

    ``re.split`` with a capturing group alternates text/digit parts, so keys of
    two names always line up str-with-str and int-with-int.
    """
    parts = _DIGITS_RE.split(name)
    return tuple(int(part) if idx % 2 else part.casefold() for idx, part in enumerate(parts))


def sibling_sort_key(name: str, is_folder: bool) -> tuple[object, ...]:
    # raw name last keeps ordering total for names differing only in case
    return (not is_folder, natural_name_key(name), name)


def sort_siblings(nodes: Iterable[Node]) -> list[Node]:
    return sorted(nodes, key=lambda node: sibling_sort_key(node.name, node.is_folder))


def sort_tree(tree: IndexTree) -> IndexTree:
    """Return a copy of ``tree`` with the sibling ordering applied at every level.

    The flat-listing builder keeps arrival order, so consumers that need a
    stable display order call this before rendering.
    """
    out: list[Node] = []
    for node in sort_siblings(tree):
        if node.is_folder and node.children:
            node = replace(node, children=sort_tree(node.children))
        out.append(node)
    return tuple(out)


__all__ = [
    "natural_name_key",
    "sibling_sort_key",
    "sort_siblings",
    "sort_tree",
]
