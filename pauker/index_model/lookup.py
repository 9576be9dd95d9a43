"""Read-only queries over an index tree.

Searches recurse once per nesting level; content hierarchies are a few dozen
levels deep at most, well inside the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .types import Node


def find_by_id(tree: Sequence[Node], node_id: str | None) -> Node | None:
    """Depth-first search returning the first node with ``node_id``."""
    if node_id is None:
        return None
    for node in tree:
        if node.id == node_id:
            return node
        if node.children:
            found = find_by_id(node.children, node_id)
            if found is not None:
                return found
    return None


def find_path_names(
    tree: Sequence[Node],
    node_id: str | None,
    _prefix: tuple[str, ...] = (),
) -> list[str] | None:
    """Return names from the top level down to ``node_id``, or ``None`` on a miss."""
    if node_id is None:
        return None
    for node in tree:
        names = (*_prefix, node.name)
        if node.id == node_id:
            return list(names)
        if node.children:
            found = find_path_names(node.children, node_id, names)
            if found is not None:
                return found
    return None


def iter_nodes(tree: Sequence[Node]) -> Iterator[Node]:
    """Yield every node depth-first, parents before children."""
    for node in tree:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def count_nodes(tree: Sequence[Node]) -> tuple[int, int]:
    """Return ``(folder_count, file_count)``."""
    folders = 0
    files = 0
    for node in iter_nodes(tree):
        if node.is_folder:
            folders += 1
        else:
            files += 1
    return folders, files


__all__ = [
    "find_by_id",
    "find_path_names",
    "iter_nodes",
    "count_nodes",
]
