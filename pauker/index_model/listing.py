"""Flat path-listing assembly into index trees.

Remote listings arrive as unordered ``{path, type}`` rows. Every ancestor
prefix becomes a node at most once, tracked in a table keyed by full path.
Children keep arrival order; call ``sort_tree`` for display order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .types import IndexTree, ListingEntry, Node, kind_for_name


@dataclass
class _PendingNode:
    """Mutable node used while the listing is still being folded in."""

    id: str
    name: str
    is_folder: bool
    children: list["_PendingNode"] = field(default_factory=list)

    def freeze(self) -> Node | None:
        """Return the immutable node, or ``None`` for a folder left empty."""
        if self.is_folder:
            children = _freeze_all(self.children)
            if not children:
                return None
            return Node(id=self.id, name=self.name, is_folder=True, children=children)
        kind = kind_for_name(self.name)
        if kind is None:
            return None
        return Node(id=self.id, name=self.name, is_folder=False, kind=kind)


def _freeze_all(pending: list[_PendingNode]) -> tuple[Node, ...]:
    frozen = (node.freeze() for node in pending)
    return tuple(node for node in frozen if node is not None)


def coerce_listing_entry(raw: ListingEntry | Mapping[str, object]) -> ListingEntry:
    if isinstance(raw, ListingEntry):
        return raw
    path = raw.get("path")
    entry_type = raw.get("type")
    if not isinstance(path, str) or not isinstance(entry_type, str):
        raise ValueError(f"listing entry needs string 'path' and 'type': {raw!r}")
    return ListingEntry(path=path, type=entry_type)


def normalize_prefix(root_prefix: str) -> str:
    prefix = root_prefix.replace("\\", "/").strip("/")
    return f"{prefix}/" if prefix else ""


def build_listing_index(
    entries: Iterable[ListingEntry | Mapping[str, object]],
    root_prefix: str,
) -> IndexTree:
    """Assemble a tree from flat listing rows under ``root_prefix``.

    Rows outside the prefix (and the prefix directory itself) are skipped, as
    are blobs with an unrecognized extension. Folders with nothing indexable
    underneath are pruned, as in the local builder. No embedded ``data`` is
    ever attached; payloads are fetched on demand.
    """
    prefix = normalize_prefix(root_prefix)
    by_path: dict[str, _PendingNode] = {}
    top_level: list[_PendingNode] = []

    for raw in entries:
        entry = coerce_listing_entry(raw)
        path = entry.path.replace("\\", "/").strip("/")
        if not path.startswith(prefix) or path == prefix.rstrip("/"):
            continue
        segments = [segment for segment in path[len(prefix):].split("/") if segment]
        if not segments:
            continue
        if not entry.is_tree and kind_for_name(segments[-1]) is None:
            continue

        siblings = top_level
        for depth, segment in enumerate(segments):
            is_last = depth == len(segments) - 1
            full_path = prefix + "/".join(segments[: depth + 1])
            wants_folder = entry.is_tree or not is_last
            node = by_path.get(full_path)
            if node is None:
                node = _PendingNode(id=full_path, name=segment, is_folder=wants_folder)
                by_path[full_path] = node
                siblings.append(node)
            elif wants_folder and not node.is_folder:
                node.is_folder = True
            siblings = node.children

    return _freeze_all(top_level)


__all__ = [
    "coerce_listing_entry",
    "normalize_prefix",
    "build_listing_index",
]
