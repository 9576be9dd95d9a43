"""Domain datatypes for the content index tree.

``Node`` values are immutable snapshots. Their serialized form uses the
camelCase keys of the static index artifact (``isFolder`` etc.).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


class ContentKind(str, Enum):
    """Closed vocabulary of indexable file kinds."""

    JSON = "json"
    PDF = "pdf"
    PPTX = "pptx"


KIND_BY_EXTENSION: dict[str, ContentKind] = {
    ".json": ContentKind.JSON,
    ".pdf": ContentKind.PDF,
    ".pptx": ContentKind.PPTX,
    ".ppt": ContentKind.PPTX,
}


def kind_for_name(name: str) -> ContentKind | None:
    """Classify a file name by extension (case-insensitive), ``None`` if unknown."""
    return KIND_BY_EXTENSION.get(PurePosixPath(name).suffix.lower())


@dataclass(frozen=True)
class Node:
    """One folder or typed file in the content index."""

    id: str
    name: str
    is_folder: bool
    kind: ContentKind | None = None
    children: tuple["Node", ...] = ()
    data: object | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize into the index-artifact JSON shape."""
        out: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "isFolder": self.is_folder,
        }
        if self.is_folder:
            if self.children:
                out["children"] = [child.to_dict() for child in self.children]
            return out
        if self.kind is not None:
            out["kind"] = self.kind.value
        if self.data is not None:
            out["data"] = self.data
        return out


@dataclass(frozen=True)
class ListingEntry:
    """One row of a flat remote listing: ``type`` is ``"tree"`` or ``"blob"``."""

    path: str
    type: str

    @property
    def is_tree(self) -> bool:
        return self.type == "tree"


IndexTree = tuple[Node, ...]


def node_from_dict(raw: Mapping[str, object]) -> Node:
    """Parse one serialized node (recursively).

    Raises ``ValueError`` when required keys are missing or mistyped, or when a
    leaf declares a kind outside the vocabulary.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"index node must be an object, got {type(raw).__name__}")
    node_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(node_id, str) or not node_id:
        raise ValueError("index node is missing a string 'id'")
    if not isinstance(name, str):
        raise ValueError(f"index node {node_id!r} is missing a string 'name'")

    is_folder = raw.get("isFolder") is True
    if is_folder:
        raw_children = raw.get("children") or []
        if not isinstance(raw_children, list):
            raise ValueError(f"children of {node_id!r} must be a list")
        return Node(
            id=node_id,
            name=name,
            is_folder=True,
            children=tuple(node_from_dict(child) for child in raw_children),
        )

    raw_kind = raw.get("kind")
    try:
        kind = ContentKind(raw_kind) if raw_kind is not None else kind_for_name(name)
    except ValueError:
        raise ValueError(f"index node {node_id!r} has unknown kind {raw_kind!r}") from None
    if kind is None:
        raise ValueError(f"index node {node_id!r} has no recognizable kind")
    return Node(id=node_id, name=name, is_folder=False, kind=kind, data=raw.get("data"))


def tree_to_data(tree: IndexTree) -> list[dict[str, object]]:
    return [node.to_dict() for node in tree]


def tree_from_data(raw: object) -> IndexTree:
    """Parse a serialized top-level node list into an ``IndexTree``."""
    if not isinstance(raw, list):
        raise ValueError("index must be a list of nodes")
    return tuple(node_from_dict(item) for item in raw)


def display_label(node: Node) -> str:
    """Return the tree label: file names lose their final extension."""
    if node.is_folder:
        return node.name
    stem, dot, _ext = node.name.rpartition(".")
    return stem if dot and stem else node.name


__all__ = [
    "ContentKind",
    "KIND_BY_EXTENSION",
    "kind_for_name",
    "Node",
    "ListingEntry",
    "IndexTree",
    "node_from_dict",
    "tree_to_data",
    "tree_from_data",
    "display_label",
]
