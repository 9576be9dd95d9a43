"""Local filesystem scanning into index trees.

Directories are listed folders-first in natural order, recursed depth-first,
and kept only when something indexable survives underneath. JSON files get
their parsed content embedded so the artifact works without further reads.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import SourceListingError
from .ordering import sibling_sort_key
from .types import ContentKind, IndexTree, Node, kind_for_name

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child row."""

    name: str
    path: Path
    is_dir: bool


def list_directory_children(directory: Path) -> list[DirectoryChild]:
    """List non-hidden children of ``directory`` in sibling order.

    Raises ``SourceListingError`` when the directory cannot be scanned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                if child.name.startswith(HIDDEN_PREFIX):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=child.name, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        raise SourceListingError(f"cannot list {directory}: {exc}") from exc

    children.sort(key=lambda item: sibling_sort_key(item.name, item.is_dir))
    return children


def load_embedded_json(path: Path) -> object | None:
    """Parse a JSON file for embedding; failures are logged and yield ``None``."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("could not read %s: %s", path.name, exc)
        return None


def _node_id(path: Path, id_base: Path) -> str:
    return path.relative_to(id_base).as_posix()


def build_local_index(root: Path, *, id_base: Path | None = None) -> IndexTree:
    """Scan ``root`` recursively into an index tree.

    Node ids are slash-separated paths relative to ``id_base`` (default: the
    parent of ``root``, so ids start with the root folder's name). Files of
    unrecognized type are dropped and folders left empty by that are pruned.
    """
    root = Path(root).absolute()
    base = Path(id_base).absolute() if id_base is not None else root.parent

    def scan(directory: Path) -> tuple[Node, ...]:
        logger.debug("scanning %s", directory)
        nodes: list[Node] = []
        for child in list_directory_children(directory):
            node_id = _node_id(child.path, base)
            if child.is_dir:
                children = scan(child.path)
                if children:
                    nodes.append(Node(id=node_id, name=child.name, is_folder=True, children=children))
                continue

            kind = kind_for_name(child.name)
            if kind is None:
                continue
            data = load_embedded_json(child.path) if kind is ContentKind.JSON else None
            nodes.append(Node(id=node_id, name=child.name, is_folder=False, kind=kind, data=data))
        return tuple(nodes)

    return scan(root)


__all__ = [
    "HIDDEN_PREFIX",
    "DirectoryChild",
    "list_directory_children",
    "load_embedded_json",
    "build_local_index",
]
