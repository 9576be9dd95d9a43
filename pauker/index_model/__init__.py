"""Domain model for the content index plus its two builders.

This package contains non-UI tree primitives:
- node datatypes, the kind vocabulary, and snapshot (de)serialization
- sibling ordering and lookup helpers
- the local filesystem builder and the flat-listing builder
- index artifact read/write helpers
"""

from __future__ import annotations

from .types import (
    ContentKind,
    IndexTree,
    ListingEntry,
    Node,
    display_label,
    kind_for_name,
    node_from_dict,
    tree_from_data,
    tree_to_data,
)
from .ordering import natural_name_key, sibling_sort_key, sort_siblings, sort_tree
from .lookup import count_nodes, find_by_id, find_path_names, iter_nodes
from .fs import DirectoryChild, build_local_index, list_directory_children, load_embedded_json
from .listing import build_listing_index, coerce_listing_entry, normalize_prefix
from .snapshot import parse_index_text, read_index_artifact, render_index_script, write_index_artifact

__all__ = [
    "ContentKind",
    "IndexTree",
    "ListingEntry",
    "Node",
    "display_label",
    "kind_for_name",
    "node_from_dict",
    "tree_from_data",
    "tree_to_data",
    "natural_name_key",
    "sibling_sort_key",
    "sort_siblings",
    "sort_tree",
    "count_nodes",
    "find_by_id",
    "find_path_names",
    "iter_nodes",
    "DirectoryChild",
    "build_local_index",
    "list_directory_children",
    "load_embedded_json",
    "build_listing_index",
    "coerce_listing_entry",
    "normalize_prefix",
    "parse_index_text",
    "read_index_artifact",
    "render_index_script",
    "write_index_artifact",
]
