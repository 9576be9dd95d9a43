"""Browsing session: the one context object owning tree, state, and cache.

Activating a ``json`` node loads its payload, checks the header, randomizes
it once, and serves the same randomized instance for the rest of the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .content import ContentLoader
from .index_model import ContentKind, IndexTree, Node, find_by_id, find_path_names
from .navigation import NavigationController
from .shuffle import check_payload_header, randomize_payload

logger = logging.getLogger(__name__)


class PayloadCache:
    """Maps node id to the randomized payload produced for it this session."""

    def __init__(self) -> None:
        self._payloads: dict[str, object] = {}

    def get(self, node_id: str) -> object | None:
        return self._payloads.get(node_id)

    def put(self, node_id: str, payload: object) -> None:
        self._payloads[node_id] = payload

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._payloads

    def __len__(self) -> int:
        return len(self._payloads)

    def clear(self) -> None:
        self._payloads.clear()


@dataclass(frozen=True)
class Activation:
    """What the renderer needs for one activated node.

    ``payload`` is set only for ``json`` leaves; folders and documents render
    from the node itself.
    """

    node: Node
    path_names: list[str]
    payload: object | None = None


class Session:
    def __init__(
        self,
        tree: IndexTree,
        navigation: NavigationController,
        loader: ContentLoader,
    ) -> None:
        self.tree = tree
        self.navigation = navigation
        self.loader = loader
        self.cache = PayloadCache()

    def replace_tree(self, tree: IndexTree) -> None:
        """Swap in a rebuilt tree; navigation state is left as it is."""
        self.tree = tree

    def find(self, node_id: str | None) -> Node | None:
        return find_by_id(self.tree, node_id)

    def payload_for(self, node: Node) -> object:
        """Return the session's randomized payload for a ``json`` node.

        Raises ``ContentLoadError`` or ``PayloadError`` when the payload
        cannot be loaded or lacks a game type; nothing is cached then.
        """
        if node.id in self.cache:
            logger.debug("payload cache hit for %s", node.id)
            return self.cache.get(node.id)
        logger.debug("payload cache miss for %s", node.id)
        raw = self.loader.load(node)
        check_payload_header(raw)
        randomized = randomize_payload(raw)
        self.cache.put(node.id, randomized)
        return randomized

    def activate(self, node_id: str) -> Activation | None:
        """Select ``node_id`` and prepare it for rendering.

        The selection is recorded even when the id does not resolve; the miss
        is reported as ``None`` so the caller can show its fallback view.
        """
        self.navigation.select(node_id)
        node = self.find(node_id)
        if node is None:
            return None
        path_names = find_path_names(self.tree, node_id) or [node.name]
        if node.is_folder or node.kind is not ContentKind.JSON:
            return Activation(node=node, path_names=path_names)
        return Activation(node=node, path_names=path_names, payload=self.payload_for(node))

    def restore(self) -> Activation | None:
        """Re-activate the persisted selection if it still resolves."""
        selected_id = self.navigation.state.selected_id
        if selected_id is None or self.find(selected_id) is None:
            return None
        return self.activate(selected_id)

    def end(self) -> None:
        self.cache.clear()


__all__ = [
    "PayloadCache",
    "Activation",
    "Session",
]
