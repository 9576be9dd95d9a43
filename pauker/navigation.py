"""Navigation primitives: persisted view state and its transitions.

This module intentionally has no UI concerns. State and tree are loosely
coupled: ids that no longer resolve are kept and simply miss on lookup.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from .index_model import Node, find_by_id

DEFAULT_DRAWER_WIDTH = 320.0
DRAWER_MIN_WIDTH = 200.0
DRAWER_MAX_FRACTION = 0.8


@dataclass
class NavigationState:
    """Selection, expanded folders, and drawer geometry."""

    selected_id: str | None = None
    opened_ids: list[str] = field(default_factory=list)
    drawer_open: bool = False
    drawer_width: float = DEFAULT_DRAWER_WIDTH

    def to_dict(self) -> dict[str, object]:
        return {
            "selectedId": self.selected_id,
            "openedIds": list(self.opened_ids),
            "drawerOpen": self.drawer_open,
            "drawerWidth": self.drawer_width,
        }

    @classmethod
    def from_dict(cls, raw: object) -> NavigationState:
        """Merge a stored blob onto defaults, validating each field on its own."""
        state = cls()
        if not isinstance(raw, Mapping):
            return state

        selected = raw.get("selectedId")
        if isinstance(selected, str) and selected:
            state.selected_id = selected

        opened = raw.get("openedIds")
        if isinstance(opened, list):
            seen: set[str] = set()
            for item in opened:
                if isinstance(item, str) and item not in seen:
                    seen.add(item)
                    state.opened_ids.append(item)

        drawer_open = raw.get("drawerOpen")
        if isinstance(drawer_open, bool):
            state.drawer_open = drawer_open

        width = raw.get("drawerWidth")
        if (
            isinstance(width, (int, float))
            and not isinstance(width, bool)
            and math.isfinite(width)
            and width > 0
        ):
            state.drawer_width = float(width)
        return state


def clamp_drawer_width(width: float, viewport_width: float) -> float:
    """Clamp into ``[DRAWER_MIN_WIDTH, DRAWER_MAX_FRACTION * viewport_width]``.

    The minimum is applied first, so a very narrow viewport's maximum wins.
    """
    clamped = max(DRAWER_MIN_WIDTH, float(width))
    return min(clamped, DRAWER_MAX_FRACTION * float(viewport_width))


class NavigationController:
    """Applies transitions to a ``NavigationState`` and persists after each one."""

    def __init__(
        self,
        state: NavigationState | None = None,
        persist: Callable[[NavigationState], None] | None = None,
    ) -> None:
        self.state = state if state is not None else NavigationState()
        self._persist = persist

    def _commit(self) -> None:
        if self._persist is not None:
            self._persist(self.state)

    def select(self, node_id: str | None) -> None:
        """Select ``node_id`` without checking that it resolves."""
        self.state.selected_id = node_id
        self._commit()

    def toggle_expand(self, node_id: str) -> bool:
        """Flip folder expansion and return whether it is now expanded."""
        opened = self.state.opened_ids
        if node_id in opened:
            opened.remove(node_id)
            expanded = False
        else:
            opened.append(node_id)
            expanded = True
        self._commit()
        return expanded

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self.state.opened_ids

    def set_drawer_open(self, is_open: bool) -> None:
        self.state.drawer_open = bool(is_open)
        self._commit()

    def toggle_drawer(self) -> bool:
        self.set_drawer_open(not self.state.drawer_open)
        return self.state.drawer_open

    def set_drawer_width(self, width: float, viewport_width: float) -> float:
        """Store a clamped drawer width and return the value kept."""
        self.state.drawer_width = clamp_drawer_width(width, viewport_width)
        self._commit()
        return self.state.drawer_width

    def selected_node(self, tree: Sequence[Node]) -> Node | None:
        """Resolve the selection against ``tree``; stale ids yield ``None``."""
        return find_by_id(tree, self.state.selected_id)

    def expanded_nodes(self, tree: Sequence[Node]) -> list[Node]:
        """Return folders from ``opened_ids`` that still resolve in ``tree``."""
        nodes: list[Node] = []
        for node_id in self.state.opened_ids:
            node = find_by_id(tree, node_id)
            if node is not None and node.is_folder:
                nodes.append(node)
        return nodes


__all__ = [
    "DEFAULT_DRAWER_WIDTH",
    "DRAWER_MIN_WIDTH",
    "DRAWER_MAX_FRACTION",
    "NavigationState",
    "clamp_drawer_width",
    "NavigationController",
]
