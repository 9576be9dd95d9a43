"""Tests for navigation transitions and state blob parsing."""

from __future__ import annotations

import unittest

from pauker.index_model import ContentKind, Node
from pauker.navigation import (
    DEFAULT_DRAWER_WIDTH,
    NavigationController,
    NavigationState,
    clamp_drawer_width,
)


class NavigationControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.saved: list[dict[str, object]] = []
        self.controller = NavigationController(persist=lambda state: self.saved.append(state.to_dict()))

    def test_every_transition_persists_immediately(self) -> None:
        self.controller.select("database/a.json")
        self.controller.toggle_expand("database")
        self.controller.set_drawer_open(True)
        self.controller.set_drawer_width(500, 1000)

        self.assertEqual(len(self.saved), 4)
        self.assertEqual(self.saved[0]["selectedId"], "database/a.json")
        self.assertEqual(self.saved[1]["openedIds"], ["database"])
        self.assertTrue(self.saved[2]["drawerOpen"])
        self.assertEqual(self.saved[3]["drawerWidth"], 500.0)

    def test_select_accepts_ids_missing_from_the_tree(self) -> None:
        tree = (Node(id="a", name="a", is_folder=True),)
        self.controller.select("a/c")

        self.assertEqual(self.controller.state.selected_id, "a/c")
        self.assertIsNone(self.controller.selected_node(tree))

    def test_toggle_expand_is_a_membership_flip(self) -> None:
        self.assertTrue(self.controller.toggle_expand("x"))
        self.assertTrue(self.controller.is_expanded("x"))
        self.assertFalse(self.controller.toggle_expand("x"))
        self.assertFalse(self.controller.is_expanded("x"))
        self.assertEqual(self.controller.state.opened_ids, [])

    def test_drawer_toggle(self) -> None:
        self.assertTrue(self.controller.toggle_drawer())
        self.assertFalse(self.controller.toggle_drawer())

    def test_drawer_width_is_clamped(self) -> None:
        self.assertEqual(self.controller.set_drawer_width(50, 1000), 200.0)
        self.assertEqual(self.controller.set_drawer_width(950, 1000), 800.0)
        self.assertEqual(self.controller.set_drawer_width(420, 1000), 420.0)

    def test_narrow_viewport_upper_bound_wins(self) -> None:
        self.assertEqual(clamp_drawer_width(300, 200), 160.0)

    def test_expanded_nodes_skip_stale_and_leaf_ids(self) -> None:
        leaf = Node(id="a/x.pdf", name="x.pdf", is_folder=False, kind=ContentKind.PDF)
        tree = (Node(id="a", name="a", is_folder=True, children=(leaf,)),)
        for node_id in ("a", "gone", "a/x.pdf"):
            self.controller.toggle_expand(node_id)

        self.assertEqual([node.id for node in self.controller.expanded_nodes(tree)], ["a"])
        self.assertEqual(self.controller.state.opened_ids, ["a", "gone", "a/x.pdf"])


class NavigationStateParsingTests(unittest.TestCase):
    def test_defaults(self) -> None:
        state = NavigationState()
        self.assertIsNone(state.selected_id)
        self.assertEqual(state.opened_ids, [])
        self.assertFalse(state.drawer_open)
        self.assertEqual(state.drawer_width, DEFAULT_DRAWER_WIDTH)

    def test_round_trip(self) -> None:
        state = NavigationState(selected_id="a/b", opened_ids=["a"], drawer_open=True, drawer_width=412.5)
        self.assertEqual(NavigationState.from_dict(state.to_dict()), state)

    def test_bad_fields_fall_back_independently(self) -> None:
        state = NavigationState.from_dict(
            {
                "selectedId": 7,
                "openedIds": ["a", 3, None, "a", "b"],
                "drawerOpen": "yes",
                "drawerWidth": 512,
            }
        )
        self.assertIsNone(state.selected_id)
        self.assertEqual(state.opened_ids, ["a", "b"])
        self.assertFalse(state.drawer_open)
        self.assertEqual(state.drawer_width, 512.0)

    def test_non_numeric_widths_are_rejected(self) -> None:
        for width in (True, "300", -5, 0, float("inf"), float("nan"), None):
            with self.subTest(width=width):
                state = NavigationState.from_dict({"drawerWidth": width})
                self.assertEqual(state.drawer_width, DEFAULT_DRAWER_WIDTH)

    def test_non_object_blob_gives_defaults(self) -> None:
        for raw in (None, [], "text", 42):
            with self.subTest(raw=raw):
                self.assertEqual(NavigationState.from_dict(raw), NavigationState())


if __name__ == "__main__":
    unittest.main()
