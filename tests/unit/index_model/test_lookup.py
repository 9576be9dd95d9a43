"""Tests for tree lookups, ordering keys, and labels."""

from __future__ import annotations

import unittest

from pauker.index_model import (
    ContentKind,
    Node,
    count_nodes,
    display_label,
    find_by_id,
    find_path_names,
    iter_nodes,
    natural_name_key,
)


def _sample_tree() -> tuple[Node, ...]:
    leaf = Node(id="a/b", name="b.json", is_folder=False, kind=ContentKind.JSON)
    return (
        Node(id="a", name="a", is_folder=True, children=(leaf,)),
        Node(id="c.pdf", name="c.pdf", is_folder=False, kind=ContentKind.PDF),
    )


class LookupTests(unittest.TestCase):
    def test_find_by_id_searches_nested_children(self) -> None:
        tree = _sample_tree()
        self.assertEqual(find_by_id(tree, "a/b").name, "b.json")
        self.assertEqual(find_by_id(tree, "c.pdf").kind, ContentKind.PDF)

    def test_stale_ids_miss_without_raising(self) -> None:
        tree = _sample_tree()
        self.assertIsNone(find_by_id(tree, "a/c"))
        self.assertIsNone(find_by_id(tree, None))
        self.assertIsNone(find_path_names(tree, "a/c"))
        self.assertIsNone(find_by_id((), "a"))

    def test_find_path_names_lists_names_from_top(self) -> None:
        self.assertEqual(find_path_names(_sample_tree(), "a/b"), ["a", "b.json"])
        self.assertEqual(find_path_names(_sample_tree(), "a"), ["a"])

    def test_deep_trees_resolve(self) -> None:
        node = Node(id="leaf", name="leaf.pdf", is_folder=False, kind=ContentKind.PDF)
        for depth in range(60):
            node = Node(id=f"d{depth}", name=f"d{depth}", is_folder=True, children=(node,))
        tree = (node,)

        names = find_path_names(tree, "leaf")
        self.assertIsNotNone(names)
        assert names is not None
        self.assertEqual(len(names), 61)
        self.assertEqual(names[-1], "leaf.pdf")

    def test_iter_and_count_nodes(self) -> None:
        tree = _sample_tree()
        self.assertEqual([node.id for node in iter_nodes(tree)], ["a", "a/b", "c.pdf"])
        self.assertEqual(count_nodes(tree), (1, 2))

    def test_natural_key_orders_numbers_by_value(self) -> None:
        names = ["Item 10", "item 2", "Item 1", "item"]
        self.assertEqual(sorted(names, key=natural_name_key), ["item", "Item 1", "item 2", "Item 10"])

    def test_display_label_drops_last_extension(self) -> None:
        self.assertEqual(display_label(Node(id="x", name="Quiz 1.v2.json", is_folder=False, kind=ContentKind.JSON)), "Quiz 1.v2")
        self.assertEqual(display_label(Node(id="f", name="folder.d", is_folder=True)), "folder.d")


if __name__ == "__main__":
    unittest.main()
