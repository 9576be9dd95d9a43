"""Tests for terminal tree rows and activated-node views."""

from __future__ import annotations

import unittest

from pauker.index_model import ContentKind, Node
from pauker.render import render_activation, render_payload, render_tree_lines
from pauker.session import Activation


def _tree() -> tuple[Node, ...]:
    game = Node(id="db/k/game.json", name="game.json", is_folder=False, kind=ContentKind.JSON)
    doc = Node(id="db/k/doc.pdf", name="doc.pdf", is_folder=False, kind=ContentKind.PDF)
    return (Node(id="db/k", name="k", is_folder=True, children=(game, doc)),)


class RenderTreeTests(unittest.TestCase):
    def test_collapsed_folders_hide_children(self) -> None:
        self.assertEqual(render_tree_lines(_tree(), opened_ids=[]), [" ▸ 📁 k"])

    def test_expanded_folder_shows_children_with_selection_marker(self) -> None:
        lines = render_tree_lines(_tree(), opened_ids=["db/k"], selected_id="db/k/game.json")
        self.assertEqual(lines, [" ▾ 📂 k", ">    🏋 game", "     👁 doc"])

    def test_payload_without_color_is_plain_json(self) -> None:
        self.assertEqual(render_payload({"a": [1]}, no_color=True), '{\n  "a": [\n    1\n  ]\n}\n')

    def test_payload_with_color_contains_ansi_and_survives_unknown_style(self) -> None:
        text = render_payload({"a": "b"}, style="no-such-style")
        self.assertIn("\x1b[", text)
        self.assertIn('"a"', text)

    def test_activation_views(self) -> None:
        folder, = _tree()
        game, doc = folder.children

        folder_view = render_activation(Activation(node=folder, path_names=["k"]), no_color=True)
        self.assertIn("Contents:\n  - game.json\n  - doc.pdf", folder_view)

        doc_view = render_activation(Activation(node=doc, path_names=["k", "doc.pdf"]), no_color=True)
        self.assertIn("k / doc.pdf", doc_view)
        self.assertIn("external viewer", doc_view)

        game_view = render_activation(
            Activation(node=game, path_names=["k", "game.json"], payload={"game_type": "x", "title": "Quiz"}),
            no_color=True,
        )
        self.assertTrue(game_view.startswith("Quiz\nk / game.json\n\n{"))


if __name__ == "__main__":
    unittest.main()
