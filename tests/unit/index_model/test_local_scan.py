"""Tests for the local filesystem index builder.

Covers ordering, pruning, classification, and embedded JSON payloads.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from pauker.errors import SourceListingError
from pauker.index_model import ContentKind, build_local_index, find_by_id


def _write(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class LocalScanTests(unittest.TestCase):
    def test_folders_precede_files_in_natural_case_insensitive_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / "Item 10.pdf")
            _write(database / "item 2.pdf")
            _write(database / "alpha.pdf")
            _write(database / "zeta" / "inner.pdf")
            _write(database / "Beta" / "inner.pdf")

            tree = build_local_index(database)

            self.assertEqual([node.name for node in tree], ["Beta", "zeta", "alpha.pdf", "item 2.pdf", "Item 10.pdf"])
            self.assertEqual([node.is_folder for node in tree], [True, True, False, False, False])

    def test_ids_are_slash_paths_relative_to_database_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / "Kapitel 1" / "quiz.json", '{"game_type": "quick_quiz"}')

            tree = build_local_index(database)

            folder = tree[0]
            self.assertEqual(folder.id, "database/Kapitel 1")
            self.assertEqual(folder.children[0].id, "database/Kapitel 1/quiz.json")
            self.assertEqual(folder.children[0].name, "quiz.json")

    def test_folders_with_only_unrecognized_files_are_pruned(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / "notes" / "readme.txt", "x")
            _write(database / "notes" / "deeper" / "image.png", "x")
            _write(database / "keep" / "slides.PPT", "x")
            _write(database / "loose.md", "x")

            tree = build_local_index(database)

            self.assertEqual([node.id for node in tree], ["database/keep"])
            self.assertEqual(tree[0].children[0].kind, ContentKind.PPTX)

    def test_hidden_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / ".git" / "config.json", "{}")
            _write(database / ".draft.json", "{}")
            _write(database / "visible.pdf")

            tree = build_local_index(database)

            self.assertEqual([node.name for node in tree], ["visible.pdf"])

    def test_json_files_embed_parsed_data(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            payload = {"game_type": "matching_puzzle", "sets": [1, 2, 3]}
            _write(database / "game.JSON", json.dumps(payload))
            _write(database / "doc.pdf")

            tree = build_local_index(database)

            game = find_by_id(tree, "database/game.JSON")
            self.assertIsNotNone(game)
            assert game is not None
            self.assertEqual(game.kind, ContentKind.JSON)
            self.assertEqual(game.data, payload)
            self.assertIsNone(find_by_id(tree, "database/doc.pdf").data)

    def test_unparseable_json_is_kept_without_data_and_logged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / "broken.json", "{not json")

            with self.assertLogs("pauker.index_model.fs", level="WARNING") as logs:
                tree = build_local_index(database)

            self.assertEqual(len(tree), 1)
            self.assertEqual(tree[0].kind, ContentKind.JSON)
            self.assertIsNone(tree[0].data)
            self.assertIn("broken.json", logs.output[0])

    def test_building_twice_yields_equal_trees(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            database = Path(tmp) / "database"
            _write(database / "a" / "b" / "x.json", '{"game_type": "escape_game", "sections": []}')
            _write(database / "a" / "y.pdf")

            self.assertEqual(build_local_index(database), build_local_index(database))

    def test_missing_root_raises_listing_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SourceListingError):
                build_local_index(Path(tmp) / "missing")


if __name__ == "__main__":
    unittest.main()
