"""Index artifact persistence.

Two interchangeable forms hold a serialized tree: plain JSON, and the static
script the browser front end loads (``window.DATABASE_INDEX = [...];``).
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path

from .types import IndexTree, tree_from_data, tree_to_data

SCRIPT_GLOBAL = "window.DATABASE_INDEX"
_SCRIPT_ASSIGN_RE = re.compile(r"window\.DATABASE_INDEX\s*=\s*(?P<body>.*?);?\s*$", re.DOTALL)


def render_index_script(tree: IndexTree, generated_at: datetime | None = None) -> str:
    """Render the loadable script form with a generated-by header."""
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    body = json.dumps(tree_to_data(tree), indent=2, ensure_ascii=False)
    return (
        "/**\n"
        f" * Generated {stamp} by `pauker index`.\n"
        " * Do not edit by hand; re-run the indexer instead.\n"
        " */\n"
        f"{SCRIPT_GLOBAL} = {body};\n"
    )


def write_index_artifact(tree: IndexTree, path: Path) -> None:
    """Write ``tree`` as ``.js`` script or JSON depending on the suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".js":
        text = render_index_script(tree)
    else:
        text = json.dumps(tree_to_data(tree), indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")


def parse_index_text(text: str) -> IndexTree:
    """Parse either artifact form. Raises ``ValueError`` on malformed input."""
    match = _SCRIPT_ASSIGN_RE.search(text)
    body = match.group("body") if match is not None else text
    return tree_from_data(json.loads(body))


def read_index_artifact(path: Path) -> IndexTree:
    """Read an artifact written by ``write_index_artifact`` or the old indexer."""
    return parse_index_text(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "SCRIPT_GLOBAL",
    "render_index_script",
    "write_index_artifact",
    "parse_index_text",
    "read_index_artifact",
]
