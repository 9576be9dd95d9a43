"""Terminal rendering of the index tree and activated payloads.

Tree rows follow the drawer layout: toggle glyph, icon, extension-less label,
indented per level. Children of collapsed folders are not shown.
"""

from __future__ import annotations

import json
from collections.abc import Collection, Sequence

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_all_styles

from .index_model import ContentKind, Node, display_label
from .session import Activation
from .shuffle import payload_title

INDENT = "  "
SELECTED_MARKER = ">"
FALLBACK_STYLE = "monokai"


def _icon(node: Node, expanded: bool) -> str:
    if node.is_folder:
        return "📂" if expanded else "📁"
    return "🏋" if node.kind is ContentKind.JSON else "👁"


def render_tree_lines(
    tree: Sequence[Node],
    opened_ids: Collection[str],
    selected_id: str | None = None,
    level: int = 0,
) -> list[str]:
    """Return one text row per visible node."""
    lines: list[str] = []
    for node in tree:
        expanded = node.is_folder and node.id in opened_ids
        if node.is_folder:
            toggle = "▾" if expanded else "▸"
        else:
            toggle = " "
        marker = SELECTED_MARKER if node.id == selected_id else " "
        lines.append(f"{marker}{INDENT * level}{toggle} {_icon(node, expanded)} {display_label(node)}")
        if expanded and node.children:
            lines.extend(render_tree_lines(node.children, opened_ids, selected_id, level + 1))
    return lines


def normalize_style(style: str) -> str:
    return style if style in set(get_all_styles()) else FALLBACK_STYLE


def render_payload(payload: object, style: str = FALLBACK_STYLE, no_color: bool = False) -> str:
    """Pretty-print ``payload`` as JSON, ANSI-highlighted unless ``no_color``."""
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    if no_color:
        return text
    return highlight(text, JsonLexer(), TerminalFormatter(style=normalize_style(style)))


def render_activation(activation: Activation, style: str = FALLBACK_STYLE, no_color: bool = False) -> str:
    """Render the view for an activated node: header plus body."""
    node = activation.node
    title = payload_title(activation.payload) or node.name
    header = f"{title}\n{' / '.join(activation.path_names)}\n\n"
    if node.is_folder:
        names = [child.name for child in node.children]
        body = "Contents:\n" + ("\n".join(f"  - {name}" for name in names) if names else "  (empty)") + "\n"
        return header + body
    if activation.payload is None:
        return header + f"{node.kind.value if node.kind else 'file'} documents open in an external viewer: {node.id}\n"
    return header + render_payload(activation.payload, style=style, no_color=no_color)


__all__ = [
    "render_tree_lines",
    "normalize_style",
    "render_payload",
    "render_activation",
]
