"""Command-line front door for pauker.

Builds indexes (local scan or remote re-index), applies navigation
transitions, and prints trees or randomized payloads for a node.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import httpx

from . import config
from .content import ContentLoader, LocalContentLoader, RemoteContentLoader, raw_content_base_url
from .errors import PaukerError
from .index_model import (
    IndexTree,
    build_local_index,
    count_nodes,
    read_index_artifact,
    sort_tree,
    write_index_artifact,
)
from .navigation import NavigationController
from .remote import reindex_remote
from .render import render_activation, render_tree_lines
from .session import Session

logger = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    """argparse type for positive numbers."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _navigation() -> NavigationController:
    return NavigationController(config.load_navigation_state(), persist=config.save_navigation_state)


def _http_client() -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(30.0), follow_redirects=True)


def _load_tree(
    index_path: Path | None,
    client: httpx.Client | None = None,
) -> tuple[IndexTree, ContentLoader]:
    """Pick the index to browse and the loader matching its origin.

    Order: explicit ``--index``, then the remote cache, then ``app_index.js``
    in the working directory. Remote trees arrive in listing order and are
    sorted here.
    """
    if index_path is None:
        cached = config.load_remote_cache()
        if cached is not None:
            remote_tree, source = cached
            base_url = raw_content_base_url(source.owner, source.repo, source.branch)
            return sort_tree(remote_tree), RemoteContentLoader(base_url, client=client)
        index_path = Path.cwd() / config.DEFAULT_INDEX_FILENAME

    try:
        tree = read_index_artifact(index_path)
    except OSError as exc:
        raise SystemExit(f"Index not found: {index_path} ({exc.strerror or exc})") from exc
    except ValueError as exc:
        raise SystemExit(f"Index is corrupt: {index_path}: {exc}") from exc
    return tree, LocalContentLoader(index_path.resolve().parent)


def cmd_index(args: argparse.Namespace, settings: config.AppSettings) -> None:
    database = Path(args.database or settings.database_root)
    if not database.is_dir():
        raise SystemExit(f"Path not found: {database}")
    output = Path(args.output) if args.output else database.resolve().parent / config.DEFAULT_INDEX_FILENAME
    print("Scanning database...", file=sys.stderr)
    tree = build_local_index(database)
    write_index_artifact(tree, output)
    folders, files = count_nodes(tree)
    logger.info("wrote %s (%d folders, %d files)", output, folders, files)
    print(f"Wrote {output}: {folders} folders, {files} files.")


def cmd_reindex(args: argparse.Namespace, settings: config.AppSettings) -> None:
    remote = settings.remote
    owner = args.owner or remote.owner
    repo = args.repo or remote.repo
    if not owner or not repo:
        raise SystemExit("Remote re-index needs --owner and --repo (or remote.owner/remote.repo in config).")
    branch = args.branch or remote.branch
    prefix = args.prefix or remote.prefix
    with _http_client() as client:
        tree = reindex_remote(owner, repo, branch, prefix, client=client)
    source = config.RemoteSettings(owner=owner, repo=repo, branch=branch, prefix=prefix)
    path = config.save_remote_cache(tree, source)
    folders, files = count_nodes(tree)
    print(f"Cached remote index at {path}: {folders} folders, {files} files.")


def cmd_tree(args: argparse.Namespace, settings: config.AppSettings) -> None:
    tree, _loader = _load_tree(args.index)
    navigation = _navigation()
    opened_ids = {node.id for node in navigation.expanded_nodes(tree)}
    print(config.APP_DISPLAY_NAME)
    for line in render_tree_lines(tree, opened_ids, navigation.state.selected_id):
        print(line)


def cmd_select(args: argparse.Namespace, settings: config.AppSettings) -> None:
    _navigation().select(args.id)
    print(f"Selected {args.id}")


def cmd_toggle(args: argparse.Namespace, settings: config.AppSettings) -> None:
    expanded = _navigation().toggle_expand(args.id)
    print(f"{'Expanded' if expanded else 'Collapsed'} {args.id}")


def cmd_drawer(args: argparse.Namespace, settings: config.AppSettings) -> None:
    navigation = _navigation()
    if args.action == "toggle":
        is_open = navigation.toggle_drawer()
    else:
        is_open = args.action == "open"
        navigation.set_drawer_open(is_open)
    print(f"Drawer {'open' if is_open else 'closed'}")


def cmd_width(args: argparse.Namespace, settings: config.AppSettings) -> None:
    kept = _navigation().set_drawer_width(args.px, args.viewport)
    print(f"Drawer width {kept:g}px")


def cmd_open(args: argparse.Namespace, settings: config.AppSettings) -> None:
    with _http_client() as client:
        tree, loader = _load_tree(args.index, client=client)
        session = Session(tree, _navigation(), loader)
        node_id = args.id
        if node_id is None:
            activation = session.restore()
            if activation is None:
                print("Nothing selected. Pick a file from the tree.")
                return
        else:
            activation = session.activate(node_id)
            if activation is None:
                raise SystemExit(f"Not in the index: {node_id}")
    style = args.style or settings.style
    sys.stdout.write(render_activation(activation, style=style, no_color=args.no_color))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pauker",
        description="Index learning-game content and play randomized variants of it.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_index = sub.add_parser("index", help="Scan a local database folder and write the index artifact.")
    p_index.add_argument("database", nargs="?", default=None, help="Database folder (default from config).")
    p_index.add_argument("-o", "--output", default=None, help="Output .js or .json (default: app_index.js).")
    p_index.set_defaults(handler=cmd_index)

    p_reindex = sub.add_parser("reindex", help="Rebuild the index from a remote repository listing.")
    p_reindex.add_argument("--owner", default=None)
    p_reindex.add_argument("--repo", default=None)
    p_reindex.add_argument("--branch", default=None)
    p_reindex.add_argument("--prefix", default=None, help="Root folder prefix, e.g. database/.")
    p_reindex.set_defaults(handler=cmd_reindex)

    p_tree = sub.add_parser("tree", help="Print the index tree with expansion and selection.")
    p_tree.add_argument("--index", type=Path, default=None, help="Index artifact to read.")
    p_tree.set_defaults(handler=cmd_tree)

    p_select = sub.add_parser("select", help="Select a node by id.")
    p_select.add_argument("id")
    p_select.set_defaults(handler=cmd_select)

    p_toggle = sub.add_parser("toggle", help="Expand or collapse a folder by id.")
    p_toggle.add_argument("id")
    p_toggle.set_defaults(handler=cmd_toggle)

    p_drawer = sub.add_parser("drawer", help="Open, close, or toggle the tree drawer.")
    p_drawer.add_argument("action", choices=("open", "close", "toggle"))
    p_drawer.set_defaults(handler=cmd_drawer)

    p_width = sub.add_parser("width", help="Set the drawer width in pixels.")
    p_width.add_argument("px", type=_positive_float)
    p_width.add_argument("--viewport", type=_positive_float, required=True, help="Current viewport width.")
    p_width.set_defaults(handler=cmd_width)

    p_open = sub.add_parser("open", help="Activate a node and print its randomized payload.")
    p_open.add_argument("id", nargs="?", default=None, help="Node id (default: last selection).")
    p_open.add_argument("--index", type=Path, default=None, help="Index artifact to read.")
    p_open.add_argument("--style", default=None, help="Pygments style name.")
    p_open.add_argument("--no-color", action="store_true", help="Disable color output.")
    p_open.set_defaults(handler=cmd_open)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one subcommand."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    settings = config.load_settings()
    try:
        args.handler(args, settings)
    except PaukerError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
