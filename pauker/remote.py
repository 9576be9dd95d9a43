"""Remote re-indexing from a repository's recursive git-tree listing."""

from __future__ import annotations

import logging

import httpx

from .errors import SourceListingError
from .index_model import IndexTree, ListingEntry, build_listing_index, count_nodes

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


def tree_listing_url(owner: str, repo: str, branch: str) -> str:
    return f"{GITHUB_API_URL}/repos/{owner}/{repo}/git/trees/{branch}"


def fetch_tree_listing(
    owner: str,
    repo: str,
    branch: str,
    *,
    client: httpx.Client,
) -> list[ListingEntry]:
    """Fetch every path of ``branch`` as flat listing entries.

    Raises ``SourceListingError`` for transport failures, non-2xx responses,
    and bodies without a ``tree`` list.
    """
    url = tree_listing_url(owner, repo, branch)
    try:
        response = client.get(url, params={"recursive": "1"}, headers={"Accept": "application/vnd.github+json"})
        response.raise_for_status()
        body = response.json()
    except httpx.HTTPStatusError as exc:
        raise SourceListingError(f"listing {owner}/{repo}@{branch} failed ({exc.response.status_code})") from exc
    except httpx.HTTPError as exc:
        raise SourceListingError(f"listing {owner}/{repo}@{branch} failed: {exc}") from exc
    except ValueError as exc:
        raise SourceListingError(f"listing {owner}/{repo}@{branch} returned invalid JSON") from exc

    rows = body.get("tree") if isinstance(body, dict) else None
    if not isinstance(rows, list):
        raise SourceListingError(f"listing {owner}/{repo}@{branch} has no 'tree' array")
    if isinstance(body, dict) and body.get("truncated"):
        logger.warning("listing for %s/%s@%s was truncated by the server", owner, repo, branch)

    entries: list[ListingEntry] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        path = row.get("path")
        entry_type = row.get("type")
        if isinstance(path, str) and isinstance(entry_type, str):
            entries.append(ListingEntry(path=path, type=entry_type))
    return entries


def reindex_remote(
    owner: str,
    repo: str,
    branch: str,
    root_prefix: str,
    *,
    client: httpx.Client,
) -> IndexTree:
    """Fetch the listing and assemble it into an index tree."""
    entries = fetch_tree_listing(owner, repo, branch, client=client)
    tree = build_listing_index(entries, root_prefix)
    folders, files = count_nodes(tree)
    logger.info("remote index for %s/%s@%s: %d folders, %d files", owner, repo, branch, folders, files)
    return tree


__all__ = [
    "GITHUB_API_URL",
    "tree_listing_url",
    "fetch_tree_listing",
    "reindex_remote",
]
