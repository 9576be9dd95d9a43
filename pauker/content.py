"""Payload loaders for ``json`` nodes.

Embedded ``data`` from a local scan is used as-is; otherwise the payload is
read from disk or fetched from a raw-content URL.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

import httpx

from .errors import ContentLoadError
from .index_model import Node

logger = logging.getLogger(__name__)


class ContentLoader(Protocol):
    def load(self, node: Node) -> object: ...


class LocalContentLoader:
    """Reads payloads relative to the folder the node ids are rooted in."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)

    def load(self, node: Node) -> object:
        if node.data is not None:
            return node.data
        path = self.base_dir / node.id
        logger.debug("reading payload %s", path)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise ContentLoadError(f"could not load {node.id}: {exc}") from exc


class RemoteContentLoader:
    """Fetches payloads from ``raw_base_url`` + node id over HTTP."""

    def __init__(self, raw_base_url: str, client: httpx.Client | None = None) -> None:
        self.raw_base_url = raw_base_url.rstrip("/") + "/"
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=httpx.Timeout(30.0), follow_redirects=True)
        return self._client

    def load(self, node: Node) -> object:
        if node.data is not None:
            return node.data
        url = self.raw_base_url + node.id
        logger.debug("fetching payload %s", url)
        try:
            response = self.client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise ContentLoadError(
                f"could not load {node.id} ({exc.response.status_code}) from {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ContentLoadError(f"could not load {node.id} from {url}: {exc}") from exc
        except ValueError as exc:
            raise ContentLoadError(f"{url} did not return JSON: {exc}") from exc

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def raw_content_base_url(owner: str, repo: str, branch: str) -> str:
    return f"https://raw.githubusercontent.com/{owner}/{repo}/{branch}/"


__all__ = [
    "ContentLoader",
    "LocalContentLoader",
    "RemoteContentLoader",
    "raw_content_base_url",
]
