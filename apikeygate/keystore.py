"""Known-client key lookup, loaded once at startup from a YAML keys file.

File format::

    clients:
      - id: billing-worker
        key: "opaque key text"

Keys are issued and rotated elsewhere; restart the service to pick up edits.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import yaml

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Client:
    id: str
    key: str


class KeyStore:
    def __init__(self, clients: Iterable[Client] = ()) -> None:
        self._clients = tuple(clients)
        seen: set[str] = set()
        for client in self._clients:
            if not client.key:
                raise ValueError(f"Client {client.id!r} has an empty key")
            if client.id in seen:
                raise ValueError(f"Duplicate client id: {client.id!r}")
            seen.add(client.id)

    @classmethod
    def from_yaml(cls, path: Path) -> KeyStore:
        """Raises FileNotFoundError, or ValueError for a malformed document."""
        with open(path) as f:
            doc = yaml.safe_load(f) or {}
        if not isinstance(doc, dict) or not isinstance(doc.get("clients", []), list):
            raise ValueError(f"{path}: expected a mapping with a 'clients' list")

        clients = []
        for i, item in enumerate(doc.get("clients") or []):
            if not (
                isinstance(item, dict)
                and isinstance(item.get("id"), str)
                and isinstance(item.get("key"), str)
            ):
                raise ValueError(f"{path}: clients[{i}] needs string 'id' and 'key'")
            clients.append(Client(id=item["id"], key=item["key"]))

        store = cls(clients)
        log.info("Loaded %d client keys from %s", len(store), path)
        return store

    def lookup(self, key: str) -> Client | None:
        # every key is compared so timing does not reveal which one matched
        candidate = key.encode()
        match = None
        for client in self._clients:
            if hmac.compare_digest(client.key.encode(), candidate):
                match = client
        return match

    def __len__(self) -> int:
        return len(self._clients)
