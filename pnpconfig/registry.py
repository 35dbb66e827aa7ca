# pnpconfig/registry.py
"""
Identity registry for catalog entities.

Entities are keyed by the upper-cased form of their id, so identifiers
that differ only in case collide. Iteration follows insertion order; a
replaced or renamed entity keeps its original position.
"""

import logging
from typing import Dict, Generic, Iterator, List, Optional, Protocol, TypeVar

from .errors import IdentifierConflict

logger = logging.getLogger(__name__)


class Identified(Protocol):
    id: str


E = TypeVar("E", bound=Identified)


def normalize_id(identifier: str) -> str:
    """Registry key for an identifier."""
    return identifier.upper()


class IdentityRegistry(Generic[E]):
    """
    Case-insensitive, order-preserving mapping of id -> entity.

    Identifier changes must go through rename() so the key stays in step
    with the entity's id.
    """

    def __init__(self, kind: str = "entity"):
        self.kind = kind
        self._entities: Dict[str, E] = {}

    def put(self, entity: E) -> E:
        """Insert or replace an entity under its normalized id."""
        key = normalize_id(entity.id)
        existing = self._entities.get(key)
        if existing is not None and existing is not entity:
            logger.debug(f"Replacing {self.kind} {existing.id} with {entity.id}")
        self._entities[key] = entity
        return entity

    def get(self, identifier: str) -> Optional[E]:
        """Get an entity by id, or None."""
        return self._entities.get(normalize_id(identifier))

    def rename(self, old_id: str, new_id: str) -> E:
        """
        Change an entity's id and re-key it.

        Args:
            old_id: Current id of the entity
            new_id: New id

        Returns:
            The renamed entity

        Raises:
            KeyError: No entity has old_id
            IdentifierConflict: new_id belongs to a different entity
        """
        old_key = normalize_id(old_id)
        new_key = normalize_id(new_id)
        entity = self._entities.get(old_key)
        if entity is None:
            raise KeyError(f"{self.kind.capitalize()} {old_id} not found")
        other = self._entities.get(new_key)
        if other is not None and other is not entity:
            raise IdentifierConflict(new_id)

        entity.id = new_id
        # Rebuild rather than pop/insert so the entity keeps its position.
        self._entities = {
            (new_key if key == old_key else key): value
            for key, value in self._entities.items()
        }
        logger.debug(f"Renamed {self.kind} {old_id} -> {new_id}")
        return entity

    def keys(self) -> List[str]:
        return list(self._entities.keys())

    def values(self) -> List[E]:
        """Snapshot of all entities in insertion order."""
        return list(self._entities.values())

    def __contains__(self, identifier: str) -> bool:
        return normalize_id(identifier) in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entities.values()))
