# pnpconfig/boards.py
"""
Board cache keyed by canonical file path.

Each board file is parsed at most once per cache: any path that resolves
to the same file returns the same Board instance. Referencing a board file
that does not exist yet creates an empty board document there first.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Union

from .gateway import DocumentGateway
from .model import Board

logger = logging.getLogger(__name__)

BoardLoader = Callable[[Path], Board]


@dataclass(frozen=True)
class Found:
    """The board file already existed."""
    board: Board


@dataclass(frozen=True)
class Created:
    """The board file was missing and has been created empty."""
    board: Board


BoardLookupResult = Union[Found, Created]


@dataclass
class CacheStats:
    """Statistics about cache usage."""
    hits: int = 0
    misses: int = 0
    created: int = 0
    hit_rate: float = 0.0

    def record_hit(self):
        self.hits += 1
        self._update_rate()

    def record_miss(self):
        self.misses += 1
        self._update_rate()

    def _update_rate(self):
        total = self.hits + self.misses
        self.hit_rate = self.hits / total if total > 0 else 0.0


def canonical_path(path: Path | str) -> Path:
    """Absolute path with symlinks and relative segments resolved."""
    return Path(path).expanduser().resolve()


class BoardCache:
    """
    Canonical path -> Board mapping.

    Args:
        gateway: Used to create missing board documents
        loader: Reads and resolves a board from a canonical path
    """

    def __init__(self, gateway: DocumentGateway, loader: BoardLoader):
        self.gateway = gateway
        self.loader = loader
        self.stats = CacheStats()
        self._boards: Dict[Path, Board] = {}

    def lookup(self, path: Path | str) -> BoardLookupResult:
        """
        Get the board stored at path, creating the file if it is missing.

        A cached board is returned as Found without touching the filesystem,
        even if its file has since been removed; the next save of a job
        referencing it writes it back.

        Returns:
            Created(board) if the document had to be created, else Found(board)
        """
        board = self._boards.get(canonical_path(path))
        if board is not None:
            self.stats.record_hit()
            logger.debug(f"Loaded {path} from cache")
            return Found(board)

        path = Path(path)
        created = False
        if not path.exists():
            self.gateway.write(Board(name=path.name, file=path), path)
            self.stats.created += 1
            created = True
            logger.info(f"Created empty board {path}")

        path = canonical_path(path)
        self.stats.record_miss()
        board = self.loader(path)
        self._boards[path] = board
        logger.debug(f"Loaded {path} from filesystem")

        return Created(board) if created else Found(board)

    def get(self, path: Path | str) -> Board:
        """Get the board stored at path (see lookup())."""
        return self.lookup(path).board

    def boards(self) -> List[Board]:
        """List all cached boards."""
        return list(self._boards.values())

    def __contains__(self, path: Path | str) -> bool:
        return canonical_path(path) in self._boards

    def __len__(self) -> int:
        return len(self._boards)
