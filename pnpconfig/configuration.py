# pnpconfig/configuration.py
"""
The configuration facade.

Owns the machine, the package and part registries and the board cache,
and sequences loading and saving:

1. load() reads machine, packages, parts (in that order, parts resolve
   their packages), then lets the machine resolve against the loaded
   catalogs and notifies load listeners.
2. load_job() reads a job and binds each board location to a board from
   the cache, locating board files absolutely or relative to the job.
3. save_job() rewrites board references relative to the job file and
   saves each referenced board, then the job.

Every Configuration instance is independent; nothing is shared between
instances.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .boards import BoardCache, BoardLookupResult
from .errors import BoardFileNotFound, ConfigurationError, PathRelativizationFailure
from .gateway import (
    DocumentGateway,
    MachineDocument,
    PackagesDocument,
    PartsDocument,
    YamlDocumentGateway,
)
from .machine import Machine
from .model import Board, Job, Package, Part
from .paths import relativize
from .registry import IdentityRegistry
from .settings import Settings

logger = logging.getLogger(__name__)

# Load listener type
ConfigurationListener = Callable[["Configuration"], None]


class Configuration:
    """
    In-memory configuration graph and its persistence.

    Args:
        gateway: Document gateway (default YamlDocumentGateway)
        settings: Document locations (default Settings.from_env())
    """

    def __init__(self, gateway: DocumentGateway = None, settings: Settings = None):
        self.gateway = gateway or YamlDocumentGateway()
        self.settings = settings or Settings.from_env()
        self.machine: Optional[Machine] = None
        self._packages: IdentityRegistry[Package] = IdentityRegistry("package")
        self._parts: IdentityRegistry[Part] = IdentityRegistry("part")
        self._boards = BoardCache(self.gateway, self._load_board)
        self._listeners: List[ConfigurationListener] = []
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    @dirty.setter
    def dirty(self, dirty: bool):
        self._dirty = dirty

    @property
    def board_cache(self) -> BoardCache:
        return self._boards

    # Listeners

    def add_listener(self, listener: ConfigurationListener):
        """Register a callback run after each successful load()."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ConfigurationListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_loaded(self):
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.warning(f"Configuration listener {listener!r} failed: {e}")

    # Configuration directory

    def load(self, directory: Path | str = None):
        """
        Load machine, packages and parts from a configuration directory.

        Args:
            directory: Configuration directory (default settings.config_dir)

        Raises:
            DocumentReadError: A document is missing or invalid. Documents
                loaded before the failing one stay loaded; listeners are not
                notified.
        """
        directory = Path(directory) if directory is not None else self.settings.config_dir
        logger.info(f"Loading configuration from {directory}")

        self._load_machine(self.settings.machine_path(directory))
        self._load_packages(self.settings.packages_path(directory))
        self._load_parts(self.settings.parts_path(directory))

        if self.machine is not None and self.machine.requires_resolution:
            self.machine.resolve(self)

        self._dirty = False
        logger.info(
            f"Loaded {len(self._packages)} packages and {len(self._parts)} parts "
            f"from {directory}"
        )
        self._notify_loaded()

    def save(self, directory: Path | str = None):
        """Save machine, packages and parts to a configuration directory."""
        directory = Path(directory) if directory is not None else self.settings.config_dir
        directory.mkdir(parents=True, exist_ok=True)

        self.gateway.write(MachineDocument(machine=self.machine), self.settings.machine_path(directory))
        self.gateway.write(
            PackagesDocument(packages=self._packages.values()),
            self.settings.packages_path(directory),
        )
        self.gateway.write(
            PartsDocument(parts=self._parts.values()),
            self.settings.parts_path(directory),
        )
        self._dirty = False
        logger.info(f"Saved configuration to {directory}")

    def _load_machine(self, path: Path):
        holder = self.gateway.read(MachineDocument, path)
        self.machine = holder.machine

    def _load_packages(self, path: Path):
        holder = self.gateway.read(PackagesDocument, path)
        for package in holder.packages:
            self._packages.put(package)

    def _load_parts(self, path: Path):
        holder = self.gateway.read(PartsDocument, path)
        for part in holder.parts:
            part.resolve(self)
            self._parts.put(part)

    # Catalogs

    def get_package(self, package_id: str) -> Optional[Package]:
        """Get a package by id (case-insensitive), or None."""
        return self._packages.get(package_id)

    def get_part(self, part_id: str) -> Optional[Part]:
        """Get a part by id (case-insensitive), or None."""
        return self._parts.get(part_id)

    @property
    def packages(self) -> List[Package]:
        return self._packages.values()

    @property
    def parts(self) -> List[Part]:
        return self._parts.values()

    def add_package(self, package: Package):
        self._packages.put(package)
        self._dirty = True

    def add_part(self, part: Part):
        self._parts.put(part)
        self._dirty = True

    def rename_part(self, old_id: str, new_id: str) -> Part:
        """Change a part's id, keeping the registry keyed by it."""
        part = self._parts.rename(old_id, new_id)
        self._dirty = True
        return part

    # Boards

    def lookup_board(self, file: Path | str) -> BoardLookupResult:
        """Get a board, reporting whether its file had to be created."""
        return self._boards.lookup(file)

    def get_board(self, file: Path | str) -> Board:
        """
        Get the board stored in file.

        A missing file is created with an empty board named after it. The
        same file always yields the same Board instance.
        """
        return self._boards.get(file)

    def _load_board(self, file: Path) -> Board:
        board = self.gateway.read(Board, file)
        board.resolve(self)
        board.file = file
        return board

    # Jobs

    def load_job(self, file: Path | str) -> Job:
        """
        Load a job and bind its board locations to boards.

        Each board file is looked up as given first, then relative to the
        directory containing the job.

        Raises:
            DocumentReadError: The job or a board document is invalid
            BoardFileNotFound: A board file exists in neither place
        """
        file = Path(file)
        job = self.gateway.read(Job, file)
        job.file = file

        for board_location in job.board_locations:
            board_filename = board_location.board_file
            if not board_filename:
                raise BoardFileNotFound(str(board_filename))
            board_file = Path(board_filename)
            if not board_file.exists():
                board_file = file.parent / board_filename
            if not board_file.exists():
                raise BoardFileNotFound(board_filename)
            board_location.board = self.get_board(board_file)

        job.dirty = False
        logger.info(f"Loaded job {file} with {len(job.board_locations)} boards")
        return job

    def save_job(self, job: Job, file: Path | str):
        """
        Save a job and every board it references.

        Board references are stored relative to the job file, or as
        absolute paths when no relative path exists.
        """
        file = Path(file)
        boards: Dict[int, Board] = {}

        for index, board_location in enumerate(job.board_locations):
            board = board_location.board
            if board is None or board.file is None:
                raise ConfigurationError(f"Board location {index} of job has no board file")
            boards.setdefault(id(board), board)

            board_path = os.path.abspath(board.file)
            try:
                relative_path = relativize(board_path, os.path.abspath(file), os.sep)
                logger.debug(f"Relative path is {relative_path}")
                board_location.board_file = relative_path
            except PathRelativizationFailure as e:
                logger.warning(f"Unable to find relative path for board, using absolute: {e}")
                board_location.board_file = board_path

        for board in boards.values():
            self.gateway.write(board, board.file)

        self.gateway.write(job, file)
        job.file = file
        job.dirty = False
        logger.info(f"Saved job {file}")
