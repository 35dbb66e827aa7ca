# pnpconfig/errors.py
"""
Error kinds raised by the configuration layer.

All errors derive from ConfigurationError so callers can catch the whole
family. Errors that have a natural builtin counterpart also derive from it
(BoardFileNotFound is a FileNotFoundError, PathRelativizationFailure and
IdentifierConflict are ValueErrors).
"""

from pathlib import Path


class ConfigurationError(Exception):
    """Base class for configuration errors."""


class DocumentReadError(ConfigurationError):
    """A document could not be read or decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {self.path}: {reason}")


class DocumentWriteError(ConfigurationError):
    """A document could not be encoded or written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


class BoardFileNotFound(ConfigurationError, FileNotFoundError):
    """A job references a board file that cannot be located."""

    def __init__(self, board_file: str):
        self.board_file = board_file
        super().__init__(f"Board file not found: {board_file}")

    def __str__(self) -> str:
        return f"Board file not found: {self.board_file}"


class PathRelativizationFailure(ConfigurationError, ValueError):
    """No relative path exists between two paths."""

    def __init__(self, target: str, base: str, reason: str):
        self.target = target
        self.base = base
        super().__init__(f"No relative path from '{base}' to '{target}': {reason}")


class IdentifierConflict(ConfigurationError, ValueError):
    """An identifier is already taken by a different entity."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Identifier already in use: {identifier}")
