# pnpconfig/paths.py
"""
Relative path computation between two absolute paths.

Used when a job is saved so the board files it references are stored
relative to the job file wherever possible.
"""

import ntpath
import os
import posixpath
from pathlib import Path

from .errors import PathRelativizationFailure

# Upper bound on ".." segments in a computed relative path
MAX_PARENT_HOPS = 64


def _normalize(path: str, separator: str) -> str:
    if separator == "\\":
        normalized = ntpath.normpath(path.replace("/", "\\"))
    else:
        normalized = posixpath.normpath(path.replace("\\", "/")).replace("/", separator)
    if len(normalized) > 1 and normalized.endswith(separator):
        normalized = normalized.rstrip(separator)
    return normalized


def _base_is_file(base: str, separator: str) -> bool:
    """
    A base that exists is judged by the file system. A base that does not
    exist is a file unless it ends with the separator.
    """
    resource = Path(base)
    if resource.exists():
        return resource.is_file()
    return not base.endswith(separator)


def relativize(target: Path | str, base: Path | str, separator: str = os.sep) -> str:
    """
    Get a path to target, relative to base.

    If base is a file, the path is relative to the directory containing it.

    Args:
        target: Absolute path to the target file or directory
        base: Absolute path of the base file or directory
        separator: Path separator to use

    Returns:
        The relative path

    Raises:
        PathRelativizationFailure: No common ancestor, or more than
            MAX_PARENT_HOPS parent hops are needed
    """
    target_str = str(target)
    base_str = str(base)
    normalized_target = _normalize(target_str, separator)
    normalized_base = _normalize(base_str, separator)

    target_parts = normalized_target.split(separator)
    base_parts = normalized_base.split(separator)

    common = 0
    while (
        common < len(target_parts)
        and common < len(base_parts)
        and target_parts[common] == base_parts[common]
    ):
        common += 1

    if common == 0:
        raise PathRelativizationFailure(target_str, base_str, "no common path element")

    # A leading empty element is the root of an absolute POSIX path. Sharing
    # only the root counts as a common ancestor.
    remainder = target_parts[common:]

    hops = 0
    if common != len(base_parts):
        hops = len(base_parts) - common
        if _base_is_file(base_str, separator):
            hops -= 1
    if hops > MAX_PARENT_HOPS:
        raise PathRelativizationFailure(
            target_str, base_str, f"more than {MAX_PARENT_HOPS} parent directories"
        )

    return separator.join([".."] * hops + remainder)
