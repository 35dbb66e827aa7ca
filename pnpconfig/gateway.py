# pnpconfig/gateway.py
"""
Document gateway: reads and writes typed entities to documents on disk.

The configuration layer only talks to the DocumentGateway interface. The
default implementation stores YAML documents with a single root key per
document type and hyphen-cased keys:

    pnp-parts:
      parts:
        - id: R0805-1K
          package-id: R0805
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

from .errors import DocumentReadError, DocumentWriteError
from .machine import Machine, machine_from_dict
from .model import Board, Job, Package, Part

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(eq=False)
class MachineDocument:
    """Root holder of the machine document."""
    machine: Optional[Machine] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"machine": self.machine.to_dict() if self.machine is not None else None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MachineDocument":
        machine_data = data.get("machine")
        if not isinstance(machine_data, dict):
            raise ValueError("Missing machine element")
        return cls(machine=machine_from_dict(machine_data))


@dataclass(eq=False)
class PackagesDocument:
    """Root holder of the package catalog."""
    packages: List[Package] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"packages": [p.to_dict() for p in self.packages]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackagesDocument":
        return cls(packages=[Package.from_dict(p) for p in data.get("packages") or []])


@dataclass(eq=False)
class PartsDocument:
    """Root holder of the part catalog."""
    parts: List[Part] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"parts": [p.to_dict() for p in self.parts]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PartsDocument":
        return cls(parts=[Part.from_dict(p) for p in data.get("parts") or []])


DOCUMENT_ROOTS: Dict[type, str] = {
    MachineDocument: "pnp-machine",
    PackagesDocument: "pnp-packages",
    PartsDocument: "pnp-parts",
    Board: "pnp-board",
    Job: "pnp-job",
}


def root_name(cls: type) -> str:
    """Get the document root for an entity class."""
    for doc_cls, name in DOCUMENT_ROOTS.items():
        if issubclass(cls, doc_cls):
            return name
    raise TypeError(f"No document root registered for {cls.__name__}")


# Keys whose values are user data, stored with their keys as written
FREE_FORM_KEYS = {"outline"}


def hyphenate(data: Any) -> Any:
    """Convert snake_case dict keys to hyphen-case, recursively."""
    if isinstance(data, dict):
        return {
            (k.replace("_", "-") if isinstance(k, str) else k): (
                v if k in FREE_FORM_KEYS else hyphenate(v)
            )
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [hyphenate(v) for v in data]
    return data


def dehyphenate(data: Any) -> Any:
    """Convert hyphen-case dict keys to snake_case, recursively."""
    if isinstance(data, dict):
        return {
            (k.replace("-", "_") if isinstance(k, str) else k): (
                v if k in FREE_FORM_KEYS else dehyphenate(v)
            )
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [dehyphenate(v) for v in data]
    return data


class DocumentGateway(ABC):
    """
    Reads and writes entity documents.

    Implementations raise DocumentReadError / DocumentWriteError for any
    failure, naming the offending path.
    """

    @abstractmethod
    def read(self, cls: Type[T], path: Path | str) -> T:
        """Read a document of the given entity class from path."""
        pass

    @abstractmethod
    def write(self, obj: Any, path: Path | str) -> None:
        """Write an entity to a document at path."""
        pass


class YamlDocumentGateway(DocumentGateway):
    """DocumentGateway storing hyphen-cased YAML documents."""

    def read(self, cls: Type[T], path: Path | str) -> T:
        path = Path(path)
        root = root_name(cls)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise DocumentReadError(path, f"not UTF-8 text: {e}") from e
        except yaml.YAMLError as e:
            raise DocumentReadError(path, f"invalid YAML: {e}") from e

        if not isinstance(raw, dict) or root not in raw:
            raise DocumentReadError(path, f"expected root element '{root}'")

        body = dehyphenate(raw[root] or {})
        if not isinstance(body, dict):
            raise DocumentReadError(path, f"'{root}' must be a mapping")
        try:
            obj = cls.from_dict(body)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DocumentReadError(path, f"invalid {root} document: {e}") from e

        logger.debug(f"Read {root} from {path}")
        return obj

    def write(self, obj: Any, path: Path | str) -> None:
        path = Path(path)
        root = root_name(type(obj))
        try:
            content = yaml.safe_dump(
                {root: hyphenate(obj.to_dict())},
                sort_keys=False,
                default_flow_style=False,
            )
        except yaml.YAMLError as e:
            raise DocumentWriteError(path, f"cannot encode {root}: {e}") from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise DocumentWriteError(path, e.strerror or str(e)) from e

        logger.debug(f"Wrote {root} to {path}")
