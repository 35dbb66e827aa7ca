# pnpconfig/model.py
"""
Entity types of the configuration graph.

Entities serialize to plain dictionaries (snake_case keys) with to_dict()
and from_dict(). References to other entities are stored by identifier and
bound to the live objects in a second resolve() phase, once the
configuration they point into has been loaded.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .configuration import Configuration

logger = logging.getLogger(__name__)


TOP = "top"
BOTTOM = "bottom"


def identifier(value: Any) -> Optional[str]:
    """
    Decode an identifier field.

    Unquoted YAML ids such as 1206 arrive as numbers; ids are always text.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Invalid identifier: {value!r}")
    return str(value)


@dataclass
class Location:
    """A position and rotation in machine or board coordinates."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: float = 0.0
    units: str = "mm"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "units": self.units,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Location":
        data = data or {}
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            z=float(data.get("z", 0.0)),
            rotation=float(data.get("rotation", 0.0)),
            units=data.get("units", "mm"),
        )


@dataclass
class Package:
    """
    A component package (footprint family).

    Attributes:
        id: Unique identifier, compared case-insensitively
        description: Human readable description
        outline: Free-form outline data (body size, pads, ...)
    """
    id: str
    description: str = ""
    outline: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id}
        if self.description:
            data["description"] = self.description
        if self.outline:
            data["outline"] = self.outline
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        return cls(
            id=identifier(data["id"]),
            description=data.get("description", ""),
            outline=data.get("outline") or {},
        )


@dataclass(eq=False)
class Part:
    """
    A part in the catalog.

    The package is referenced by package_id in documents and bound to the
    Package object by resolve().
    """
    id: str
    name: str = ""
    height: float = 0.0
    units: str = "mm"
    package_id: Optional[str] = None
    package: Optional[Package] = None

    def resolve(self, configuration: "Configuration") -> None:
        """Bind package_id to the configuration's Package."""
        if self.package_id is None:
            self.package = None
            return
        self.package = configuration.get_package(self.package_id)
        if self.package is None:
            logger.warning(f"Part {self.id} references unknown package {self.package_id}")

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "height": self.height,
            "units": self.units,
        }
        package_id = self.package.id if self.package is not None else self.package_id
        if package_id is not None:
            data["package_id"] = package_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Part":
        return cls(
            id=identifier(data["id"]),
            name=data.get("name", ""),
            height=float(data.get("height", 0.0)),
            units=data.get("units", "mm"),
            package_id=identifier(data.get("package_id")),
        )


@dataclass(eq=False)
class Placement:
    """A part placed at a location on one side of a board."""
    id: str
    part_id: Optional[str] = None
    location: Location = field(default_factory=Location)
    side: str = TOP
    part: Optional[Part] = None

    def resolve(self, configuration: "Configuration") -> None:
        if self.part_id is None:
            self.part = None
            return
        self.part = configuration.get_part(self.part_id)
        if self.part is None:
            logger.warning(f"Placement {self.id} references unknown part {self.part_id}")

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "side": self.side, "location": self.location.to_dict()}
        part_id = self.part.id if self.part is not None else self.part_id
        if part_id is not None:
            data["part_id"] = part_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Placement":
        return cls(
            id=identifier(data["id"]),
            part_id=identifier(data.get("part_id")),
            location=Location.from_dict(data.get("location")),
            side=data.get("side", TOP),
        )


@dataclass(eq=False)
class Board:
    """
    A circuit board design.

    Boards are identified by the canonical path of the file they were
    loaded from, not by name. The file is not part of the document.
    """
    name: str = ""
    width: float = 0.0
    height: float = 0.0
    placements: List[Placement] = field(default_factory=list)
    file: Optional[Path] = None

    def resolve(self, configuration: "Configuration") -> None:
        """Bind every placement to its part."""
        for placement in self.placements:
            placement.resolve(configuration)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "outline": {"width": self.width, "height": self.height},
            "placements": [p.to_dict() for p in self.placements],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        outline = data.get("outline") or {}
        return cls(
            name=data.get("name", ""),
            width=float(outline.get("width", 0.0)),
            height=float(outline.get("height", 0.0)),
            placements=[Placement.from_dict(p) for p in data.get("placements") or []],
        )


@dataclass(eq=False)
class BoardLocation:
    """
    A job's reference to a board.

    board_file is the path as written in the job document (absolute or
    relative to the job). board is bound by Configuration.load_job() and is
    owned by the board cache.
    """
    board_file: Optional[str] = None
    location: Location = field(default_factory=Location)
    side: str = TOP
    board: Optional[Board] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board_file": self.board_file,
            "side": self.side,
            "location": self.location.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardLocation":
        return cls(
            board_file=data.get("board_file"),
            location=Location.from_dict(data.get("location")),
            side=data.get("side", TOP),
        )


@dataclass(eq=False)
class Job:
    """An ordered set of boards to populate."""
    board_locations: List[BoardLocation] = field(default_factory=list)
    file: Optional[Path] = None
    dirty: bool = False

    def add_board_location(self, board_location: BoardLocation) -> None:
        self.board_locations.append(board_location)
        self.dirty = True

    def remove_board_location(self, board_location: BoardLocation) -> None:
        self.board_locations.remove(board_location)
        self.dirty = True

    def to_dict(self) -> Dict[str, Any]:
        return {"board_locations": [bl.to_dict() for bl in self.board_locations]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        return cls(
            board_locations=[
                BoardLocation.from_dict(bl) for bl in data.get("board_locations") or []
            ],
        )
