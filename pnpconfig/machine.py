# pnpconfig/machine.py
"""
Machine definitions and the machine type registry.

A machine document names its type; the class registered for that type
decodes the rest. Machines whose sub-objects refer into the part or package
catalogs set requires_resolution and implement resolve(), which the
configuration calls once everything has been loaded.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Type

from .model import Location, Part, identifier

if TYPE_CHECKING:
    from .configuration import Configuration

logger = logging.getLogger(__name__)

# Machine type registry
_MACHINES: Dict[str, Type["Machine"]] = {}


@dataclass(eq=False)
class Machine:
    """
    Base class for machine definitions.

    Subclasses register with @register_machine and override to_dict(),
    from_dict() and, when requires_resolution is set, resolve().
    """
    machine_type: ClassVar[str] = ""
    requires_resolution: ClassVar[bool] = False

    def resolve(self, configuration: "Configuration") -> None:
        """
        Resolve configuration-dependent state.

        Called after machine, packages and parts are all loaded, only for
        machines with requires_resolution set.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.machine_type}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Machine":
        return cls()


def register_machine(machine_type: str) -> Callable:
    """
    Decorator to register a machine class for a type name.

    Usage:
        @register_machine("reference")
        class ReferenceMachine(Machine):
            ...
    """
    def decorator(cls: Type[Machine]) -> Type[Machine]:
        if machine_type in _MACHINES:
            logger.warning(f"Overwriting machine type {machine_type}")
        cls.machine_type = machine_type
        _MACHINES[machine_type] = cls
        return cls
    return decorator


def get_machine_class(machine_type: str) -> Optional[Type[Machine]]:
    """Get the class registered for a machine type, or None."""
    return _MACHINES.get(machine_type)


def list_machine_types() -> List[str]:
    return sorted(_MACHINES)


def machine_from_dict(data: Dict[str, Any]) -> Machine:
    """Decode a machine, dispatching on its type field."""
    machine_type = data.get("type")
    if not machine_type:
        raise ValueError("Machine has no type")
    machine_cls = get_machine_class(machine_type)
    if machine_cls is None:
        raise ValueError(f"Unknown machine type: {machine_type}")
    return machine_cls.from_dict(data)


@dataclass(eq=False)
class Feeder:
    """A feeder slot supplying one part."""
    id: str
    part_id: Optional[str] = None
    enabled: bool = True
    location: Location = field(default_factory=Location)
    part: Optional[Part] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "enabled": self.enabled,
            "location": self.location.to_dict(),
        }
        part_id = self.part.id if self.part is not None else self.part_id
        if part_id is not None:
            data["part_id"] = part_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Feeder":
        return cls(
            id=identifier(data["id"]),
            part_id=identifier(data.get("part_id")),
            enabled=bool(data.get("enabled", True)),
            location=Location.from_dict(data.get("location")),
        )


@register_machine("null")
@dataclass(eq=False)
class NullMachine(Machine):
    """A machine with no hardware, used for offline editing."""


@register_machine("reference")
@dataclass(eq=False)
class ReferenceMachine(Machine):
    """
    The reference machine: a named head with a bank of feeders.

    Feeders reference parts by id, so the machine needs the loaded part
    catalog before it is usable.
    """
    requires_resolution: ClassVar[bool] = True

    name: str = "Reference Machine"
    feeders: List[Feeder] = field(default_factory=list)

    def resolve(self, configuration: "Configuration") -> None:
        for feeder in self.feeders:
            if feeder.part_id is None:
                continue
            feeder.part = configuration.get_part(feeder.part_id)
            if feeder.part is None:
                logger.warning(f"Feeder {feeder.id} references unknown part {feeder.part_id}")

    def get_feeder(self, feeder_id: str) -> Optional[Feeder]:
        for feeder in self.feeders:
            if feeder.id == feeder_id:
                return feeder
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.machine_type,
            "name": self.name,
            "feeders": [f.to_dict() for f in self.feeders],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceMachine":
        return cls(
            name=data.get("name", "Reference Machine"),
            feeders=[Feeder.from_dict(f) for f in data.get("feeders") or []],
        )
