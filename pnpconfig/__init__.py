# pnpconfig - Configuration and job persistence for pick-and-place machines
#
# Loads a machine definition, package catalog and part catalog from a
# configuration directory, loads jobs and the boards they reference, and
# writes the whole graph back to documents.
#
# Core concepts:
# - Configuration: Owns the machine, catalogs and board cache
# - IdentityRegistry: Case-insensitive id -> entity mapping
# - BoardCache: Canonical path -> Board, each file parsed once
# - DocumentGateway: Reads and writes entity documents

from .errors import (
    ConfigurationError,
    DocumentReadError,
    DocumentWriteError,
    BoardFileNotFound,
    PathRelativizationFailure,
    IdentifierConflict,
)
from .model import Location, Package, Part, Placement, Board, BoardLocation, Job
from .machine import Machine, ReferenceMachine, NullMachine, Feeder, register_machine
from .gateway import DocumentGateway, YamlDocumentGateway
from .registry import IdentityRegistry
from .boards import BoardCache, BoardLookupResult, Found, Created
from .paths import relativize
from .settings import Settings
from .configuration import Configuration, ConfigurationListener

__all__ = [
    # Errors
    "ConfigurationError",
    "DocumentReadError",
    "DocumentWriteError",
    "BoardFileNotFound",
    "PathRelativizationFailure",
    "IdentifierConflict",
    # Model
    "Location",
    "Package",
    "Part",
    "Placement",
    "Board",
    "BoardLocation",
    "Job",
    "Machine",
    "ReferenceMachine",
    "NullMachine",
    "Feeder",
    "register_machine",
    # Persistence
    "DocumentGateway",
    "YamlDocumentGateway",
    "IdentityRegistry",
    "BoardCache",
    "BoardLookupResult",
    "Found",
    "Created",
    "relativize",
    "Settings",
    "Configuration",
    "ConfigurationListener",
]

__version__ = "0.1.0"
