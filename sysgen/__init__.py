"""
This initialization file is the public entry point of the system generator package.

It re-exports the configuration dataclass, the exception hierarchy, the property slot
variants, the generator registry, the body template store, the system tree node types,
the SystemGenerator resolver with its one-shot generate function, and the output helpers
for arrays, tables, files and configuration loading, so callers can import everything
from the package root.
"""

from .gen_config import GeneratorConfig
from .exceptions import (
    SystemGenError,
    ConfigurationError,
    DuplicateNameError,
    UnknownGeneratorError,
    UnknownTemplateError,
    KindMismatchError,
    InvalidBoundsError,
    InvalidCountError,
    CycleError,
    InvalidBodyError,
)
from .utils import make_rng

from .slots import (
    Literal,
    GeneratorRef,
    UNSET,
    PropertySlots,
    OverrideContext,
    EMPTY_CONTEXT,
)
from .body import Body
from .generators import Generator, GeneratorRegistry
from .templates import BodyTemplate, BodyTemplateStore
from .system_tree import (
    SystemTree,
    TemplateReference,
    SystemReference,
    InlineOverrideGroup,
)
from .resolver import SystemGenerator, generate

from .body_arrays import to_arrays, to_com_frame, bodies_to_frame, summarize
from .writer import DataWriter, write_csv
from .config_loader import load_config


__all__ = [
    "GeneratorConfig",
    "SystemGenError",
    "ConfigurationError",
    "DuplicateNameError",
    "UnknownGeneratorError",
    "UnknownTemplateError",
    "KindMismatchError",
    "InvalidBoundsError",
    "InvalidCountError",
    "CycleError",
    "InvalidBodyError",
    "make_rng",
    "Literal",
    "GeneratorRef",
    "UNSET",
    "PropertySlots",
    "OverrideContext",
    "EMPTY_CONTEXT",
    "Body",
    "Generator",
    "GeneratorRegistry",
    "BodyTemplate",
    "BodyTemplateStore",
    "SystemTree",
    "TemplateReference",
    "SystemReference",
    "InlineOverrideGroup",
    "SystemGenerator",
    "generate",
    "to_arrays",
    "to_com_frame",
    "bodies_to_frame",
    "summarize",
    "DataWriter",
    "write_csv",
    "load_config",
]
