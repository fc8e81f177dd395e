"""
Domain Services Package

Pure logic shared by the repositories: the identifier scheme, entity
validation, the cascade engine and device type assembly.
"""

from .cascade_engine import CascadeEngine
from .device_type_assembly import MissingTypePolicy, assemble_device_types
from .identifier_scheme import DEFAULT_ID_SCHEME, HierarchicalIdScheme

__all__ = [
    "CascadeEngine",
    "MissingTypePolicy",
    "assemble_device_types",
    "DEFAULT_ID_SCHEME",
    "HierarchicalIdScheme",
]
