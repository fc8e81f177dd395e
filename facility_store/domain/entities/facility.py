"""
Domain Entities - Facility

Buildings, rooms and the auxiliary per-room documents. A room belongs to the
building named by the first segment of its ID; there is no separate foreign
key field that could disagree with it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Building:
    """Top of the hierarchy; its ID carries no delimiter."""

    id: str
    name: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)
    rev: Optional[str] = None


@dataclass
class Room:
    """A room inside a building, ID ``<building>-<room>``."""

    id: str
    name: str = ""
    description: str = ""
    configuration_id: Optional[str] = None
    designation: str = ""
    tags: List[str] = field(default_factory=list)
    rev: Optional[str] = None


@dataclass(slots=True)
class Evaluator:
    """Evaluation step attached to a room configuration."""

    id: str
    code_key: str = ""
    description: str = ""
    priority: int = 0


@dataclass
class RoomConfiguration:
    """Named behaviour profile that rooms may reference."""

    id: str
    description: str = ""
    evaluators: List[Evaluator] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    rev: Optional[str] = None


@dataclass
class UIConfig:
    """Touch panel layout for a room; keyed by the room ID."""

    id: str
    api: List[str] = field(default_factory=list)
    panels: List[Dict[str, Any]] = field(default_factory=list)
    presets: List[Dict[str, Any]] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
    rev: Optional[str] = None
