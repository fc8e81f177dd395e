"""
Hierarchical identifier scheme.

Parent/child relationships are encoded in document IDs:

    building            BLDG
    room                BLDG-101
    device              BLDG-101-CP1

The scheme is the only structural definition of "which room a device belongs
to". It also provides the key range that selects every child of a parent:
the range terminator sorts immediately after the delimiter, so
``(parent + "-", parent + ".")`` captures exactly ``parent-*``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from facility_store.domain.entities.errors import ValidationFailedError


@dataclass(frozen=True)
class HierarchicalIdScheme:
    """Delimiter and segment rules for building, room and device IDs."""

    delimiter: str = "-"
    range_terminator: str = "."
    building_pattern: re.Pattern[str] = field(
        default=re.compile(r"^[A-Za-z0-9]{2,}$"), compare=False
    )
    room_pattern: re.Pattern[str] = field(
        default=re.compile(r"^[A-Za-z0-9]{2,}-[A-Za-z0-9]{2,}$"), compare=False
    )
    device_pattern: re.Pattern[str] = field(
        default=re.compile(r"^[A-Za-z0-9]{2,}-[A-Za-z0-9]{2,}-[A-Za-z]+[0-9]+$"),
        compare=False,
    )

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1 or len(self.range_terminator) != 1:
            raise ValueError("delimiter and range terminator must be single characters")
        if ord(self.range_terminator) != ord(self.delimiter) + 1:
            raise ValueError(
                "range terminator must sort immediately after the delimiter"
            )

    # Validation ---------------------------------------------------------

    def is_valid_building_id(self, building_id: str) -> bool:
        return bool(self.building_pattern.fullmatch(building_id or ""))

    def is_valid_room_id(self, room_id: str) -> bool:
        return bool(self.room_pattern.fullmatch(room_id or ""))

    def is_valid_device_id(self, device_id: str) -> bool:
        return bool(self.device_pattern.fullmatch(device_id or ""))

    def validate_building_id(self, building_id: str) -> None:
        self._require(building_id, self.building_pattern, "building")

    def validate_room_id(self, room_id: str) -> None:
        self._require(room_id, self.room_pattern, "room")

    def validate_device_id(self, device_id: str) -> None:
        self._require(device_id, self.device_pattern, "device")

    # Navigation ---------------------------------------------------------

    def split(self, entity_id: str) -> List[str]:
        return entity_id.split(self.delimiter)

    def join(self, *segments: str) -> str:
        return self.delimiter.join(segments)

    def room_id_of(self, device_id: str) -> str:
        """Return ``B-R`` for a device ID ``B-R-D``."""
        segments = self.split(device_id)
        if len(segments) < 3 or not all(segments):
            raise ValidationFailedError(
                f"{device_id!r} is not a device ID; expected "
                f"<building>{self.delimiter}<room>{self.delimiter}<device>",
                details={"id": device_id},
            )
        return self.join(segments[0], segments[1])

    def building_id_of(self, room_id: str) -> str:
        """Return ``B`` for a room ID ``B-R`` (or a device ID ``B-R-D``)."""
        segments = self.split(room_id)
        if len(segments) < 2 or not segments[0]:
            raise ValidationFailedError(
                f"{room_id!r} is not a room ID; expected "
                f"<building>{self.delimiter}<room>",
                details={"id": room_id},
            )
        return segments[0]

    def parent_of(self, child_id: str) -> Optional[str]:
        """Return the ID one level up, or None for a top-level ID."""
        head, sep, _ = child_id.rpartition(self.delimiter)
        return head if sep else None

    def child_id(self, parent_id: str, suffix: str) -> str:
        if self.delimiter in suffix:
            raise ValidationFailedError(
                f"ID suffix {suffix!r} must not contain {self.delimiter!r}",
                details={"suffix": suffix},
            )
        return self.join(parent_id, suffix)

    def children_range(self, parent_id: str) -> Tuple[str, str]:
        """Exclusive key bounds selecting every descendant of ``parent_id``."""
        return parent_id + self.delimiter, parent_id + self.range_terminator

    def is_descendant(self, candidate_id: str, parent_id: str) -> bool:
        return candidate_id.startswith(parent_id + self.delimiter)

    def rebase(self, child_id: str, old_parent_id: str, new_parent_id: str) -> str:
        """Move ``child_id`` from ``old_parent_id`` to ``new_parent_id``."""
        if not self.is_descendant(child_id, old_parent_id):
            raise ValidationFailedError(
                f"{child_id!r} is not a child of {old_parent_id!r}",
                details={"id": child_id, "parent": old_parent_id},
            )
        return new_parent_id + child_id[len(old_parent_id) :]

    def _require(self, entity_id: str, pattern: re.Pattern[str], kind: str) -> None:
        if not entity_id or not pattern.fullmatch(entity_id):
            raise ValidationFailedError(
                f"invalid {kind} id {entity_id!r}: must match `{pattern.pattern}`",
                details={"id": entity_id, "kind": kind},
            )


DEFAULT_ID_SCHEME = HierarchicalIdScheme()
