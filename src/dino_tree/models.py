"""
Data models for dino-tree package.

This module defines the core data structures:
- DinoData: Display payload returned by every query
- Dino: Normalized employee record
- DinoNode: Slot in the flat tree arena
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DinoData(BaseModel):
    """
    Display payload of an employee.

    first_name and picture must always be supplied by the normalizer, but may
    be None when the directory could not provide them.
    """

    user_id: str = Field(
        ...,
        description="Opaque unique identifier of the employee",
        min_length=1,
    )
    first_name: str | None = Field(
        ...,
        description="Given name, primary sort key",
    )
    last_name: str | None = Field(
        default=None,
        description="Family name, secondary sort key",
    )
    picture: str | None = Field(
        ...,
        description="Picture URL",
    )
    title: str | None = Field(
        default=None,
        description="Business title",
    )
    fun_title: str | None = Field(
        default=None,
        description="Self-chosen title",
    )
    location: str | None = Field(
        default=None,
        description="Preferred location",
    )

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert the payload to a plain dictionary."""
        return self.model_dump()

    @property
    def display_name(self) -> str:
        """First and last name joined, skipping missing parts."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Dino(BaseModel):
    """
    Normalized employee record.

    Hierarchy edges use employee_id/manager_id; lookups use user_id.
    """

    user_id: str = Field(
        ...,
        description="Opaque unique identifier used for lookups",
        min_length=1,
    )
    employee_id: str = Field(
        ...,
        description="Unique key used for reporting edges",
        min_length=1,
    )
    manager_id: str | None = Field(
        default=None,
        description="employee_id of the reporting manager",
    )
    data: DinoData = Field(
        ...,
        description="Display payload",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("manager_id")
    @classmethod
    def blank_manager_is_absent(cls, v: str | None) -> str | None:
        """Treat an empty manager id as no manager."""
        return v or None

    def sort_key(self) -> tuple[str, str]:
        """Ordering key among siblings: first name, then last name."""
        return (self.data.first_name or "", self.data.last_name or "")


@dataclass(frozen=True)
class DinoNode:
    """
    One slot of the flat tree.

    Relations are indices into the owning sequence; parent is -1 for roots and
    first_child is None when the node has no children.
    """

    parent: int
    first_child: int | None
    num_children: int
    dino: Dino

    @property
    def is_root(self) -> bool:
        return self.parent < 0

    @property
    def children_range(self) -> range:
        """Indices of the children block (empty when there are none)."""
        if self.first_child is None or self.num_children <= 0:
            return range(0)
        return range(self.first_child, self.first_child + self.num_children)
