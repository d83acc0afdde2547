"""Canonical schema model shared by every database backend."""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass, field


class TypeCategory(Enum):
    """Semantic category of a native column type."""
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    TEMPORAL = "temporal"
    UNKNOWN = "unknown"


@dataclass
class Column:
    """Represents a database column.

    Attribute order matches the column order of every backend's
    column metadata query, which ``from_row`` unpacks in order.
    """
    ordinal_position: int
    name: str
    data_type: str
    default_value: Optional[str] = None
    is_nullable: str = ""
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    constraint_name: Optional[str] = None
    constraint_type: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Column":
        """Build a column from a catalog row."""
        (ordinal, name, data_type, default, nullable,
         char_length, precision, constraint_name, constraint_type) = row
        return cls(
            ordinal_position=int(ordinal),
            name=name,
            data_type=data_type or "",
            default_value=None if default is None else str(default).strip(),
            is_nullable=nullable or "",
            character_maximum_length=None if char_length is None else int(char_length),
            numeric_precision=None if precision is None else int(precision),
            constraint_name=constraint_name,
            constraint_type=constraint_type,
        )


@dataclass
class Table:
    """Represents a database table."""
    name: str
    columns: List[Column] = field(default_factory=list)

    def get_column(self, name: str) -> Optional[Column]:
        """Find a column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None
