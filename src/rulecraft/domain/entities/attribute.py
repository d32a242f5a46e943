"""Attribute entity for the attribute catalog."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class DataType(str, Enum):
    """Data types an attribute may declare."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"


@dataclass
class Attribute:
    """Catalog entry describing one record field.

    Attributes:
        attribute_name: Unique attribute name as used in rules.
        data_type: Declared data type.
        allowed_values: Optional list of permitted values.
        created_at: Timestamp when the attribute was registered.
    """

    attribute_name: str
    data_type: DataType
    allowed_values: list[Any] | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate attribute after initialization."""
        if not self.attribute_name:
            raise ValueError("Attribute name is required")
        self.data_type = DataType(self.data_type)
