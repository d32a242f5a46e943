"""SQLAlchemy model for the attributes table.

Attributes form the catalog of record fields rules may refer to.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from rulecraft.infrastructure.persistence.database import Base


class AttributeModel(Base):
    """SQLAlchemy model for the attributes table.

    Attributes:
        id: Auto-incrementing primary key.
        attribute_name: Unique attribute name.
        data_type: One of String, Number, Boolean.
        allowed_values: Optional JSON array of permitted values.
        created_at: Timestamp when the attribute was registered.
    """

    __tablename__ = "attributes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    attribute_name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique attribute name",
    )
    data_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="String, Number or Boolean",
    )
    allowed_values: Mapped[list[Any] | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        comment="Permitted values (JSON array)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Attribute(id={self.id}, attribute_name='{self.attribute_name}')>"
