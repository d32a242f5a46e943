"""SQLAlchemy model for the rules table."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from rulecraft.infrastructure.persistence.database import Base


class RuleModel(Base):
    """SQLAlchemy model for the rules table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique rule name.
        rule_string: Rule text as written by the user.
        ast: Parsed rule tree as a JSON document.
        created_at: Timestamp when the rule was created.
    """

    __tablename__ = "rules"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique rule name",
    )
    rule_string: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Rule expression text",
    )
    ast: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Parsed rule tree",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Rule(id={self.id}, name='{self.name}')>"
