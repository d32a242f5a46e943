"""Repository for attribute catalog operations."""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rulecraft.core.rules.exceptions import CatalogWriteError
from rulecraft.domain.entities import Attribute, DataType
from rulecraft.infrastructure.persistence.models import AttributeModel


class AttributeRepository:
    """Repository for attribute database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: AttributeModel) -> Attribute:
        return Attribute(
            attribute_name=model.attribute_name,
            data_type=DataType(model.data_type),
            allowed_values=model.allowed_values,
            created_at=model.created_at,
        )

    async def get_by_name(self, attribute_name: str) -> Attribute | None:
        """Get an attribute by name.

        Args:
            attribute_name: The attribute name.

        Returns:
            The attribute if found, None otherwise.
        """
        result = await self.session.execute(
            select(AttributeModel).where(AttributeModel.attribute_name == attribute_name)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model is not None else None

    async def find_by_names(self, names: Sequence[str]) -> list[Attribute]:
        """Get all attributes whose name is in ``names``."""
        if not names:
            return []
        result = await self.session.execute(
            select(AttributeModel)
            .where(AttributeModel.attribute_name.in_(set(names)))
            .order_by(AttributeModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def insert_many(self, attributes: Sequence[Attribute]) -> None:
        """Persist several attributes in one flush.

        Raises:
            CatalogWriteError: If any attribute name already exists.
        """
        self.session.add_all(
            [
                AttributeModel(
                    attribute_name=attribute.attribute_name,
                    data_type=attribute.data_type.value,
                    allowed_values=attribute.allowed_values,
                    created_at=attribute.created_at,
                )
                for attribute in attributes
            ]
        )
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            names = ", ".join(attribute.attribute_name for attribute in attributes)
            raise CatalogWriteError(f"Could not register attributes: {names}") from e

    async def list_all(self) -> list[Attribute]:
        """List all attributes ordered by name."""
        result = await self.session.execute(
            select(AttributeModel).order_by(AttributeModel.attribute_name)
        )
        return [self._to_entity(model) for model in result.scalars().all()]
