"""Attribute validation for rule creation.

Makes sure every attribute a rule refers to is known to the attribute
catalog before the rule is stored, registering unknown attributes on the
way with a data type guessed from the attribute name.
"""

from typing import Sequence

from rulecraft.core.logging import get_logger
from rulecraft.core.rules.ast import Node, iter_operands
from rulecraft.core.rules.exceptions import AttributeValidationError, CatalogWriteError
from rulecraft.domain.entities import Attribute, DataType
from rulecraft.domain.services.stores import AttributeCatalog

logger = get_logger(__name__)

DEFAULT_NUMERIC_HINTS = ("age", "salary")


def extract_attributes(ast: Node) -> list[str]:
    """Collect attribute names from every operand, depth-first.

    Duplicates are kept.
    """
    return [operand.attribute for operand in iter_operands(ast)]


def guess_data_type(attribute_name: str, numeric_hints: Sequence[str] = DEFAULT_NUMERIC_HINTS) -> DataType:
    """Guess an attribute's data type from its name alone.

    Names containing one of the numeric hints (case-insensitive) are
    Number, everything else is String.
    """
    lowered = attribute_name.lower()
    if any(hint in lowered for hint in numeric_hints):
        return DataType.NUMBER
    return DataType.STRING


class AttributeValidator:
    """Reconciles the attributes of a rule tree with the catalog."""

    def __init__(
        self,
        catalog: AttributeCatalog,
        numeric_hints: Sequence[str] = DEFAULT_NUMERIC_HINTS,
    ) -> None:
        """Initialize the validator.

        Args:
            catalog: Attribute catalog to read from and register into.
            numeric_hints: Name substrings that mark an attribute as Number.
        """
        self.catalog = catalog
        self.numeric_hints = tuple(hint.lower() for hint in numeric_hints)

    async def find_missing(self, names: Sequence[str]) -> list[str]:
        """Return the distinct names with no catalog entry, in first-seen order."""
        distinct = list(dict.fromkeys(names))
        existing = await self.catalog.find_by_names(distinct)
        known = {attribute.attribute_name for attribute in existing}
        return [name for name in distinct if name not in known]

    async def register_missing(self, names: Sequence[str]) -> list[Attribute]:
        """Register attributes for names that have no catalog entry.

        Returns:
            The attributes handed to the catalog (empty when nothing was missing).
        """
        missing = await self.find_missing(names)
        if not missing:
            return []

        attributes = [
            Attribute(attribute_name=name, data_type=guess_data_type(name, self.numeric_hints))
            for name in missing
        ]
        logger.info(
            "Registering missing attributes",
            attributes=[attribute.attribute_name for attribute in attributes],
            data_types=[attribute.data_type.value for attribute in attributes],
        )

        try:
            await self.catalog.insert_many(attributes)
        except CatalogWriteError as e:
            # The follow-up lookup decides whether the rule can proceed.
            logger.warning("Attribute registration failed", attributes=missing, error=str(e))
        else:
            logger.info("Attributes registered", attributes=missing)

        return attributes

    async def validate(self, ast: Node) -> None:
        """Ensure every attribute referenced by ``ast`` is in the catalog.

        Raises:
            AttributeValidationError: If an attribute is still unknown after
                registration.
        """
        names = extract_attributes(ast)
        await self.register_missing(names)

        still_missing = await self.find_missing(names)
        if still_missing:
            logger.warning("Attribute validation failed", attribute=still_missing[0])
            raise AttributeValidationError(still_missing[0])
