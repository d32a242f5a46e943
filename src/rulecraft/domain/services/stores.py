"""Storage contracts the rule services depend on.

The services talk to these protocols only. The SQLAlchemy repositories in
``rulecraft.infrastructure.persistence.repositories`` implement them.
"""

from typing import Protocol, Sequence

from rulecraft.domain.entities import Attribute, Rule


class RuleStore(Protocol):
    """Lookup and insertion of rules by unique name."""

    async def find_by_name(self, name: str) -> Rule | None: ...

    async def find_by_names(self, names: Sequence[str]) -> list[Rule]: ...

    async def insert(self, rule: Rule) -> Rule:
        """Persist a rule.

        Raises:
            DuplicateRuleError: If the name is already taken.
        """
        ...

    async def list_all(self) -> list[Rule]: ...


class AttributeCatalog(Protocol):
    """Lookup and insertion of attribute definitions by unique name."""

    async def find_by_names(self, names: Sequence[str]) -> list[Attribute]: ...

    async def insert_many(self, attributes: Sequence[Attribute]) -> None:
        """Persist several attributes at once.

        Raises:
            CatalogWriteError: If the attributes could not be written.
        """
        ...
