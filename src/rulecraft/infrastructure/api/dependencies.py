"""FastAPI dependencies wiring services to the request's database session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rulecraft.core.config import get_settings
from rulecraft.domain.services import RuleService
from rulecraft.infrastructure.persistence.database import get_db_session
from rulecraft.infrastructure.persistence.repositories import (
    AttributeRepository,
    RuleRepository,
)


async def get_rule_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RuleService:
    """Build a rule service backed by the request's session."""
    settings = get_settings()
    return RuleService(
        rules=RuleRepository(session),
        attributes=AttributeRepository(session),
        numeric_hints=settings.numeric_attribute_hints,
        max_rule_length=settings.max_rule_length,
        max_rule_depth=settings.max_rule_depth,
    )


async def get_attribute_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> AttributeRepository:
    """Build an attribute repository backed by the request's session."""
    return AttributeRepository(session)


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
RuleServiceDep = Annotated[RuleService, Depends(get_rule_service)]
AttributeRepositoryDep = Annotated[AttributeRepository, Depends(get_attribute_repository)]
