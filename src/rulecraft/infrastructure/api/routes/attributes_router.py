"""API router for the attribute catalog."""

from fastapi import APIRouter, HTTPException, status

from rulecraft.core.logging import get_logger
from rulecraft.core.rules import CatalogWriteError
from rulecraft.domain.entities import Attribute
from rulecraft.infrastructure.api.dependencies import AttributeRepositoryDep, DBSession
from rulecraft.infrastructure.api.schemas import AttributeResponse, CreateAttributeRequest

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=list[AttributeResponse])
async def list_attributes(repository: AttributeRepositoryDep):
    """List all attributes in the catalog."""
    return await repository.list_all()


@router.post(
    "",
    response_model=AttributeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_attribute(
    request: CreateAttributeRequest,
    repository: AttributeRepositoryDep,
    db: DBSession,
):
    """Register an attribute with an explicit data type."""
    conflict = HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Attribute '{request.attribute_name}' already exists",
    )
    if await repository.get_by_name(request.attribute_name) is not None:
        raise conflict

    attribute = Attribute(
        attribute_name=request.attribute_name,
        data_type=request.data_type,
        allowed_values=request.allowed_values,
    )
    try:
        await repository.insert_many([attribute])
    except CatalogWriteError:
        raise conflict

    await db.commit()
    logger.info(
        "Attribute registered",
        attribute_name=attribute.attribute_name,
        data_type=attribute.data_type.value,
    )
    return attribute
