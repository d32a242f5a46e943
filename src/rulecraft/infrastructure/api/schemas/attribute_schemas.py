"""Pydantic schemas for the attribute catalog API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rulecraft.domain.entities import DataType


class CreateAttributeRequest(BaseModel):
    """Request body for registering an attribute explicitly."""

    model_config = ConfigDict(populate_by_name=True)

    attribute_name: str = Field(
        ..., alias="attributeName", min_length=1, max_length=255, pattern=r"^\w+$"
    )
    data_type: DataType = Field(..., alias="dataType")
    allowed_values: list[Any] | None = Field(None, alias="allowedValues")


class AttributeResponse(BaseModel):
    """An attribute catalog entry."""

    model_config = ConfigDict(from_attributes=True)

    attribute_name: str = Field(..., serialization_alias="attributeName")
    data_type: DataType = Field(..., serialization_alias="dataType")
    allowed_values: list[Any] | None = Field(None, serialization_alias="allowedValues")
