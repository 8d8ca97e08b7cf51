"""Shared Pydantic base for camelCase API payloads."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error message")
    fields: dict[str, str] | None = Field(
        None, description="Per-field problems for validation errors"
    )


class SuccessResponse(ApiModel):
    success: bool = True
    message: str | None = None
