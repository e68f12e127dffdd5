"""Response (feedback) models - response types and submissions."""

from typing import Optional

from pydantic import Field, field_validator

from fivestar_support.models.base import FiveStarModel


class ResponseType(FiveStarModel):
    """Response type (bug, feature request, etc.)."""

    id: str
    name: str
    slug: str
    color: str
    icon: str

    @field_validator("id", "name", "slug", "color", "icon", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        # Keys are required, but the server may send null for unset values
        return "" if value is None else value


class SubmitResponseOptions(FiveStarModel):
    """Options for submitting a response on behalf of a customer."""

    customer_id: str = Field(alias="customerId")
    title: str
    description: str
    type_id: str = Field(alias="typeId")
    email: Optional[str] = None
    name: Optional[str] = None


class SubmitResponseResult(FiveStarModel):
    """Result of submitting a response."""

    success: bool
    response_id: str = Field(alias="responseId")
    message: Optional[str] = None
