"""Customer models - ID generation, registration and verification."""

from typing import Optional

from pydantic import Field, field_validator

from fivestar_support.models.base import FiveStarModel


class GenerateCustomerIdResult(FiveStarModel):
    """Result of generating a customer ID from the server.

    Customer IDs are generated and signed server-side; ``expires_at`` is the
    server's expiry timestamp, kept as the string it was sent as.
    """

    customer_id: str = Field(alias="customerId")
    expires_at: str = Field(alias="expiresAt")
    device_id: str = Field(alias="deviceId")


class RegisterCustomerOptions(FiveStarModel):
    """Optional customer information supplied at registration."""

    email: Optional[str] = None
    name: Optional[str] = None


class CustomerInfo(FiveStarModel):
    """Server's view of a registered customer."""

    id: str
    customer_id: str = Field(alias="customerId")
    email: Optional[str] = None
    name: Optional[str] = None

    @field_validator("id", "customer_id", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value


class RegisterCustomerResult(FiveStarModel):
    """Result of registering a customer.

    ``customer`` is only populated when the response carries a non-null
    ``customer`` object. Whether the key was sent at all is recorded in
    ``model_fields_set``.
    """

    success: bool
    customer: Optional[CustomerInfo] = None
    message: Optional[str] = None


class VerifyCustomerResult(FiveStarModel):
    """Customer verification result."""

    valid: bool
    message: Optional[str] = None
