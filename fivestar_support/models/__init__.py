"""FiveStar Support payload models."""

from fivestar_support.models.customer import (
    CustomerInfo,
    GenerateCustomerIdResult,
    RegisterCustomerOptions,
    RegisterCustomerResult,
    VerifyCustomerResult,
)
from fivestar_support.models.device import DeviceInfo
from fivestar_support.models.response import (
    ResponseType,
    SubmitResponseOptions,
    SubmitResponseResult,
)

__all__ = [
    "ResponseType",
    "GenerateCustomerIdResult",
    "RegisterCustomerOptions",
    "CustomerInfo",
    "RegisterCustomerResult",
    "VerifyCustomerResult",
    "SubmitResponseOptions",
    "SubmitResponseResult",
    "DeviceInfo",
]
