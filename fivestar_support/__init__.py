"""FiveStar Support client library."""

from fivestar_support.client import BaseFiveStarClient, FiveStarClient, FiveStarSyncClient
from fivestar_support.config import Settings, get_settings
from fivestar_support.errors import FiveStarAPIError
from fivestar_support.logging_config import configure_logging
from fivestar_support.models import (
    CustomerInfo,
    DeviceInfo,
    GenerateCustomerIdResult,
    RegisterCustomerOptions,
    RegisterCustomerResult,
    ResponseType,
    SubmitResponseOptions,
    SubmitResponseResult,
    VerifyCustomerResult,
)

__version__ = "1.0.0"

__all__ = [
    "BaseFiveStarClient",
    "FiveStarClient",
    "FiveStarSyncClient",
    "FiveStarAPIError",
    "Settings",
    "get_settings",
    "configure_logging",
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
