"""FiveStar Support API client.

Customer IDs are generated server-side. Every operation is a single request /
response round trip; failures are normalized into FiveStarAPIError.
"""

import json
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from fivestar_support.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, Settings, get_settings
from fivestar_support.errors import FiveStarAPIError
from fivestar_support.logging_config import get_logger
from fivestar_support.models import (
    DeviceInfo,
    GenerateCustomerIdResult,
    RegisterCustomerOptions,
    RegisterCustomerResult,
    ResponseType,
    SubmitResponseOptions,
    SubmitResponseResult,
    VerifyCustomerResult,
)
from fivestar_support.models.base import FiveStarModel

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=FiveStarModel)
ClientT = TypeVar("ClientT", bound="BaseFiveStarClient")

DESERIALIZE_FAILED = "Failed to deserialize response"
VERIFICATION_FAILED = "Verification failed"

RESPONSE_TYPES_PATH = "/api/responses/types"
GENERATE_CUSTOMER_PATH = "/api/customers/generate"
REGISTER_CUSTOMER_PATH = "/api/customers"
VERIFY_CUSTOMER_PATH = "/api/customers/verify"
SUBMIT_RESPONSE_PATH = "/api/responses"


class BaseFiveStarClient:
    """Configuration, payload construction and response decoding.

    Transport-specific subclasses supply ``_get`` / ``_post`` and the public
    operations; everything that does not touch the network lives here.
    """

    def __init__(
        self,
        client_id: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        platform: Optional[str] = None,
        app_version: Optional[str] = None,
        device_model: Optional[str] = None,
        os_version: Optional[str] = None,
    ):
        """
        Initialize client configuration.

        Args:
            client_id: The client ID
            api_url: API URL (defaults to https://fivestar.support)
            timeout: Request timeout in seconds (defaults to 30). httpx applies it to
                each phase (connect, read, write, pool) separately, so it bounds
                every wait on the network rather than the whole call
            platform: Platform identifier (e.g. 'web', 'ios', 'android')
            app_version: App version string
            device_model: Device model (e.g. 'iPhone14,2')
            os_version: OS version (e.g. '16.0')
        """
        self._client_id = client_id
        self._api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self._device_info = DeviceInfo(
            platform=platform,
            app_version=app_version,
            device_model=device_model,
            os_version=os_version,
        )

    @classmethod
    def from_settings(
        cls: Type[ClientT], settings: Optional[Settings] = None, **overrides: Any
    ) -> ClientT:
        """
        Create a client from environment configuration.

        Args:
            settings: Settings instance (defaults to the cached environment settings)
            **overrides: Constructor arguments that take precedence; None values are ignored

        Returns:
            Client instance

        Raises:
            ValueError: If no client ID is configured
        """
        settings = settings or get_settings()
        params: dict[str, Any] = {
            "client_id": settings.client_id,
            "api_url": settings.api_url,
            "timeout": settings.timeout,
        }
        params.update({k: v or None for k, v in settings.device_fields.items()})
        params.update({k: v for k, v in overrides.items() if v is not None})

        if not params["client_id"]:
            raise ValueError("FIVESTAR_CLIENT_ID is not configured")

        return cls(**params)

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def device_info(self) -> DeviceInfo:
        return self._device_info

    def get_public_url(self, locale: Optional[str] = None) -> str:
        """
        Get a public feedback page URL for this client.

        Args:
            locale: Optional locale for the page

        Returns:
            The public URL
        """
        locale_prefix = f"/{locale}" if locale else ""
        return f"{self._api_url}{locale_prefix}/c/{self._client_id}"

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        headers.update(self._device_info.headers())
        return headers

    # Payloads

    def _generate_payload(self) -> dict:
        return {"clientId": self._client_id}

    def _register_payload(
        self, customer_id: str, options: Optional[RegisterCustomerOptions]
    ) -> dict:
        return {
            "clientId": self._client_id,
            "customerId": customer_id,
            "email": options.email if options else None,
            "name": options.name if options else None,
        }

    def _verify_payload(self, customer_id: str) -> dict:
        return {"clientId": self._client_id, "customerId": customer_id}

    def _submit_payload(self, options: SubmitResponseOptions) -> dict:
        return {
            "clientId": self._client_id,
            "customerId": options.customer_id,
            "title": options.title,
            "description": options.description,
            "responseTypeId": options.type_id,
            "customerEmail": options.email,
            "customerName": options.name,
        }

    # Response handling

    def _handle_get_response(self, path: str, response: httpx.Response) -> Any:
        if response.status_code != 200:
            message = f"HTTP {response.status_code}"
            logger.warning(
                "FiveStar request failed",
                method="GET",
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise FiveStarAPIError(message, response.status_code)

        return self._decode_body(path, response)

    def _handle_post_response(self, path: str, response: httpx.Response) -> Any:
        if response.status_code != 200:
            message = self._error_message(response)
            logger.warning(
                "FiveStar request failed",
                method="POST",
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise FiveStarAPIError(message, response.status_code)

        return self._decode_body(path, response)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull the server's error text out of a failed response.

        Uses the ``error`` field, then ``message``, then ``HTTP {status}``. A
        body that is not a JSON object also falls back to ``HTTP {status}``.
        """
        fallback = f"HTTP {response.status_code}"
        try:
            body = json.loads(response.text)
        except ValueError:
            return fallback

        if not isinstance(body, dict):
            return fallback

        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str):
                return value

        return fallback

    @staticmethod
    def _decode_body(path: str, response: httpx.Response) -> Any:
        try:
            return json.loads(response.text)
        except ValueError as e:
            logger.warning("Failed to decode FiveStar response", path=path, error=str(e))
            raise FiveStarAPIError(DESERIALIZE_FAILED) from e

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Unexpected FiveStar response shape", model=model.__name__, error=str(e)
            )
            raise FiveStarAPIError(DESERIALIZE_FAILED) from e

    def _parse_response_types(self, data: Any) -> List[ResponseType]:
        if not isinstance(data, dict):
            raise FiveStarAPIError(DESERIALIZE_FAILED)

        types = data.get("types")
        if types is None:
            return []
        if not isinstance(types, list):
            raise FiveStarAPIError(DESERIALIZE_FAILED)

        return [self._parse(ResponseType, item) for item in types]

    def _parse_verify(self, data: Any) -> VerifyCustomerResult:
        if data is None:
            return VerifyCustomerResult(valid=False)
        return self._parse(VerifyCustomerResult, data)

    def _verification_failed(self, customer_id: str, error: Exception) -> VerifyCustomerResult:
        logger.info("Customer verification failed", customer_id=customer_id, error=str(error))
        return VerifyCustomerResult(valid=False, message=VERIFICATION_FAILED)


class FiveStarClient(BaseFiveStarClient):
    """Async client for the FiveStar Support API.

    Owns one ``httpx.AsyncClient``; release it with ``aclose()`` or by using
    the client as an async context manager. Cancelling the awaiting task
    abandons the in-flight request and raises ``asyncio.CancelledError``.
    """

    def __init__(
        self,
        client_id: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        platform: Optional[str] = None,
        app_version: Optional[str] = None,
        device_model: Optional[str] = None,
        os_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            client_id,
            api_url=api_url,
            timeout=timeout,
            platform=platform,
            app_version=app_version,
            device_model=device_model,
            os_version=os_version,
        )
        self._http = httpx.AsyncClient(
            base_url=self._api_url,
            timeout=httpx.Timeout(self._timeout),
            headers=self._default_headers(),
            transport=transport,
        )

    async def __aenter__(self) -> "FiveStarClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP client."""
        await self._http.aclose()

    async def list_response_types(self) -> List[ResponseType]:
        """
        Get all available response types for this client.

        Returns:
            Response types in server order (empty if the server sent none)
        """
        data = await self._get(RESPONSE_TYPES_PATH)
        return self._parse_response_types(data)

    async def generate_customer_id(self) -> GenerateCustomerIdResult:
        """
        Generate a new customer ID from the server.

        Returns:
            Generated customer ID with expiration info
        """
        data = await self._post(GENERATE_CUSTOMER_PATH, self._generate_payload())
        return self._parse(GenerateCustomerIdResult, data)

    async def register_customer(
        self, customer_id: str, options: Optional[RegisterCustomerOptions] = None
    ) -> RegisterCustomerResult:
        """
        Register a customer ID for this client.

        Call after generate_customer_id() to associate the ID with optional
        customer information.

        Args:
            customer_id: The customer ID from generate_customer_id()
            options: Optional customer information (email, name)

        Returns:
            Registration result
        """
        data = await self._post(
            REGISTER_CUSTOMER_PATH, self._register_payload(customer_id, options)
        )
        return self._parse(RegisterCustomerResult, data)

    async def verify_customer(self, customer_id: str) -> VerifyCustomerResult:
        """
        Check if a customer ID is valid and registered for this client.

        API, transport and body-decoding failures are reported as an invalid result rather
        than raised.

        Args:
            customer_id: The customer ID to verify

        Returns:
            Verification result
        """
        try:
            data = await self._post(VERIFY_CUSTOMER_PATH, self._verify_payload(customer_id))
            return self._parse_verify(data)
        except (FiveStarAPIError, httpx.RequestError) as e:
            return self._verification_failed(customer_id, e)

    async def submit_response(self, options: SubmitResponseOptions) -> SubmitResponseResult:
        """
        Submit a new response on behalf of a customer.

        Args:
            options: Customer ID, title, description and response type

        Returns:
            The submitted response result
        """
        data = await self._post(SUBMIT_RESPONSE_PATH, self._submit_payload(options))
        return self._parse(SubmitResponseResult, data)

    async def _get(self, path: str) -> Any:
        logger.debug("FiveStar request", method="GET", path=path)
        response = await self._http.get(path)
        return self._handle_get_response(path, response)

    async def _post(self, path: str, payload: dict) -> Any:
        logger.debug("FiveStar request", method="POST", path=path)
        response = await self._http.post(path, json=payload)
        return self._handle_post_response(path, response)


class FiveStarSyncClient(BaseFiveStarClient):
    """Blocking client for the FiveStar Support API.

    Same operations as FiveStarClient over an ``httpx.Client``; release it
    with ``close()`` or by using the client as a context manager.
    """

    def __init__(
        self,
        client_id: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        platform: Optional[str] = None,
        app_version: Optional[str] = None,
        device_model: Optional[str] = None,
        os_version: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            client_id,
            api_url=api_url,
            timeout=timeout,
            platform=platform,
            app_version=app_version,
            device_model=device_model,
            os_version=os_version,
        )
        self._http = httpx.Client(
            base_url=self._api_url,
            timeout=httpx.Timeout(self._timeout),
            headers=self._default_headers(),
            transport=transport,
        )

    def __enter__(self) -> "FiveStarSyncClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP client."""
        self._http.close()

    def list_response_types(self) -> List[ResponseType]:
        """Get all available response types for this client."""
        return self._parse_response_types(self._get(RESPONSE_TYPES_PATH))

    def generate_customer_id(self) -> GenerateCustomerIdResult:
        """Generate a new customer ID from the server."""
        data = self._post(GENERATE_CUSTOMER_PATH, self._generate_payload())
        return self._parse(GenerateCustomerIdResult, data)

    def register_customer(
        self, customer_id: str, options: Optional[RegisterCustomerOptions] = None
    ) -> RegisterCustomerResult:
        """Register a customer ID for this client."""
        data = self._post(REGISTER_CUSTOMER_PATH, self._register_payload(customer_id, options))
        return self._parse(RegisterCustomerResult, data)

    def verify_customer(self, customer_id: str) -> VerifyCustomerResult:
        """Check if a customer ID is valid; failures yield an invalid result."""
        try:
            data = self._post(VERIFY_CUSTOMER_PATH, self._verify_payload(customer_id))
            return self._parse_verify(data)
        except (FiveStarAPIError, httpx.RequestError) as e:
            return self._verification_failed(customer_id, e)

    def submit_response(self, options: SubmitResponseOptions) -> SubmitResponseResult:
        """Submit a new response on behalf of a customer."""
        data = self._post(SUBMIT_RESPONSE_PATH, self._submit_payload(options))
        return self._parse(SubmitResponseResult, data)

    def _get(self, path: str) -> Any:
        logger.debug("FiveStar request", method="GET", path=path)
        response = self._http.get(path)
        return self._handle_get_response(path, response)

    def _post(self, path: str, payload: dict) -> Any:
        logger.debug("FiveStar request", method="POST", path=path)
        response = self._http.post(path, json=payload)
        return self._handle_post_response(path, response)
