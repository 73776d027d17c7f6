"""
Shared plumbing for Watson service clients.

Every service operation goes through WatsonService._request:
1. fetch a valid bearer token from the IamAuthenticator
2. send the request through the HttpTransport
3. map non-2xx responses to TransportError
4. decode JSON bodies into the requested pydantic type

Retries are opt-in: RetryConfig.max_attempts defaults to 1. When the
caller raises it, Tenacity retries transient TransportErrors only.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config.config import RetryConfig
from watson_speech.auth.iam_authenticator import IamAuthenticator
from watson_speech.errors import (
    DeserializationError,
    ErrorContext,
    TransportError,
    WatsonError,
    is_transient_error,
)
from watson_speech.transport.http import HttpResponse, HttpTransport
from watson_speech.utils.helpers import drop_none, generate_request_id, join_url
from watson_speech.utils.logging import PerformanceLogger, request_id_var

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, TransportError) and is_transient_error(error)


class WatsonService:
    """
    Base class for Watson service clients.

    Attributes:
        authenticator: IAM authenticator supplying bearer tokens
        service_url: Base URL of the service instance
        transport: HTTP transport
        retry_config: Caller-controlled retry (no retries by default)
    """

    SERVICE_NAME = "watson"

    def __init__(
        self,
        authenticator: IamAuthenticator,
        service_url: str,
        transport: Optional[HttpTransport] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        if not service_url or not service_url.strip():
            raise ValueError("Service URL cannot be empty")

        self.authenticator = authenticator
        self.service_url = service_url.strip().rstrip("/")
        self.transport = transport or authenticator.transport
        self.retry_config = retry_config or RetryConfig()
        self._perf = PerformanceLogger(logger)

        # Statistics
        self._total_requests = 0
        self._total_errors = 0
        self._total_retries = 0
        self._total_latency_ms = 0.0

    def _url(self, *segments: str) -> str:
        return join_url(self.service_url, *segments)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
        json_body: Any = None,
    ) -> HttpResponse:
        """
        Send an authenticated request and return the 2xx response.

        Raises:
            AuthError: If no valid token can be obtained
            TransportError: On network failure or non-2xx status
        """
        url = self._url(path)
        request_id = generate_request_id()
        context_token = request_id_var.set(request_id)
        start_time = time.time()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_config.max_attempts),
                wait=wait_exponential(
                    multiplier=self.retry_config.multiplier,
                    min=self.retry_config.min_wait,
                    max=self.retry_config.max_wait,
                ),
                retry=retry_if_exception(_is_retryable),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        self._total_retries += 1
                        logger.warning(
                            f"{operation} retry attempt {attempt.retry_state.attempt_number}"
                        )

                    response = await self._send(
                        method,
                        url,
                        operation=operation,
                        params=params,
                        headers=headers,
                        data=data,
                        json_body=json_body,
                    )
        except Exception as e:
            self._total_errors += 1
            if isinstance(e, WatsonError):
                e.context.metadata.setdefault("request_id", request_id)
            logger.error(f"{self.SERVICE_NAME} {operation} failed: {e}")
            raise
        finally:
            request_id_var.reset(context_token)

        self._total_requests += 1
        elapsed_ms = (time.time() - start_time) * 1000
        self._total_latency_ms += elapsed_ms
        self._perf.log_latency(
            operation,
            elapsed_ms,
            service=self.SERVICE_NAME,
            status=response.status,
            request_id=request_id,
        )

        return response

    async def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
        data: Any,
        json_body: Any,
    ) -> HttpResponse:
        request_headers = {"Accept": "application/json"}
        request_headers.update(headers or {})
        request_headers.update(await self.authenticator.authorization_header())

        response = await self.transport.request(
            method,
            url,
            headers=request_headers,
            params=drop_none(params or {}) or None,
            data=data,
            json_body=json_body,
        )

        if not response.ok:
            raise TransportError(
                f"{self.SERVICE_NAME} {operation} returned {response.status}: "
                f"{response.error_message()}",
                status_code=response.status,
                context=ErrorContext(
                    service=self.SERVICE_NAME,
                    operation=operation,
                    metadata={"url": url, "method": method},
                ),
            )

        return response

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def _parse(self, response: HttpResponse, model: Type[ModelT]) -> ModelT:
        return self._validate(response.json(), model, response.url)

    def _parse_list(
        self,
        response: HttpResponse,
        key: str,
        model: Type[ModelT],
    ) -> List[ModelT]:
        """Decode {key: [...]} into a list of models."""
        data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get(key), list):
            raise DeserializationError(
                f"Expected a '{key}' array in response from {response.url}"
            )
        return [self._validate(item, model, response.url) for item in data[key]]

    @staticmethod
    def _validate(data: Any, model: Type[ModelT], url: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(
                f"Unexpected {model.__name__} payload from {url}: {e}", cause=e
            ) from e

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        """
        Get client statistics.

        Returns:
            Dictionary with request statistics
        """
        avg_latency = 0.0
        if self._total_requests > 0:
            avg_latency = self._total_latency_ms / self._total_requests

        return {
            "total_requests": self._total_requests,
            "total_errors": self._total_errors,
            "total_retries": self._total_retries,
            "average_latency_ms": avg_latency,
            "service_url": self.service_url,
        }
