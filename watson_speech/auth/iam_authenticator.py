"""
IAM Authenticator for watson-speech.

Exchanges an IBM Cloud API key for a bearer token at the IAM token
endpoint and caches it until it expires.

- One cached AccessToken per authenticator instance
- Lazy refresh on token() when the cached token is absent or expired
- Refreshes serialized by an asyncio.Lock: concurrent callers share one
  IAM round-trip
- No internal retry; a failed refresh raises AuthError to the caller

Example:
    auth = await IamAuthenticator.create("your-api-key")
    token = await auth.token()
    headers = {"Authorization": f"Bearer {token.value}"}
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from watson_speech.errors import (
    AuthError,
    DeserializationError,
    ErrorContext,
    InvalidApiKeyError,
    TransportError,
)
from watson_speech.transport.http import HttpTransport
from watson_speech.utils.helpers import mask_secret

logger = logging.getLogger(__name__)

IAM_URL = "https://iam.cloud.ibm.com/identity/token"
GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"


@dataclass(frozen=True)
class AccessToken:
    """
    IAM access token plus its expiry.

    Attributes:
        value: The bearer token
        expires_at: Clock time (seconds) after which the token is invalid
        token_type: Token type reported by IAM (normally "Bearer")
        refresh_token: IAM refresh token, if issued
        expiration: IAM absolute expiry (unix seconds), if reported
        scope: Granted scope, if reported
    """
    value: str
    expires_at: float
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expiration: Optional[int] = None
    scope: Optional[str] = None

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    @classmethod
    def from_response(cls, data: Any, issued_at: float) -> "AccessToken":
        """
        Build a token from the IAM JSON response.

        Raises:
            DeserializationError: If access_token or expires_in is missing
        """
        if not isinstance(data, dict):
            raise DeserializationError("IAM response is not a JSON object")

        value = data.get("access_token")
        expires_in = data.get("expires_in")
        if not isinstance(value, str) or not value:
            raise DeserializationError("IAM response is missing access_token")
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
            raise DeserializationError("IAM response is missing expires_in")

        return cls(
            value=value,
            expires_at=issued_at + float(expires_in),
            token_type=data.get("token_type") or "Bearer",
            refresh_token=data.get("refresh_token"),
            expiration=data.get("expiration"),
            scope=data.get("scope"),
        )

    def __repr__(self) -> str:
        return f"AccessToken(value={mask_secret(self.value)}, expires_at={self.expires_at})"


class IamAuthenticator:
    """
    Caching IAM token provider.

    Attributes:
        url: IAM token endpoint
        transport: HTTP transport used for the exchange
        clock: Time source in seconds; injectable for tests

    Example:
        auth = IamAuthenticator("your-api-key")
        token = await auth.token()      # first call exchanges the key
        token = await auth.token()      # cached until expiry
    """

    def __init__(
        self,
        api_key: str,
        url: str = IAM_URL,
        transport: Optional[HttpTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the authenticator without contacting IAM.

        Raises:
            AuthError: If the API key is empty
        """
        if not api_key or not api_key.strip():
            raise AuthError("API key cannot be empty")

        self._api_key = api_key.strip()
        self.url = url
        self.transport = transport or HttpTransport()
        self.clock = clock

        self._token: Optional[AccessToken] = None
        self._lock = asyncio.Lock()
        self._refresh_count = 0
        # Bumped after every exchange attempt; lets waiters tell that the
        # exchange they queued behind has finished.
        self._generation = 0
        self._last_error: Optional[AuthError] = None

        logger.info(
            f"Initialized IamAuthenticator for key {mask_secret(self._api_key)}"
        )

    @classmethod
    async def create(
        cls,
        api_key: str,
        url: str = IAM_URL,
        transport: Optional[HttpTransport] = None,
        clock: Callable[[], float] = time.time,
    ) -> "IamAuthenticator":
        """
        Construct an authenticator and perform the initial token exchange.

        Raises:
            AuthError: If the key is empty or the exchange fails
        """
        authenticator = cls(api_key, url=url, transport=transport, clock=clock)
        await authenticator.token()
        return authenticator

    @property
    def cached_token(self) -> Optional[AccessToken]:
        return self._token

    @property
    def refresh_count(self) -> int:
        """Number of successful exchanges with IAM."""
        return self._refresh_count

    async def token(self) -> AccessToken:
        """
        Return a currently valid token, refreshing it if needed.

        Raises:
            AuthError: If a required refresh fails
        """
        token = self._token
        if token is not None and not token.is_expired(self.clock()):
            return token

        generation = self._generation
        async with self._lock:
            # An exchange finished while we waited: share its outcome.
            if self._generation != generation and self._last_error is not None:
                raise self._last_error
            token = self._token
            if token is not None and not token.is_expired(self.clock()):
                return token
            return await self._refresh_locked()

    async def refresh(self) -> AccessToken:
        """
        Force a token exchange regardless of the cached token.

        Raises:
            AuthError: If the exchange fails
        """
        async with self._lock:
            return await self._refresh_locked()

    def invalidate(self) -> None:
        """Drop the cached token; the next token() call refreshes."""
        self._token = None

    async def authorization_header(self) -> Dict[str, str]:
        token = await self.token()
        return {"Authorization": f"Bearer {token.value}"}

    async def _refresh_locked(self) -> AccessToken:
        self._last_error = None
        try:
            return await self._exchange()
        except AuthError as e:
            self._last_error = e
            raise
        finally:
            self._generation += 1

    async def _exchange(self) -> AccessToken:
        context = ErrorContext(service="iam", operation="token_exchange")
        issued_at = self.clock()

        try:
            response = await self.transport.request(
                "POST",
                self.url,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
                data={"grant_type": GRANT_TYPE, "apikey": self._api_key},
            )
        except TransportError as e:
            logger.error(f"IAM token exchange failed: {e}")
            raise AuthError(
                f"IAM token exchange failed: {e}",
                is_transient=True,
                context=context,
                cause=e,
            ) from e

        if not response.ok:
            raise self._status_error(response.status, response.error_message(), context)

        try:
            token = AccessToken.from_response(response.json(), issued_at)
        except DeserializationError as e:
            logger.error(f"Malformed IAM token response: {e}")
            raise AuthError(
                f"Malformed IAM token response: {e}", context=context, cause=e
            ) from e

        self._token = token
        self._refresh_count += 1
        logger.debug(
            f"IAM token refreshed, valid for {token.expires_at - issued_at:.0f}s"
        )
        return token

    @staticmethod
    def _status_error(
        status: int,
        detail: str,
        context: ErrorContext,
    ) -> AuthError:
        logger.error(f"IAM token exchange returned {status}: {detail}")
        context.metadata["status_code"] = status

        if status == 400:
            return AuthError(
                f"Parameter validation failed: {detail}",
                status_code=status,
                context=context,
            )
        if status == 401:
            return InvalidApiKeyError(
                f"Invalid API key: {detail}", status_code=status, context=context
            )
        if status == 403:
            return AuthError(
                f"Not allowed to perform the requested action: {detail}",
                status_code=status,
                context=context,
            )
        return AuthError(
            f"IAM error {status}: {detail}",
            status_code=status,
            is_transient=status == 429 or status >= 500,
            context=context,
        )

    def __repr__(self) -> str:
        return (
            f"IamAuthenticator(key={mask_secret(self._api_key)}, "
            f"refreshes={self._refresh_count})"
        )
