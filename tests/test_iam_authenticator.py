"""
Tests for IamAuthenticator

These tests verify:
1. API key validation at construction
2. Token exchange request format
3. Token caching until expiry
4. Exactly one refresh after expiry, shared by concurrent callers
5. Mapping of IAM failures to AuthError

Run with: pytest tests/test_iam_authenticator.py -v
"""

import asyncio
import json
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from watson_speech.auth.iam_authenticator import (
    GRANT_TYPE,
    IAM_URL,
    AccessToken,
    IamAuthenticator,
)
from watson_speech.errors import (
    AuthError,
    DeserializationError,
    ErrorCode,
    InvalidApiKeyError,
    TransportError,
)
from watson_speech.transport.http import HttpResponse


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestAuthenticatorConstruction:
    """Tests for IamAuthenticator initialization."""

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_empty_api_key_rejected(self, api_key, transport):
        """Empty or blank API keys should raise AuthError."""
        with pytest.raises(AuthError):
            IamAuthenticator(api_key, transport=transport)

    def test_construction_does_not_contact_iam(self, transport, clock):
        """Plain construction should be lazy."""
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        assert auth.cached_token is None
        assert transport.calls == []

    def test_default_url(self, transport):
        """Should default to the public IAM endpoint."""
        auth = IamAuthenticator("test-api-key", transport=transport)

        assert auth.url == "https://iam.cloud.ibm.com/identity/token"

    def test_repr_masks_key(self, transport):
        """repr should never contain the full key."""
        auth = IamAuthenticator("supersecretkey", transport=transport)

        assert "supersecretkey" not in repr(auth)
        assert "supe" in repr(auth)

    @pytest.mark.asyncio
    async def test_create_performs_initial_exchange(self, transport, clock):
        """create() should return an authenticator holding a valid token."""
        transport.add_token("abc")

        auth = await IamAuthenticator.create("test-api-key", transport=transport, clock=clock)

        assert auth.cached_token is not None
        assert auth.cached_token.value == "abc"
        assert len(transport.iam_calls) == 1

    @pytest.mark.asyncio
    async def test_create_surfaces_auth_error(self, transport, clock):
        """create() should fail when the initial exchange fails."""
        transport.add_json("POST", IAM_URL, {"errorMessage": "Provided API key could not be found"}, status=400)

        with pytest.raises(AuthError):
            await IamAuthenticator.create("bad-key", transport=transport, clock=clock)


# =============================================================================
# TOKEN EXCHANGE
# =============================================================================

class TestTokenExchange:
    """Tests for the IAM request itself."""

    @pytest.mark.asyncio
    async def test_exchange_request_format(self, authenticator, transport):
        """Should POST the apikey grant as form data."""
        await authenticator.token()

        call = transport.iam_calls[0]
        assert call["method"] == "POST"
        assert call["url"] == IAM_URL
        assert call["data"] == {"grant_type": GRANT_TYPE, "apikey": "test-api-key"}
        assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert call["headers"]["Accept"] == "application/json"

    def test_grant_type_constant(self):
        """Grant type should be the IBM apikey grant."""
        assert GRANT_TYPE == "urn:ibm:params:oauth:grant-type:apikey"

    @pytest.mark.asyncio
    async def test_custom_iam_url(self, transport, clock):
        """Should send the exchange to a configured endpoint."""
        url = "https://iam.test.cloud.ibm.com/identity/token"
        transport.add_json("POST", url, {"access_token": "xyz", "expires_in": 60})
        auth = IamAuthenticator("test-api-key", url=url, transport=transport, clock=clock)

        token = await auth.token()

        assert token.value == "xyz"
        assert transport.calls[0]["url"] == url

    @pytest.mark.asyncio
    async def test_expiry_computed_from_clock(self, authenticator, clock):
        """expires_at should be issue time plus expires_in."""
        token = await authenticator.token()

        assert token.expires_at == clock.now + 3600

    @pytest.mark.asyncio
    async def test_authorization_header(self, authenticator):
        """Should build a bearer header."""
        header = await authenticator.authorization_header()

        assert header == {"Authorization": "Bearer abc"}


# =============================================================================
# CACHING AND REFRESH
# =============================================================================

class TestTokenCaching:
    """Tests for caching, expiry and single-flight refresh."""

    @pytest.mark.asyncio
    async def test_token_cached_before_expiry(self, authenticator, transport):
        """Two calls before expiry should issue one IAM call."""
        first = await authenticator.token()
        second = await authenticator.token()

        assert first is second
        assert len(transport.iam_calls) == 1
        assert authenticator.refresh_count == 1

    @pytest.mark.asyncio
    async def test_token_valid_until_expiry_instant(self, authenticator, transport, clock):
        """A token is still served one second before expiry."""
        await authenticator.token()
        clock.advance(3599)

        await authenticator.token()

        assert len(transport.iam_calls) == 1

    @pytest.mark.asyncio
    async def test_expired_token_refreshed_once(self, transport, clock):
        """After expiry exactly one refresh should happen."""
        transport.add_token("first", "second")
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        assert (await auth.token()).value == "first"
        clock.advance(3600)

        assert (await auth.token()).value == "second"
        assert (await auth.token()).value == "second"
        assert len(transport.iam_calls) == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_refresh(self, authenticator, transport):
        """Concurrent token() calls should trigger a single exchange."""
        transport.delay = 0.01

        tokens = await asyncio.gather(*(authenticator.token() for _ in range(10)))

        assert {token.value for token in tokens} == {"abc"}
        assert len(transport.iam_calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_callers_after_expiry(self, transport, clock):
        """Concurrent callers after expiry should trigger a single refresh."""
        transport.add_token("first", "second")
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)
        await auth.token()
        clock.advance(4000)
        transport.delay = 0.01

        tokens = await asyncio.gather(*(auth.token() for _ in range(5)))

        assert {token.value for token in tokens} == {"second"}
        assert len(transport.iam_calls) == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_failed_refresh(self, transport, clock):
        """Callers queued behind a failing exchange should get its error, not retry it."""
        transport.add_json("POST", IAM_URL, {"errorMessage": "unavailable"}, status=503)
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)
        transport.delay = 0.01

        results = await asyncio.gather(
            *(auth.token() for _ in range(5)), return_exceptions=True
        )

        assert all(isinstance(result, AuthError) for result in results)
        assert {result.status_code for result in results} == {503}
        assert len(transport.iam_calls) == 1

    @pytest.mark.asyncio
    async def test_failed_refresh_does_not_block_later_calls(self, transport, clock):
        """A later token() after a failure should try IAM again."""
        transport.add("POST", IAM_URL, HttpResponse(status=503, body=b"{}"))
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError):
            await auth.token()

        transport.add_token("recovered")
        token = await auth.token()

        assert token.value == "recovered"
        assert len(transport.iam_calls) == 2

    @pytest.mark.asyncio
    async def test_refresh_forces_exchange(self, authenticator, transport):
        """refresh() should exchange even when the cached token is valid."""
        await authenticator.token()
        await authenticator.refresh()

        assert len(transport.iam_calls) == 2

    @pytest.mark.asyncio
    async def test_invalidate_drops_cached_token(self, authenticator, transport):
        """invalidate() should make the next token() exchange again."""
        await authenticator.token()
        authenticator.invalidate()

        assert authenticator.cached_token is None
        await authenticator.token()
        assert len(transport.iam_calls) == 2

    @pytest.mark.asyncio
    async def test_end_to_end_expiry_scenario(self, transport, clock):
        """Fake IAM issues abc for 3600s; past that exactly one new call is made."""
        transport.add_json("POST", IAM_URL, {"access_token": "abc", "expires_in": 3600})
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        token = await auth.token()
        assert token.value == "abc"
        assert len(transport.iam_calls) == 1

        clock.advance(3601)
        await auth.token()

        assert len(transport.iam_calls) == 2


# =============================================================================
# FAILURES
# =============================================================================

class TestTokenExchangeFailures:
    """Tests for mapping IAM failures to AuthError."""

    @pytest.mark.asyncio
    async def test_400_is_parameter_validation_error(self, transport, clock):
        """400 should surface as a permanent AuthError."""
        transport.add_json("POST", IAM_URL, {"errorMessage": "Provided API key could not be found"}, status=400)
        auth = IamAuthenticator("bad-key", transport=transport, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await auth.token()

        assert exc_info.value.status_code == 400
        assert exc_info.value.is_transient is False
        assert "Provided API key could not be found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_401_is_invalid_api_key(self, transport, clock):
        """401 should surface as InvalidApiKeyError."""
        transport.add_json("POST", IAM_URL, {"errorMessage": "Unauthorized"}, status=401)
        auth = IamAuthenticator("bad-key", transport=transport, clock=clock)

        with pytest.raises(InvalidApiKeyError) as exc_info:
            await auth.token()

        assert exc_info.value.error_code == ErrorCode.INVALID_API_KEY

    @pytest.mark.asyncio
    async def test_403_is_not_allowed(self, transport, clock):
        """403 should surface as AuthError."""
        transport.add_json("POST", IAM_URL, {"errorMessage": "Forbidden"}, status=403)
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await auth.token()

        assert exc_info.value.status_code == 403
        assert not isinstance(exc_info.value, InvalidApiKeyError)

    @pytest.mark.asyncio
    async def test_5xx_is_transient(self, transport, clock):
        """5xx should surface as a transient AuthError."""
        transport.add("POST", IAM_URL, HttpResponse(status=503, body=b"Service Unavailable"))
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await auth.token()

        assert exc_info.value.is_transient is True
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_network_failure_wraps_transport_error(self, transport, clock):
        """Connection failures should become AuthError with the transport cause."""
        cause = TransportError("POST iam failed: connection refused")
        transport.add("POST", IAM_URL, cause)
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await auth.token()

        assert exc_info.value.cause is cause
        assert exc_info.value.is_transient is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        b"not json",
        b"",
        json.dumps({"expires_in": 3600}).encode(),
        json.dumps({"access_token": "abc"}).encode(),
        json.dumps(["abc"]).encode(),
    ])
    async def test_malformed_response(self, body, transport, clock):
        """Malformed IAM bodies should surface as AuthError."""
        transport.add("POST", IAM_URL, HttpResponse(status=200, body=body))
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await auth.token()

        assert isinstance(exc_info.value.cause, DeserializationError)
        assert auth.cached_token is None

    @pytest.mark.asyncio
    async def test_failed_refresh_not_retried(self, transport, clock):
        """A failed exchange should make exactly one IAM call."""
        transport.add("POST", IAM_URL, HttpResponse(status=500, body=b"{}"))
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError):
            await auth.token()

        assert len(transport.iam_calls) == 1

    @pytest.mark.asyncio
    async def test_failed_refresh_allows_later_success(self, transport, clock):
        """After a failure the next call should try again."""
        transport.add(
            "POST",
            IAM_URL,
            HttpResponse(status=500, body=b"{}"),
            HttpResponse(status=200, body=json.dumps({"access_token": "abc", "expires_in": 3600}).encode()),
        )
        auth = IamAuthenticator("test-api-key", transport=transport, clock=clock)

        with pytest.raises(AuthError):
            await auth.token()

        assert (await auth.token()).value == "abc"


# =============================================================================
# ACCESS TOKEN
# =============================================================================

class TestAccessToken:
    """Tests for the AccessToken value type."""

    def test_from_response_optional_fields(self):
        """Should keep the optional IAM fields."""
        token = AccessToken.from_response(
            {
                "access_token": "abc",
                "refresh_token": "not_supported",
                "token_type": "Bearer",
                "expires_in": 3600,
                "expiration": 1700003600,
                "scope": "ibm openid",
            },
            issued_at=100.0,
        )

        assert token.expires_at == 3700.0
        assert token.refresh_token == "not_supported"
        assert token.expiration == 1700003600
        assert token.scope == "ibm openid"

    def test_is_expired_boundary(self):
        """A token is expired at its expiry instant."""
        token = AccessToken(value="abc", expires_at=100.0)

        assert token.is_expired(99.9) is False
        assert token.is_expired(100.0) is True

    def test_repr_masks_value(self):
        """repr should not leak the token."""
        token = AccessToken(value="eyJhbGciOiJIUzI1NiJ9", expires_at=1.0)

        assert "eyJhbGciOiJIUzI1NiJ9" not in repr(token)
