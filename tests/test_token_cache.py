from datetime import timedelta

import pytest

from jobfeed.errors import AuthenticationError
from jobfeed.storage.token_cache import TokenCache


@pytest.fixture
def token_cache(fake_client, credentials, clock):
    return TokenCache(fake_client, credentials, clock=clock)


@pytest.mark.asyncio
async def test_first_call_authenticates(token_cache, fake_client, clock):
    token = await token_cache.get_token()

    assert token == "token-1"
    assert fake_client.auth_calls == 1
    assert token_cache.token.expires_at == clock.now + timedelta(hours=1)


@pytest.mark.asyncio
async def test_token_reused_within_ttl(token_cache, fake_client, clock):
    await token_cache.get_token()
    clock.advance(minutes=59)

    assert await token_cache.get_token() == "token-1"
    assert fake_client.auth_calls == 1


@pytest.mark.asyncio
async def test_token_refreshed_after_ttl(token_cache, fake_client, clock):
    await token_cache.get_token()
    clock.advance(minutes=61)
    fake_client.token = "token-2"

    assert await token_cache.get_token() == "token-2"
    assert fake_client.auth_calls == 2


@pytest.mark.asyncio
async def test_expiry_is_exclusive(token_cache, fake_client, clock):
    await token_cache.get_token()
    clock.advance(hours=1)

    await token_cache.get_token()
    assert fake_client.auth_calls == 2


@pytest.mark.asyncio
async def test_auth_failure_returns_none(failing_auth_client, credentials, clock):
    token_cache = TokenCache(failing_auth_client, credentials, clock=clock)

    assert await token_cache.get_token() is None
    assert token_cache.token is None


@pytest.mark.asyncio
async def test_auth_failure_keeps_previous_token(token_cache, fake_client, clock):
    await token_cache.get_token()
    previous = token_cache.token
    clock.advance(hours=2)
    fake_client.auth_error = AuthenticationError("connection reset")

    assert await token_cache.get_token() is None
    assert token_cache.token == previous
    assert fake_client.auth_calls == 2


@pytest.mark.asyncio
async def test_no_retry_within_a_call(failing_auth_client, credentials, clock):
    token_cache = TokenCache(failing_auth_client, credentials, clock=clock)

    await token_cache.get_token()
    await token_cache.get_token()
    assert failing_auth_client.auth_calls == 2


@pytest.mark.asyncio
async def test_invalidate_forces_authentication(token_cache, fake_client):
    await token_cache.get_token()
    token_cache.invalidate()

    await token_cache.get_token()
    assert fake_client.auth_calls == 2
