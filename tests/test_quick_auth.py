"""
Tests for Quick Auth JWT verification against a JWKS.
"""
import json
import time

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from whoiswho.clients.quick_auth import QuickAuthVerifier
from whoiswho.errors import UnauthorizedError

ISSUER = "https://auth.farcaster.xyz"
DOMAIN = "whoiswho.test"


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def jwks_client(private_key):
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({"kid": "key-1", "alg": "RS256", "use": "sig"})
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"keys": [jwk]})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.jwks_calls = calls
    return client


def make_token(private_key, **overrides):
    now = int(time.time())
    claims = {"iss": ISSUER, "aud": DOMAIN, "sub": "3", "iat": now, "exp": now + 600}
    claims.update(overrides)
    return jwt.encode(claims, private_key, algorithm="RS256", headers={"kid": "key-1"})


@pytest.mark.asyncio
async def test_valid_token_returns_fid(jwks_client, private_key):
    verifier = QuickAuthVerifier(jwks_client, ISSUER)

    assert await verifier.verify(make_token(private_key), DOMAIN) == 3
    assert await verifier.verify(make_token(private_key, sub="42"), DOMAIN) == 42
    # signing keys are fetched once and cached
    assert len(jwks_client.jwks_calls) == 1


@pytest.mark.asyncio
async def test_wrong_domain_is_rejected(jwks_client, private_key):
    verifier = QuickAuthVerifier(jwks_client, ISSUER)

    with pytest.raises(UnauthorizedError):
        await verifier.verify(make_token(private_key, aud="evil.test"), DOMAIN)


@pytest.mark.asyncio
async def test_expired_token_is_rejected(jwks_client, private_key):
    verifier = QuickAuthVerifier(jwks_client, ISSUER)
    token = make_token(private_key, iat=int(time.time()) - 7200, exp=int(time.time()) - 3600)

    with pytest.raises(UnauthorizedError):
        await verifier.verify(token, DOMAIN)


@pytest.mark.asyncio
async def test_token_signed_by_other_key_is_rejected(jwks_client):
    other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    verifier = QuickAuthVerifier(jwks_client, ISSUER)

    with pytest.raises(UnauthorizedError):
        await verifier.verify(make_token(other), DOMAIN)


@pytest.mark.asyncio
async def test_malformed_token_is_rejected(jwks_client):
    verifier = QuickAuthVerifier(jwks_client, ISSUER)

    with pytest.raises(UnauthorizedError):
        await verifier.verify("not-a-jwt", DOMAIN)
    assert jwks_client.jwks_calls == []
