"""
Tests for snapshot minting and the cached profile image.
"""
import io
import json

import httpx
from PIL import Image

from conftest import GATEWAY_URL, NEYNAR_URL, PINATA_URL, neynar_user
from whoiswho.aggregators.snapshot import build_attributes
from whoiswho.models.user_models import AggregatedUser

BULK_URL = f"{NEYNAR_URL}/user/bulk/"
PIN_FILE_URL = f"{PINATA_URL}/pinning/pinFileToIPFS"
PIN_JSON_URL = f"{PINATA_URL}/pinning/pinJSONToIPFS"


def pinata_ok(upstream):
    upstream.json("POST", PIN_FILE_URL, {"IpfsHash": "QmImage"})
    upstream.json("POST", PIN_JSON_URL, {"IpfsHash": "QmMeta"})


def test_successful_mint(client, upstream, renderer):
    upstream.json("GET", BULK_URL, {"users": [neynar_user(follower_count=10, following_count=4)]})
    pinata_ok(upstream)

    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"})

    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "imageHash": "QmImage",
        "metadataHash": "QmMeta",
        "imageUrl": f"{GATEWAY_URL}/QmImage",
        "metadataUrl": f"{GATEWAY_URL}/QmMeta",
    }
    assert "cache-control" not in r.headers

    image_request = upstream.requests_to(PIN_FILE_URL)[0]
    assert image_request.headers["authorization"] == "Bearer pinata-jwt"
    assert b"whoiswho-3-" in image_request.content
    assert b"image/jpeg" in image_request.content

    metadata = json.loads(upstream.requests_to(PIN_JSON_URL)[0].content)
    assert metadata["name"] == "WhoIsWho Profile - @dan"
    assert metadata["image"] == "ipfs://QmImage"
    assert metadata["external_url"] == "https://warpcast.com/dan"
    traits = {a["trait_type"]: a["value"] for a in metadata["attributes"]}
    assert traits["FID"] == 3
    assert traits["Followers"] == 10
    # unavailable score sources add no traits
    assert "Quotient Score" not in traits
    assert renderer.users[0]["username"] == "dan"


def test_missing_fields(client):
    for body in ({"fid": 3}, {"token": "token-3"}, {}):
        r = client.post("/api/generate-snapshot", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Missing fid or token", "code": "INVALID_INPUT"}


def test_invalid_token(client, upstream):
    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "garbage"})

    assert r.status_code == 401
    assert r.json() == {"error": "Invalid authentication token", "code": "UNAUTHORIZED"}
    assert upstream.calls == []


def test_token_for_other_fid(client, rate_limiter):
    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-4"})

    assert r.status_code == 403
    assert r.json()["error"] == "You can only mint your own profile"
    assert rate_limiter.attempts(3) == 0


def test_sixth_mint_is_rate_limited(client, upstream):
    upstream.json("GET", BULK_URL, {"users": [neynar_user()]})
    pinata_ok(upstream)

    for _ in range(5):
        assert client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"}).status_code == 200

    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"})

    assert r.status_code == 429
    assert r.json() == {"error": "Rate limit exceeded. Maximum 5 mints per hour.", "code": "RATE_LIMITED"}
    assert upstream.count(PIN_FILE_URL) == 5


def test_metadata_failure_unpins_image(client, upstream):
    upstream.json("GET", BULK_URL, {"users": [neynar_user()]})
    upstream.json("POST", PIN_FILE_URL, {"IpfsHash": "QmImage"})
    upstream.json("POST", PIN_JSON_URL, {"error": "pinning failed"}, status_code=500)
    upstream.add("DELETE", f"{PINATA_URL}/pinning/unpin/QmImage", lambda request: httpx.Response(200))

    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"})

    assert r.status_code == 500
    assert r.json()["code"] == "UPSTREAM_ERROR"
    assert upstream.count(f"{PINATA_URL}/pinning/unpin/QmImage", method="DELETE") == 1


def test_missing_pinata_jwt_fails_before_auth(make_client, settings, verifier, rate_limiter):
    settings.pinata_jwt = None
    client = make_client(settings)

    r = client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"})

    assert r.status_code == 500
    assert r.json() == {"error": "Server configuration error: PINATA_JWT is not set", "code": "CONFIG_ERROR"}
    assert verifier.calls == 0
    assert rate_limiter.attempts(3) == 0


def test_mint_reads_fresh_user_data(client, upstream):
    upstream.json("GET", BULK_URL, {"users": [neynar_user()]})
    pinata_ok(upstream)

    client.get("/api/user", params={"fid": "3"})
    client.post("/api/generate-snapshot", json={"fid": 3, "token": "token-3"})

    assert upstream.count(BULK_URL) == 2


def test_optional_traits_only_when_present():
    user = AggregatedUser(
        primary={"fid": 3, "username": "dan", "score": 0.8},
        quotient_score={"score": 0.9, "rank": None},
        talent_score={"builderScore": {"points": 120, "rank": 4}, "creatorScore": None},
    )
    traits = {a.trait_type: a.value for a in build_attributes(user, "2025-01-01")}

    assert traits["Quotient Score"] == 0.9
    assert "Quotient Rank" not in traits
    assert traits["Talent Builder Score"] == 120
    assert "Talent Creator Score" not in traits
    assert "Creator Rewards Score" not in traits
    assert traits["Mint Date"] == "2025-01-01"


def test_profile_image_is_jpeg_and_cached(client, upstream, renderer):
    upstream.json("GET", BULK_URL, {"users": [neynar_user()]})

    first = client.get("/api/profile/3/image")
    second = client.get("/api/profile/3/image")

    assert first.status_code == 200
    assert first.headers["content-type"] == "image/jpeg"
    assert first.headers["cache-control"] == "public, s-maxage=600, stale-while-revalidate=3600, max-age=600"
    assert Image.open(io.BytesIO(first.content)).format == "JPEG"
    assert second.content == first.content
    assert len(renderer.users) == 1


def test_profile_image_for_unknown_user(client, upstream, renderer):
    upstream.json("GET", BULK_URL, {"users": []})

    r = client.get("/api/profile/3/image")

    assert r.status_code == 200
    assert renderer.users == [None]


def test_profile_image_invalid_fid(client):
    assert client.get("/api/profile/abc/image").status_code == 400
