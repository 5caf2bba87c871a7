import time

import jwt
import pytest

from components.credentialservice.config import AuthSettings
from components.credentialservice.errors import InvalidTokenError
from components.credentialservice.hashing import PasswordHasher
from components.credentialservice.tokens import JWTTokenIssuer


# ---- PasswordHasher ----
def test_hasher_is_salted_and_verifies():
    hasher = PasswordHasher(iterations=1000)
    h1 = hasher.encode("securePass")
    h2 = hasher.encode("securePass")

    assert h1 != h2
    assert h1.startswith("pbkdf2_sha256$1000$")
    assert "securePass" not in h1
    assert hasher.matches("securePass", h1)
    assert hasher.matches("securePass", h2)
    assert not hasher.matches("securepass", h1)


@pytest.mark.parametrize("garbage", [
    "",
    "plaintext",
    "md5$1$salt$abc",
    "pbkdf2_sha256$notanint$salt$abc",
    "pbkdf2_sha256$99999999999999999999999$salt$abc",
    "pbkdf2_sha256$0$salt$abc",
    "pbkdf2_sha256$-5$salt$abc",
    "pbkdf2_sha256$1000$salt$éé",
])
def test_hasher_matches_is_false_for_malformed_hashes(garbage):
    assert PasswordHasher(iterations=1000).matches("anything", garbage) is False


def test_hasher_refuses_hashes_demanding_excessive_work():
    hasher = PasswordHasher(iterations=1000)
    costly = PasswordHasher(iterations=50_000).encode("pw")
    assert hasher.matches("pw", costly) is False
    assert PasswordHasher(iterations=10_000).matches("pw", hasher.encode("pw"))


def test_hasher_needs_rehash_on_policy_change():
    old = PasswordHasher(iterations=1000)
    new = PasswordHasher(iterations=2000)
    stored = old.encode("pw")

    assert not old.needs_rehash(stored)
    assert new.needs_rehash(stored)
    assert new.needs_rehash("garbage")
    # an older-policy hash still verifies under the new hasher
    assert new.matches("pw", stored)


def test_hasher_rejects_non_positive_iterations():
    with pytest.raises(ValueError):
        PasswordHasher(iterations=0)


# ---- JWTTokenIssuer ----
def make_issuer(**overrides):
    overrides.setdefault("AUTH_SECRET", "test-secret")
    settings = AuthSettings(**overrides)
    return JWTTokenIssuer(settings), settings


def test_token_round_trip_carries_subject_and_claims():
    issuer, settings = make_issuer()
    token = issuer.generate_token("jane@example.com", {"role": "STUDENT", "uid": 7})

    claims = issuer.verify_token(token)
    assert claims["sub"] == "jane@example.com"
    assert claims["role"] == "STUDENT"
    assert claims["uid"] == 7
    assert claims["iss"] == settings.AUTH_ISSUER
    assert claims["aud"] == settings.AUTH_AUDIENCE
    assert claims["exp"] - claims["iat"] == settings.AUTH_ACCESS_TTL_SECONDS


def test_tokens_are_unique_per_issue():
    issuer, _ = make_issuer()
    t1 = issuer.generate_token("jane@example.com", {"role": "STUDENT"})
    t2 = issuer.generate_token("jane@example.com", {"role": "STUDENT"})
    assert t1 != t2


def test_caller_claims_cannot_override_registered_claims():
    issuer, _ = make_issuer()
    token = issuer.generate_token("jane@example.com", {"sub": "admin@example.com", "exp": 1, "role": "STUDENT"})
    claims = issuer.verify_token(token)
    assert claims["sub"] == "jane@example.com"
    assert claims["exp"] > time.time()


def test_verify_rejects_tampered_and_foreign_tokens():
    issuer, _ = make_issuer()
    other, _ = make_issuer(AUTH_SECRET="another-secret")
    token = issuer.generate_token("jane@example.com", {"role": "STUDENT"})
    admin = issuer.generate_token("root@example.com", {"role": "ADMIN"})
    header, _, sig = token.split(".")
    forged = ".".join([header, admin.split(".")[1], sig])

    with pytest.raises(InvalidTokenError):
        other.verify_token(token)
    with pytest.raises(InvalidTokenError):
        issuer.verify_token(forged)
    with pytest.raises(InvalidTokenError):
        issuer.verify_token("not-a-jwt")


def test_verify_rejects_expired_token():
    settings = AuthSettings(AUTH_SECRET="test-secret", AUTH_ACCESS_TTL_SECONDS=60)
    past = JWTTokenIssuer(settings, now=lambda: time.time() - 3600)
    token = past.generate_token("jane@example.com", {"role": "STUDENT"})

    with pytest.raises(InvalidTokenError):
        JWTTokenIssuer(settings).verify_token(token)


def test_verify_rejects_wrong_audience():
    issuer, _ = make_issuer()
    token = jwt.encode(
        {"sub": "jane@example.com", "iat": int(time.time()), "exp": int(time.time()) + 60, "aud": "someone-else"},
        "test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        issuer.verify_token(token)
