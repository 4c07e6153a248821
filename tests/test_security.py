"""Unit tests for budget_ledger.core.security: bcrypt hashing and JWT round trip."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from budget_ledger.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from support import TEST_JWT_SECRET, make_settings


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("s3cret-pass", rounds=4)
        self.assertNotEqual(hashed, "s3cret-pass")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("s3cret-pass", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("s3cret-pass", rounds=4)
        self.assertFalse(verify_password("other-pass", hashed))

    def test_same_password_gets_distinct_salts(self) -> None:
        self.assertNotEqual(
            hash_password("s3cret-pass", rounds=4),
            hash_password("s3cret-pass", rounds=4),
        )

    def test_garbage_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("s3cret-pass", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()

    def test_claims_round_trip(self) -> None:
        token = create_access_token(42, "read-only", "ro@example.com", self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "42")
        self.assertEqual(payload["role"], "read-only")
        self.assertEqual(payload["email"], "ro@example.com")

    def test_expiry_matches_settings(self) -> None:
        token = create_access_token(1, "user", "u@example.com", self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_other_key_rejected(self) -> None:
        token = create_access_token(1, "user", "u@example.com", self.settings)
        other = make_settings(JWT_SECRET=SecretStr("another-secret"))
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token, other)

    def test_expired_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "1", "role": "user", "email": "u@example.com", "exp": past},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)


if __name__ == "__main__":
    unittest.main()
