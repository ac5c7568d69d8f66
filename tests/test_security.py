from routine_api.app.core.config import Settings
from routine_api.app.core.security import (
    create_access_token,
    create_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "garbage")


def test_access_token_decodes_with_same_secret():
    settings = Settings(secret_key="one")
    payload = decode_token(create_access_token("u1", settings), settings)
    assert payload["sub"] == "u1"
    assert payload["purpose"] == "access"


def test_token_rejected_with_other_secret_or_expired():
    token = create_access_token("u1", Settings(secret_key="one"))
    assert decode_token(token, Settings(secret_key="two")) is None
    expired = create_token({"sub": "u1"}, Settings(secret_key="one"), expires_in=-10)
    assert decode_token(expired, Settings(secret_key="one")) is None
    assert decode_token("not.a.token", Settings(secret_key="one")) is None
