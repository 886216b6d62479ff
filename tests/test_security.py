from datetime import timedelta

import pytest
from jose import jwt

from marketplace.core.config import settings
from marketplace.core.errors import AuthorizationError, NotFoundError
from marketplace.core.security import (
    create_access_token,
    decode_access_token,
    ensure_owner,
    get_password_hash,
    verify_password,
)
from marketplace.routers.params import parse_id


def test_password_hash_is_one_way_and_verifiable():
    hashed = get_password_hash("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_token_carries_only_user_id_and_expires_in_four_days():
    token = create_access_token(42)
    claims = jwt.get_unverified_claims(token)
    assert set(claims) == {"sub", "exp"}
    assert claims["sub"] == "42"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 60 * 24 * 4
    assert decode_access_token(token) == 42


def test_expired_token_does_not_decode():
    assert decode_access_token(create_access_token(1, expires_delta=timedelta(seconds=-1))) is None


def test_token_signed_with_other_key_does_not_decode():
    token = jwt.encode({"sub": "1"}, "some-other-key", algorithm=settings.ALGORITHM)
    assert decode_access_token(token) is None


def test_token_with_non_numeric_subject_does_not_decode():
    token = jwt.encode({"sub": "alice"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    assert decode_access_token(token) is None


def test_ensure_owner():
    ensure_owner(3, 3)
    with pytest.raises(AuthorizationError):
        ensure_owner(3, 4)


@pytest.mark.parametrize("raw", ["abc", "0", "-1", "1.5", "", "٣"])
def test_parse_id_rejects_malformed_ids(raw):
    with pytest.raises(NotFoundError):
        parse_id(raw)


def test_parse_id_accepts_positive_integers():
    assert parse_id("17") == 17
    assert parse_id(str(2**63 - 1)) == 2**63 - 1


def test_parse_id_rejects_ids_beyond_64_bits():
    with pytest.raises(NotFoundError):
        parse_id(str(2**63))
