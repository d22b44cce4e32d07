from datetime import datetime, timedelta, timezone

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from galaxy_api.api.services.auth_service import AuthService, decode_access_token
from galaxy_api.api.services.directory_service import DirectoryService
from galaxy_api.api.services.permission_service import PermissionService
from galaxy_api.config import settings
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

from conftest import make_token


class StaticKeyManager:
    def __init__(self, keys):
        self.keys = keys

    async def get_public_key(self, kid):
        if kid not in self.keys:
            raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg=f"kid={kid}")
        return self.keys[kid]


@pytest.fixture(scope="module")
def signing_key():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_key, public_pem


def signed_sso_token(private_key, kid="key-1", **claims):
    now = datetime.now(timezone.utc)
    payload = {"iat": now, "exp": now + timedelta(minutes=5), **claims}
    return jwt.encode(payload, private_key, algorithm="RS256", headers={"kid": kid})


@pytest.fixture
def auth_service(database, directory, signing_key):
    directory.add_user("jdoe@example.com")
    return AuthService(
        DirectoryService(directory),
        PermissionService(database),
        key_manager=StaticKeyManager({"key-1": signing_key[1]}),
    )


def test_decode_access_token_returns_claims():
    assert decode_access_token(make_token("jdoe"))["sub"] == "jdoe"


@pytest.mark.parametrize(
    "token, code",
    [
        ("", ResponseCode.AUTH_TOKEN_MISSING),
        (make_token(expires_in=-1), ResponseCode.AUTH_TOKEN_EXPIRED),
        (make_token(secret="wrong-secret-0123456789-abcdefghijklmnopqrstuv"), ResponseCode.AUTH_TOKEN_INVALID),
        (jwt.encode({"name": "no subject"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm),
         ResponseCode.AUTH_TOKEN_INVALID),
    ],
)
def test_decode_access_token_failures(token, code):
    with pytest.raises(HandledException) as exc_info:
        decode_access_token(token)

    assert exc_info.value.resp_code is code


async def test_login_verifies_sso_signature_when_enabled(auth_service, signing_key, monkeypatch):
    monkeypatch.setattr(settings, "sso_verify_signature", True)

    result = await auth_service.login(signed_sso_token(signing_key[0], upn="jdoe@example.com"))

    assert result.user.user_id == "jdoe@example.com"
    assert decode_access_token(result.token.token)["sub"] == "jdoe@example.com"


@pytest.mark.parametrize("kid", ["key-2", None])
async def test_login_rejects_unknown_signing_key(auth_service, signing_key, monkeypatch, kid):
    monkeypatch.setattr(settings, "sso_verify_signature", True)
    token = signed_sso_token(signing_key[0], kid=kid, upn="jdoe@example.com")

    with pytest.raises(HandledException) as exc_info:
        await auth_service.login(token)

    assert exc_info.value.resp_code is ResponseCode.AUTH_TOKEN_INVALID


async def test_login_requires_user_claim(auth_service):
    with pytest.raises(HandledException) as exc_info:
        await auth_service.login(jwt.encode({"name": "Nobody"}, "upstream-key-0123456789", algorithm="HS256"))

    assert exc_info.value.resp_code is ResponseCode.REQUIRED_FIELD_MISSING
