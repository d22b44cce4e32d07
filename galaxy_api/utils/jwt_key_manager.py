# _*_ coding: utf-8 _*_
"""SSO 토큰 서명 검증용 JWKS 공개키 관리 (RS256)"""
import base64
import logging
from typing import Dict, Optional

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


def _b64_to_int(value: str) -> int:
    padded = value + "=" * (-len(value) % 4)
    return int.from_bytes(base64.urlsafe_b64decode(padded), byteorder="big")


class JWTKeyManager:
    """kid(Key ID) 기반 공개키 조회기

    - JWKS 응답에서 찾은 키는 인스턴스 캐시에 PEM 형식으로 보관한다.
    - 캐시에 없는 kid는 JWKS를 한 번 다시 조회한 뒤 판단한다.
    """

    def __init__(self, jwks_uri: Optional[str] = None, timeout: float = 5.0):
        self._cache: Dict[str, str] = {}  # kid -> PEM
        self.jwks_uri = jwks_uri
        self.timeout = timeout

    async def get_public_key(self, kid: str) -> str:
        if kid in self._cache:
            return self._cache[kid]

        logger.info(f"JWKS 키 캐시에 없음, 갱신 시도: kid={kid}")
        await self._refresh_keys()

        if kid in self._cache:
            return self._cache[kid]

        raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg=f"알 수 없는 kid: {kid}")

    async def _refresh_keys(self) -> None:
        if not self.jwks_uri:
            raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg="SSO_JWKS_URI가 설정되지 않았습니다.")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.jwks_uri)
                response.raise_for_status()
                jwks = response.json()
        except httpx.HTTPError as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg="JWKS 엔드포인트 조회 실패")

        for key_data in jwks.get("keys", []):
            kid = key_data.get("kid")
            if not kid or key_data.get("kty") != "RSA":
                continue
            try:
                self._cache[kid] = self._jwk_to_pem(key_data)
            except ValueError as e:
                logger.warning(f"JWK 변환 실패 (kid={kid}): {e}")

    @staticmethod
    def _jwk_to_pem(jwk: dict) -> str:
        """RSA JWK를 PEM 형식 공개키로 변환"""
        try:
            public_numbers = rsa.RSAPublicNumbers(_b64_to_int(jwk["e"]), _b64_to_int(jwk["n"]))
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid JWK format: {e}")

        pem = public_numbers.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo
        )
        return pem.decode("utf-8")
