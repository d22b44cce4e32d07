# _*_ coding: utf-8 _*_
"""
Azure Active Directory client over Microsoft Graph.

App-only access (OAuth2 client-credentials grant). The application
registration needs `User.Read.All` and `GroupMember.Read.All`.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from galaxy_api.config import settings
from galaxy_api.types.models.directory import DirectoryGroup, DirectoryUser
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)

GRAPH_SCOPE = "https://graph.microsoft.com/.default"


class ActiveDirectoryClient:
    """Microsoft Graph 기반 디렉토리 조회 클라이언트 (요청 단위로 생성)"""

    def __init__(
        self,
        base_url: str = None,
        token_url: str = None,
        client_id: str = None,
        client_secret: str = None,
        timeout: float = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.directory_base_url).rstrip("/")
        self.token_url = token_url or settings.get_directory_token_url()
        self.client_id = client_id if client_id is not None else settings.directory_client_id
        self.client_secret = client_secret if client_secret is not None else settings.directory_client_secret
        self._client = http_client or httpx.AsyncClient(timeout=timeout or settings.directory_timeout)
        self._owns_client = http_client is None
        self._access_token: Optional[str] = None

    async def __aenter__(self) -> "ActiveDirectoryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_access_token(self) -> str:
        if self._access_token:
            return self._access_token

        response = await self._client.post(
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": GRAPH_SCOPE,
            },
        )
        response.raise_for_status()
        self._access_token = response.json()["access_token"]
        return self._access_token

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        if not url.startswith("http"):
            url = f"{self.base_url}{url}"
        token = await self._get_access_token()
        return await self._client.get(url, params=params, headers={"Authorization": f"Bearer {token}"})

    async def _get_all(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[dict]:
        """`@odata.nextLink`를 따라 모든 페이지의 value를 모은다"""
        items: List[dict] = []
        url: Optional[str] = path
        while url:
            response = await self._get(url, params)
            response.raise_for_status()
            body = response.json()
            items.extend(body.get("value", []))
            url = body.get("@odata.nextLink")
            params = None  # nextLink에 쿼리가 포함되어 있음
        return items

    @staticmethod
    def _to_groups(items: List[dict]) -> List[DirectoryGroup]:
        return [
            DirectoryGroup(id=item["id"], display_name=item.get("displayName"))
            for item in items
            if item.get("@odata.type", "#microsoft.graph.group") == "#microsoft.graph.group"
        ]

    async def find_user(self, user_id: str) -> Optional[DirectoryUser]:
        try:
            response = await self._get(
                f"/users/{quote(user_id, safe='@')}",
                {"$select": "id,displayName,userPrincipalName"},
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            body = response.json()
            return DirectoryUser(
                id=body["id"],
                display_name=body.get("displayName"),
                user_principal_name=body.get("userPrincipalName"),
            )
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg=f"사용자 조회 실패: {user_id}")

    async def get_group_membership_for_user(self, user_id: str) -> List[DirectoryGroup]:
        try:
            items = await self._get_all(
                f"/users/{quote(user_id, safe='@')}/memberOf/microsoft.graph.group",
                {"$select": "id,displayName"},
            )
            return self._to_groups(items)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg=f"사용자 그룹 조회 실패: {user_id}")

    async def get_group_membership_for_group(self, group_id: str) -> List[DirectoryGroup]:
        try:
            items = await self._get_all(
                f"/groups/{quote(group_id, safe='')}/memberOf/microsoft.graph.group",
                {"$select": "id,displayName"},
            )
            return self._to_groups(items)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg=f"그룹 소속 조회 실패: {group_id}")

    async def find_groups(self, starts_with: str, limit: int) -> List[DirectoryGroup]:
        # OData 문자열 리터럴은 작은따옴표를 두 번 써서 이스케이프
        prefix = starts_with.replace("'", "''")
        try:
            response = await self._get(
                "/groups",
                {
                    "$filter": f"startswith(displayName,'{prefix}')",
                    "$top": limit,
                    "$select": "id,displayName",
                },
            )
            response.raise_for_status()
            return self._to_groups(response.json().get("value", []))
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg=f"그룹 검색 실패: {starts_with}")
