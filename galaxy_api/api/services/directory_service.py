# _*_ coding: utf-8 _*_
"""Directory Service for resolving Active Directory group membership."""
import logging
from typing import List, Set

from galaxy_api.config import settings
from galaxy_api.directory.protocol import DirectoryClient
from galaxy_api.types.models.directory import DirectoryGroup
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


class DirectoryService:
    """디렉토리(Active Directory) 조회를 담당하는 서비스"""

    def __init__(self, directory: DirectoryClient, group_search_limit: int = None):
        if directory is None:
            raise ValueError("Directory client is required")

        self.directory = directory
        self.group_search_limit = group_search_limit or settings.directory_group_search_limit

    async def resolve_groups(self, user_id: str) -> Set[str]:
        """
        사용자가 속한 모든 그룹 ID (중첩 그룹 포함, 중복 없음)

        그룹이 다른 그룹의 멤버일 수 있으므로 더 이상 새 그룹이 나오지 않을 때까지
        작업 목록을 따라 조회한다. 이미 방문한 그룹은 다시 조회하지 않으므로
        순환 구조에서도 종료된다.

        Raises:
            HandledException: 사용자가 없으면 USER_NOT_FOUND, 디렉토리 오류는 DIRECTORY_ERROR
        """
        try:
            user = await self.directory.find_user(user_id)
            if user is None:
                raise HandledException(ResponseCode.USER_NOT_FOUND, msg=f"user_id={user_id}")

            visited: Set[str] = set()
            worklist: List[str] = [group.id for group in await self.directory.get_group_membership_for_user(user_id)]
            while worklist:
                group_id = worklist.pop()
                if group_id in visited:
                    continue
                visited.add(group_id)

                for parent in await self.directory.get_group_membership_for_group(group_id):
                    if parent.id not in visited:
                        worklist.append(parent.id)

            logger.debug(f"그룹 해석 완료: user_id={user_id}, groups={len(visited)}")
            return visited
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e, msg=f"user_id={user_id}")

    async def search_groups(self, starts_with: str) -> List[DirectoryGroup]:
        """표시 이름이 주어진 문자열로 시작하는 디렉토리 그룹 검색"""
        if starts_with is None or not starts_with.strip():
            raise HandledException(ResponseCode.REQUIRED_FIELD_MISSING, msg="startsWith")

        try:
            return await self.directory.find_groups(starts_with.strip(), self.group_search_limit)
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, e=e)
