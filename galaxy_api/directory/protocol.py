# _*_ coding: utf-8 _*_
"""
Protocol for directory clients used by the membership resolver.

Implementations must signal "user not found" (None) distinctly from an empty
membership list, and raise `HandledException(DIRECTORY_ERROR)` on any
communication failure.
"""
from typing import List, Optional, Protocol, runtime_checkable

from galaxy_api.types.models.directory import DirectoryGroup, DirectoryUser


@runtime_checkable
class DirectoryClient(Protocol):
    """Read-only view of the organisation directory (e.g. Active Directory)."""

    async def find_user(self, user_id: str) -> Optional[DirectoryUser]:
        """Return the user, or None when the directory has no such user."""
        ...

    async def get_group_membership_for_user(self, user_id: str) -> List[DirectoryGroup]:
        """Direct group memberships of a user."""
        ...

    async def get_group_membership_for_group(self, group_id: str) -> List[DirectoryGroup]:
        """Groups the given group is itself a direct member of."""
        ...

    async def find_groups(self, starts_with: str, limit: int) -> List[DirectoryGroup]:
        """Groups whose display name starts with the given prefix."""
        ...
