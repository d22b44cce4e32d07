import pytest

from galaxy_api.api.services.directory_service import DirectoryService
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode


async def test_resolve_groups_follows_nested_membership(directory):
    directory.add_user("alice", "g-team")
    directory.nest("g-team", "g-department")
    directory.nest("g-department", "g-company")

    groups = await DirectoryService(directory).resolve_groups("alice")

    assert groups == {"g-team", "g-department", "g-company"}


async def test_resolve_groups_terminates_on_cycle(directory):
    directory.add_user("bob", "X")
    directory.nest("X", "Y")
    directory.nest("Y", "X")

    groups = await DirectoryService(directory).resolve_groups("bob")

    assert groups == {"X", "Y"}
    assert sorted(directory.group_calls) == ["X", "Y"]


async def test_resolve_groups_deduplicates_diamond(directory):
    directory.add_user("carol", "left", "right")
    directory.nest("left", "top")
    directory.nest("right", "top")

    groups = await DirectoryService(directory).resolve_groups("carol")

    assert groups == {"left", "right", "top"}
    assert directory.group_calls.count("top") == 1


async def test_user_without_groups_resolves_to_empty_set(directory):
    directory.add_user("dave")

    assert await DirectoryService(directory).resolve_groups("dave") == set()


async def test_unknown_user_is_not_found(directory):
    with pytest.raises(HandledException) as exc_info:
        await DirectoryService(directory).resolve_groups("nobody")

    assert exc_info.value.resp_code is ResponseCode.USER_NOT_FOUND
    assert exc_info.value.http_status_code == 404


async def test_directory_failure_aborts_resolution(directory):
    directory.add_user("erin", "g1")
    directory.nest("g1", "g2")
    directory.fail_on_group = "g2"

    with pytest.raises(HandledException) as exc_info:
        await DirectoryService(directory).resolve_groups("erin")

    assert exc_info.value.resp_code is ResponseCode.DIRECTORY_ERROR


async def test_unexpected_directory_error_is_wrapped(directory):
    async def broken(user_id):
        raise ConnectionError("socket closed")

    directory.find_user = broken

    with pytest.raises(HandledException) as exc_info:
        await DirectoryService(directory).resolve_groups("frank")

    assert exc_info.value.resp_code is ResponseCode.DIRECTORY_ERROR
    assert isinstance(exc_info.value.cause, ConnectionError)


async def test_search_groups_rejects_blank_prefix(directory):
    with pytest.raises(HandledException) as exc_info:
        await DirectoryService(directory).search_groups("   ")

    assert exc_info.value.resp_code is ResponseCode.REQUIRED_FIELD_MISSING


async def test_search_groups_applies_limit(directory):
    directory.group_names = {"a": "CoMIT Admins", "b": "CoMIT Users", "c": "Finance"}

    groups = await DirectoryService(directory, group_search_limit=1).search_groups("comit")

    assert [g.display_name for g in groups] == ["CoMIT Admins"]
