from urllib.parse import unquote

import httpx
import pytest

from galaxy_api.directory import ActiveDirectoryClient
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

BASE_URL = "https://graph.test/v1.0"
TOKEN_URL = "https://login.test/tenant/oauth2/v2.0/token"


class GraphStub:
    """Records requests and answers from a path -> response table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == TOKEN_URL:
            return httpx.Response(200, json={"access_token": "graph-token", "expires_in": 3600})
        assert request.headers["Authorization"] == "Bearer graph-token"
        key = request.url.path + ("?" + unquote(request.url.query.decode()) if request.url.query else "")
        for prefix, response in self.routes.items():
            if key.startswith(prefix):
                return response() if callable(response) else response
        return httpx.Response(404, json={"error": {"code": "Request_ResourceNotFound"}})


def make_client(stub: GraphStub) -> ActiveDirectoryClient:
    return ActiveDirectoryClient(
        base_url=BASE_URL,
        token_url=TOKEN_URL,
        client_id="app-id",
        client_secret="app-secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(stub)),
    )


async def test_find_user_and_missing_user():
    stub = GraphStub({
        "/v1.0/users/jdoe@example.com": httpx.Response(
            200, json={"id": "u-1", "displayName": "Jane Doe", "userPrincipalName": "jdoe@example.com"}
        ),
    })
    client = make_client(stub)

    user = await client.find_user("jdoe@example.com")
    missing = await client.find_user("ghost@example.com")

    assert (user.id, user.display_name) == ("u-1", "Jane Doe")
    assert missing is None
    token_requests = [r for r in stub.requests if str(r.url) == TOKEN_URL]
    assert len(token_requests) == 1
    assert b"grant_type=client_credentials" in token_requests[0].content


async def test_group_membership_follows_next_link_and_skips_non_groups():
    next_link = f"{BASE_URL}/groups/g-1/memberOf/microsoft.graph.group?$skiptoken=page2"
    stub = GraphStub({
        "/v1.0/groups/g-1/memberOf/microsoft.graph.group?$skiptoken": httpx.Response(
            200, json={"value": [{"id": "g-3", "displayName": "Parent B"}]}
        ),
        "/v1.0/groups/g-1/memberOf/microsoft.graph.group": httpx.Response(200, json={
            "value": [
                {"@odata.type": "#microsoft.graph.group", "id": "g-2", "displayName": "Parent A"},
                {"@odata.type": "#microsoft.graph.directoryRole", "id": "role-1"},
            ],
            "@odata.nextLink": next_link,
        }),
    })

    groups = await make_client(stub).get_group_membership_for_group("g-1")

    assert [g.id for g in groups] == ["g-2", "g-3"]


async def test_find_groups_escapes_quotes_and_limits():
    stub = GraphStub({"/v1.0/groups": httpx.Response(200, json={"value": [{"id": "g-1", "displayName": "O'Brien Team"}]})})

    groups = await make_client(stub).find_groups("O'Brien", 5)

    assert [g.display_name for g in groups] == ["O'Brien Team"]
    search = stub.requests[-1]
    assert search.url.params["$filter"] == "startswith(displayName,'O''Brien')"
    assert search.url.params["$top"] == "5"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, json={"error": {"code": "serviceNotAvailable"}}),
        httpx.Response(200, content=b"not json"),
    ],
)
async def test_graph_failures_become_directory_errors(response):
    stub = GraphStub({"/v1.0/users/jdoe@example.com/memberOf": response})

    with pytest.raises(HandledException) as exc_info:
        await make_client(stub).get_group_membership_for_user("jdoe@example.com")

    assert exc_info.value.resp_code is ResponseCode.DIRECTORY_ERROR


async def test_transport_errors_become_directory_errors():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(GraphStub({}))
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(unreachable))

    with pytest.raises(HandledException) as exc_info:
        await client.find_user("jdoe@example.com")

    assert exc_info.value.resp_code is ResponseCode.DIRECTORY_ERROR
