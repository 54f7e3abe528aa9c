import httpx
import pytest

from repolens.crawlers.github.client import GitHubClient
from repolens.crawlers.github.contracts import FailureKind, FetchState
from repolens.crawlers.github.errors import RateLimited, RepositoryNotFound, UpstreamError


def _transport_from_sequence(responses: list[httpx.Response]) -> httpx.MockTransport:
    queue = responses.copy()

    async def handler(_: httpx.Request) -> httpx.Response:
        if not queue:
            raise AssertionError("No more mock responses available")
        return queue.pop(0)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_get_repo_returns_ok_contract_for_200() -> None:
    transport = _transport_from_sequence(
        [httpx.Response(200, json={"full_name": "owner/repo", "stargazers_count": 42})]
    )
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_repo("owner", "repo")
    await client.aclose()

    assert result.state == FetchState.OK
    assert result.data is not None
    assert result.data["full_name"] == "owner/repo"
    assert result.status_code == 200


@pytest.mark.asyncio
async def test_requests_carry_pinned_headers_and_token() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"full_name": "owner/repo"})

    client = GitHubClient(token="secret-value", user_agent="RepoLens-Test", transport=httpx.MockTransport(handler))
    await client.get_repo("owner", "repo")
    await client.aclose()

    request = seen[0]
    assert request.url == httpx.URL("https://api.github.com/repos/owner/repo")
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert request.headers["User-Agent"] == "RepoLens-Test"
    assert request.headers["Authorization"] == "token secret-value"


@pytest.mark.asyncio
async def test_authorization_header_is_omitted_without_token() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"full_name": "owner/repo"})

    client = GitHubClient(transport=httpx.MockTransport(handler))
    await client.get_repo("owner", "repo")
    await client.aclose()

    assert "Authorization" not in seen[0].headers
    assert client.has_token is False


@pytest.mark.asyncio
async def test_absolute_languages_url_is_requested_as_given() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"Python": 1200, "Shell": 40})

    client = GitHubClient(token="test", transport=httpx.MockTransport(handler))
    result = await client.get_languages("https://api.github.com/repos/owner/repo/languages")
    await client.aclose()

    assert seen == ["https://api.github.com/repos/owner/repo/languages"]
    assert result.data == {"Python": 1200, "Shell": 40}


@pytest.mark.asyncio
async def test_empty_json_body_returns_empty_contract() -> None:
    transport = _transport_from_sequence([httpx.Response(200, json={})])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_languages("https://api.github.com/repos/owner/repo/languages")
    await client.aclose()

    assert result.state == FetchState.EMPTY
    assert result.data == {}
    assert result.raise_for_failure("owner", "repo") == {}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,kind,error_type",
    [
        (404, FailureKind.NOT_FOUND, RepositoryNotFound),
        (403, FailureKind.RATE_LIMITED, RateLimited),
        (500, FailureKind.UPSTREAM, UpstreamError),
        (502, FailureKind.UPSTREAM, UpstreamError),
        (401, FailureKind.UPSTREAM, UpstreamError),
    ],
)
async def test_non_success_statuses_map_to_typed_failures(
    status_code: int, kind: FailureKind, error_type: type
) -> None:
    transport = _transport_from_sequence([httpx.Response(status_code, json={"message": "nope"})])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_repo("owner", "repo")
    await client.aclose()

    assert result.state == FetchState.FAILED
    assert result.status_code == status_code
    assert result.failure_kind == kind
    with pytest.raises(error_type) as exc_info:
        result.raise_for_failure("owner", "repo")
    assert exc_info.value.status_code == status_code
    assert exc_info.value.owner == "owner"
    assert exc_info.value.repo == "repo"


@pytest.mark.asyncio
async def test_rate_limit_is_not_retried() -> None:
    attempts: list[int] = []

    async def handler(_: httpx.Request) -> httpx.Response:
        attempts.append(1)
        return httpx.Response(403, json={"message": "API rate limit exceeded"})

    client = GitHubClient(token="test", transport=httpx.MockTransport(handler))
    result = await client.get_repo("owner", "repo")
    await client.aclose()

    assert len(attempts) == 1
    error = result.to_error("owner", "repo")
    assert isinstance(error, RateLimited)
    assert error.retryable is True


@pytest.mark.asyncio
async def test_upstream_error_message_carries_status_code() -> None:
    transport = _transport_from_sequence([httpx.Response(503)])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_repo("owner", "repo")
    await client.aclose()

    error = result.to_error("owner", "repo")
    assert "503" in str(error)
    assert "owner/repo" in str(error)


@pytest.mark.asyncio
async def test_transport_error_returns_failed_contract_without_status() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = GitHubClient(token="test", transport=httpx.MockTransport(handler))
    result = await client.get_repo("owner", "repo")
    await client.aclose()

    assert result.state == FetchState.FAILED
    assert result.status_code is None
    assert result.failure_kind == FailureKind.UPSTREAM
    assert isinstance(result.to_error(), UpstreamError)


@pytest.mark.asyncio
async def test_invalid_json_body_is_an_upstream_failure() -> None:
    transport = _transport_from_sequence([httpx.Response(200, content=b"<html>not json</html>")])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_repo("owner", "repo")
    await client.aclose()

    assert result.state == FetchState.FAILED
    assert result.failure_kind == FailureKind.UPSTREAM


@pytest.mark.asyncio
async def test_accepted_without_body_returns_empty_contract() -> None:
    transport = _transport_from_sequence([httpx.Response(202)])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_contributor_stats("owner", "repo")
    await client.aclose()

    assert result.state == FetchState.EMPTY
    assert result.data is None


@pytest.mark.asyncio
async def test_unbuildable_request_url_returns_failed_contract() -> None:
    transport = _transport_from_sequence([])
    client = GitHubClient(token="test", transport=transport)

    result = await client.get_repo("a\x00b", "demo")
    await client.aclose()

    assert result.state == FetchState.FAILED
    assert result.status_code is None
    assert result.failure_kind == FailureKind.UPSTREAM
