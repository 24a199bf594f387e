import base64

import pytest
import requests

from review_panel.core.domain.exceptions import (
    ConfigError,
    EmptyRepositoryError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
)
from review_panel.infra.github import GitHubClient
from tests.review_panel.fakes import FakeLogger


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.requested = []

    def get(self, url, params=None, timeout=None):
        self.requested.append((url, params))
        path = url.replace("https://api.github.com", "")
        route = self.routes.get(path)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return FakeResponse(404, {"message": "Not Found"})
        return route


def _client(routes, token=None, logger=None):
    session = FakeSession(routes)
    return GitHubClient(logger=logger or FakeLogger(), token=token, session=session), session


def test_token_sets_authorization_header():
    _, session = _client({}, token="ghp_x")
    assert session.headers["Authorization"] == "Bearer ghp_x"
    assert session.headers["Accept"] == "application/vnd.github+json"


def test_fetch_pull_request():
    client, _ = _client({
        "/repos/o/r/pulls/5": FakeResponse(200, {
            "number": 5, "title": "Fix", "user": {"login": "dev"}, "additions": 3, "deletions": 1,
            "changed_files": 2, "commits": 1, "body": None, "draft": True, "head": {"sha": "f" * 40},
        }),
    })
    pr = client.fetch_pull_request("o", "r", 5)
    assert (pr.title, pr.author, pr.is_draft, pr.body) == ("Fix", "dev", True, None)
    assert client.fetch_pr_head_sha("o", "r", 5) == "f" * 40


def test_fetch_pull_request_files():
    client, session = _client({
        "/repos/o/r/pulls/5/files": FakeResponse(200, [
            {"filename": "a.py", "status": "added", "additions": 1, "deletions": 0, "patch": "+x"},
            {"filename": "img.png", "status": "modified", "additions": 0, "deletions": 0},
        ]),
    })
    files = client.fetch_pull_request_files("o", "r", 5)
    assert [f.filename for f in files] == ["a.py", "img.png"]
    assert files[1].patch is None
    assert session.requested[0][1] == {"per_page": 100}


def test_fetch_repository_with_readme_and_tests():
    readme = base64.b64encode("# Title".encode()).decode()
    client, _ = _client({
        "/repos/o/r": FakeResponse(200, {
            "name": "r", "owner": {"login": "o"}, "description": "d", "language": "Go",
            "stargazers_count": 7, "default_branch": "main",
        }),
        "/repos/o/r/contents/": FakeResponse(200, [{"type": "dir", "name": "tests"}]),
        "/repos/o/r/readme": FakeResponse(200, {"content": readme}),
    })
    info = client.fetch_repository("o", "r")
    assert info.readme_content == "# Title"
    assert info.has_tests is True
    assert info.stars == 7


def test_repository_without_readme_or_tests():
    client, _ = _client({
        "/repos/o/r": FakeResponse(200, {"name": "r", "owner": {"login": "o"}, "stargazers_count": 0}),
        "/repos/o/r/contents/": FakeResponse(200, [{"type": "file", "name": "main.go"}]),
    })
    info = client.fetch_repository("o", "r")
    assert info.readme_content is None
    assert info.has_tests is False


def test_test_files_at_root_count_as_tests():
    client, _ = _client({
        "/repos/o/r/contents/": FakeResponse(200, [{"type": "file", "name": "app.test.js"}]),
    })
    assert client._detect_tests("o", "r") is True


def test_default_branch_sha_follows_branch_ref():
    client, _ = _client({
        "/repos/o/r": FakeResponse(200, {"name": "r", "default_branch": "dev/main"}),
        "/repos/o/r/git/ref/heads/dev/main": FakeResponse(200, {"object": {"sha": "c" * 40}}),
    })
    assert client.fetch_default_branch_sha("o", "r") == "c" * 40


def test_branch_resolution_is_logged():
    logger = FakeLogger()
    client, _ = _client({
        "/repos/o/r/git/ref/heads/feat/x": FakeResponse(200, {"object": {"sha": "d" * 40}}),
    }, logger=logger)

    assert client.fetch_branch_sha("o", "r", "feat/x") == "d" * 40
    assert logger.find("branch_resolved") == {"owner": "o", "repo": "r", "branch": "feat/x"}


def test_commit_sha_resolves_full_sha():
    client, _ = _client({"/repos/o/r/commits/abc": FakeResponse(200, {"sha": "abc" + "0" * 37})})
    assert client.fetch_commit_sha("o", "r", "abc") == "abc" + "0" * 37


@pytest.mark.parametrize("response,error", [
    (FakeResponse(404), NotFoundError),
    (FakeResponse(403), ForbiddenError),
    (FakeResponse(401), ConfigError),
    (FakeResponse(409, text="Git Repository is empty."), EmptyRepositoryError),
    (FakeResponse(500, text="boom"), UpstreamError),
])
def test_http_errors_are_typed(response, error):
    client, _ = _client({"/repos/o/r/pulls/1": response})
    with pytest.raises(error):
        client.fetch_pr_head_sha("o", "r", 1)


def test_not_found_message_names_resource():
    client, _ = _client({})
    with pytest.raises(NotFoundError) as exc:
        client.fetch_pull_request("o", "r", 9)
    assert exc.value.message == "Pull request #9 in o/r not found"
    assert exc.value.http_status == 404


def test_auth_error_code():
    client, _ = _client({"/repos/o/r": FakeResponse(401)})
    with pytest.raises(ConfigError) as exc:
        client.fetch_default_branch_sha("o", "r")
    assert exc.value.code == "GITHUB_AUTH_ERROR"


def test_transport_failure_is_upstream_error():
    client, _ = _client({"/repos/o/r/commits/abc": requests.ConnectionError("down")})
    with pytest.raises(UpstreamError):
        client.fetch_commit_sha("o", "r", "abc")
