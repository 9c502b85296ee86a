from __future__ import annotations

import base64
import json
import re
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import httpx as http

from prowbot.app_config import ActionConfig
from prowbot.queries import Client

OWNER = "octo-org"
REPO = "hello-world"
BOT_LOGIN = "github-actions[bot]"


def create_settings(
    commands: Tuple[str, ...] = ("/approve", "/lgtm"), **kwargs: Any
) -> ActionConfig:
    return ActionConfig(token="ghs_test_token", commands=commands, **kwargs)


def create_review(
    *, id: int, login: Optional[str] = BOT_LOGIN, state: str = "APPROVED"
) -> Dict[str, Any]:
    return dict(
        id=id,
        user=dict(login=login) if login is not None else None,
        state=state,
        body="",
    )


def create_issue_comment_payload(
    body: Optional[str], *, login: str = "alice", number: int = 7
) -> Dict[str, Any]:
    return dict(
        action="created",
        comment=dict(id=1, body=body, user=dict(login=login)),
        issue=dict(number=number, title="Update README.md"),
        repository=dict(name=REPO, owner=dict(login=OWNER)),
    )


def create_review_payload(
    body: Optional[str], *, login: str = "alice", number: int = 7
) -> Dict[str, Any]:
    return dict(
        action="submitted",
        review=dict(id=2, body=body, user=dict(login=login), state="commented"),
        pull_request=dict(number=number),
        repository=dict(name=REPO, owner=dict(login=OWNER)),
    )


def create_workflow_run_payload(*, run_id: int = 30433642) -> Dict[str, Any]:
    return dict(
        action="completed",
        workflow_run=dict(id=run_id, event="pull_request_review", conclusion="success"),
        repository=dict(name=REPO, owner=dict(login=OWNER)),
    )


def encode_owners(text: str) -> Dict[str, Any]:
    return dict(
        type="file",
        encoding="base64",
        name="OWNERS",
        path="OWNERS",
        content=base64.b64encode(text.encode()).decode(),
    )


def not_found() -> http.Response:
    return http.Response(404, json=dict(message="Not Found"))


class FakeGitHub:
    """
    In-memory stand in for the parts of the GitHub REST API we call.

    Use `create_client` to get a `Client` that sends its requests here.
    """

    def __init__(
        self,
        *,
        owners: Optional[str] = None,
        org_members: Iterable[str] = (),
        collaborators: Iterable[str] = (),
        reviews: Iterable[Dict[str, Any]] = (),
        labels: Iterable[str] = (),
    ) -> None:
        # text of the OWNERS file, None when the repository has no OWNERS file.
        self.owners = owners
        self.org_members: Set[str] = set(org_members)
        self.collaborators: Set[str] = set(collaborators)
        self.reviews: List[Dict[str, Any]] = list(reviews)
        self.labels: Set[str] = set(labels)
        self.comments: List[str] = []
        self.requests: List[http.Request] = []
        self._overrides: Dict[Tuple[str, str], http.Response] = {}

    def override(self, method: str, path: str, response: http.Response) -> None:
        self._overrides[(method, path)] = response

    def calls(self, method: str, pattern: str) -> List[http.Request]:
        return [
            request
            for request in self.requests
            if request.method == method and re.search(pattern, request.url.path)
        ]

    def handler(self, request: http.Request) -> http.Response:
        self.requests.append(request)
        path = request.url.path
        override = self._overrides.get((request.method, path))
        if override is not None:
            return override

        repo_prefix = f"/repos/{OWNER}/{REPO}"
        if request.method == "GET" and path == f"{repo_prefix}/contents/OWNERS":
            if self.owners is None:
                return not_found()
            return http.Response(200, json=encode_owners(self.owners))

        match = re.fullmatch(rf"/orgs/{OWNER}/members/(?P<login>[^/]+)", path)
        if request.method == "GET" and match:
            if match.group("login") in self.org_members:
                return http.Response(204)
            return not_found()

        match = re.fullmatch(rf"{repo_prefix}/collaborators/(?P<login>[^/]+)", path)
        if request.method == "GET" and match:
            if match.group("login") in self.collaborators:
                return http.Response(204)
            return not_found()

        if re.fullmatch(rf"{repo_prefix}/pulls/\d+/reviews", path):
            if request.method == "GET":
                return http.Response(200, json=self.reviews)
            if request.method == "POST":
                review = create_review(id=1000 + len(self.reviews))
                self.reviews.append(review)
                return http.Response(200, json=review)

        match = re.fullmatch(
            rf"{repo_prefix}/pulls/\d+/reviews/(?P<id>\d+)/dismissals", path
        )
        if request.method == "PUT" and match:
            for review in self.reviews:
                if review["id"] == int(match.group("id")):
                    review["state"] = "DISMISSED"
                    return http.Response(200, json=review)
            return not_found()

        if request.method == "POST" and re.fullmatch(
            rf"{repo_prefix}/issues/\d+/labels", path
        ):
            self.labels.update(json.loads(request.content)["labels"])
            return http.Response(
                200, json=[dict(name=name) for name in sorted(self.labels)]
            )

        match = re.fullmatch(rf"{repo_prefix}/issues/\d+/labels/(?P<name>.+)", path)
        if request.method == "DELETE" and match:
            name = match.group("name")
            if name not in self.labels:
                return http.Response(404, json=dict(message="Label does not exist"))
            self.labels.remove(name)
            return http.Response(
                200, json=[dict(name=name) for name in sorted(self.labels)]
            )

        if request.method == "POST" and re.fullmatch(
            rf"{repo_prefix}/issues/\d+/comments", path
        ):
            self.comments.append(json.loads(request.content)["body"])
            return http.Response(201, json=dict(id=len(self.comments)))

        raise AssertionError(f"unexpected request: {request.method} {path}")


def create_client(fake: FakeGitHub) -> Client:
    return Client(
        owner=OWNER,
        repo=REPO,
        token="ghs_test_token",
        transport=http.MockTransport(fake.handler),
    )
