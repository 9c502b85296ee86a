from __future__ import annotations

import base64
import urllib.parse
from enum import Enum
from typing import Any, List, Optional

import httpx as http
import pydantic
import structlog
from pydantic import BaseModel

import prowbot.app_config as conf
from prowbot.errors import UpstreamAPIError
from prowbot.http import HttpClient

logger = structlog.get_logger()

# GitHub defaults to 30 items per page. 100 is the maximum.
PER_PAGE = 100
PAGINATION_LIMIT = 20


class ContentEncoding(Enum):
    base64 = "base64"


class Content(BaseModel):
    """
    https://docs.github.com/en/rest/repos/contents#get-repository-content
    """

    name: str
    path: str
    type: str
    content: str
    encoding: ContentEncoding

    def decode(self) -> str:
        """
        Convert from encoding to str
        """
        return base64.b64decode(self.content).decode()


class ReviewUser(BaseModel):
    login: str


class Review(BaseModel):
    """
    https://docs.github.com/en/rest/pulls/reviews#list-reviews-for-a-pull-request
    """

    id: int
    # null when the author's account has been deleted
    user: Optional[ReviewUser] = None
    state: str

    @property
    def author(self) -> Optional[str]:
        return self.user.login if self.user is not None else None


class Client:
    def __init__(
        self,
        *,
        owner: str,
        repo: str,
        token: str,
        transport: Optional[http.AsyncBaseTransport] = None,
    ):
        self.owner = owner
        self.repo = repo
        # NOTE: We must call `await session.aclose()` when we are finished with our session.
        # We implement an async context manager this handle this.
        self.session = HttpClient(
            # no timeout, the workflow's own time limit bounds the run.
            timeout=None,
            transport=transport,
        )
        self.session.headers["Accept"] = "application/vnd.github.v3+json"
        self.session.headers["Authorization"] = f"token {token}"
        if (
            conf.GITHUB_API_HEADER_NAME is not None
            and conf.GITHUB_API_HEADER_VALUE is not None
        ):
            self.session.headers[
                conf.GITHUB_API_HEADER_NAME
            ] = conf.GITHUB_API_HEADER_VALUE
        self.log = logger.bind(owner=self.owner, repo=self.repo)

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        await self.session.aclose()

    async def _send(
        self, operation: str, method: str, path: str, **kwargs: Any
    ) -> http.Response:
        try:
            res = await self.session.request(method, conf.v3_url(path), **kwargs)
        except http.HTTPError as e:
            self.log.warning(
                "github api request error", operation=operation, exc_info=True
            )
            raise UpstreamAPIError(operation, detail=str(e)) from e
        self.log.debug(
            "github api request", operation=operation, status=res.status_code
        )
        return res

    async def get_contents(self, path: str) -> http.Response:
        """
        Fetch a file from the default branch.
        https://docs.github.com/en/rest/repos/contents#get-repository-content
        """
        escaped_path = urllib.parse.quote(path)
        return await self._send(
            "repos/get_content",
            "GET",
            f"/repos/{self.owner}/{self.repo}/contents/{escaped_path}",
        )

    async def check_org_membership(self, username: str) -> http.Response:
        """
        https://docs.github.com/en/rest/orgs/members#check-organization-membership-for-a-user
        """
        return await self._send(
            "orgs/check_membership_for_user",
            "GET",
            f"/orgs/{self.owner}/members/{username}",
        )

    async def check_collaborator(self, username: str) -> http.Response:
        """
        https://docs.github.com/en/rest/collaborators/collaborators#check-if-a-user-is-a-repository-collaborator
        """
        return await self._send(
            "repos/check_collaborator",
            "GET",
            f"/repos/{self.owner}/{self.repo}/collaborators/{username}",
        )

    async def list_reviews(self, pull_number: int) -> List[Review]:
        """
        All reviews for a pull request, in the order GitHub returns them
        (chronological).
        """
        log = self.log.bind(pull_number=pull_number)
        operation = "pulls/list_reviews"
        url: Optional[str] = conf.v3_url(
            f"/repos/{self.owner}/{self.repo}/pulls/{pull_number}/reviews"
        )
        params: Optional[dict[str, str]] = dict(per_page=str(PER_PAGE))
        reviews: List[Review] = []
        current_page = 0
        while url is not None:
            current_page += 1
            if current_page > PAGINATION_LIMIT:
                log.info("hit pagination limit")
                break
            try:
                res = await self.session.get(url, params=params)
            except http.HTTPError as e:
                log.warning("github api request error", exc_info=True)
                raise UpstreamAPIError(operation, detail=str(e)) from e
            try:
                res.raise_for_status()
            except http.HTTPStatusError as e:
                log.warning("problem listing reviews", res=res)
                raise UpstreamAPIError.from_response(operation, res) from e
            try:
                reviews += [Review.model_validate(review) for review in res.json()]
            except (ValueError, TypeError, pydantic.ValidationError) as e:
                log.warning("could not parse reviews", res=res, exc_info=True)
                raise UpstreamAPIError(
                    operation, status_code=res.status_code, detail=str(e)
                ) from e
            # the `next` link already carries the query string.
            url = res.links.get("next", {}).get("url")
            params = None
        return reviews

    async def approve_pull_request(self, *, pull_number: int) -> http.Response:
        """
        https://docs.github.com/en/rest/pulls/reviews#create-a-review-for-a-pull-request
        """
        body = dict(event="APPROVE", comments=[])
        return await self._send(
            "pulls/create_review",
            "POST",
            f"/repos/{self.owner}/{self.repo}/pulls/{pull_number}/reviews",
            json=body,
        )

    async def dismiss_review(
        self, *, pull_number: int, review_id: int, message: str
    ) -> http.Response:
        """
        https://docs.github.com/en/rest/pulls/reviews#dismiss-a-review-for-a-pull-request
        """
        return await self._send(
            "pulls/dismiss_review",
            "PUT",
            f"/repos/{self.owner}/{self.repo}/pulls/{pull_number}/reviews/{review_id}/dismissals",
            json=dict(message=message),
        )

    async def add_label(self, label: str, pull_number: int) -> http.Response:
        """
        Adding a label that is already applied is a no-op on GitHub's side.
        """
        return await self._send(
            "issues/add_labels",
            "POST",
            f"/repos/{self.owner}/{self.repo}/issues/{pull_number}/labels",
            json=dict(labels=[label]),
        )

    async def delete_label(self, label: str, pull_number: int) -> http.Response:
        escaped_label = urllib.parse.quote(label)
        return await self._send(
            "issues/remove_label",
            "DELETE",
            f"/repos/{self.owner}/{self.repo}/issues/{pull_number}/labels/{escaped_label}",
        )

    async def create_comment(self, body: str, pull_number: int) -> http.Response:
        return await self._send(
            "issues/create_comment",
            "POST",
            f"/repos/{self.owner}/{self.repo}/issues/{pull_number}/comments",
            json=dict(body=body),
        )
