from typing import Optional

import pydantic

from prowbot.events.base import GithubEvent


class User(pydantic.BaseModel):
    login: str


class Review(pydantic.BaseModel):
    # reviews submitted without a message have a null body
    body: Optional[str] = None
    user: User
    state: str


class PullRequest(pydantic.BaseModel):
    number: int


class PullRequestReviewEvent(GithubEvent):
    """
    https://docs.github.com/en/webhooks/webhook-events-and-payloads#pull_request_review
    """

    review: Review
    pull_request: PullRequest
