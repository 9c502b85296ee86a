from typing import Optional

import pydantic

from prowbot.events.base import GithubEvent


class User(pydantic.BaseModel):
    login: str


class Comment(pydantic.BaseModel):
    body: Optional[str] = None
    user: User


class Issue(pydantic.BaseModel):
    number: int


class IssueCommentEvent(GithubEvent):
    """
    https://docs.github.com/en/webhooks/webhook-events-and-payloads#issue_comment

    Comments on pull requests arrive as issue comments too.
    """

    comment: Comment
    issue: Issue
