from __future__ import annotations

from typing import Any, Optional, Set, Union

import httpx as http
import pydantic
import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from starlette import status
from typing_extensions import Literal

from prowbot.assertions import assert_never
from prowbot.errors import MalformedOwnersFile, UpstreamAPIError
from prowbot.queries import Client, Content

logger = structlog.get_logger()

OWNERS_PATH = "OWNERS"

AuthorizationRole = Literal["approvers", "reviewers"]


class Owners(BaseModel):
    """
    The OWNERS file at the root of the repository, e.g.

        approvers:
          - alice
        reviewers:
          - alice
          - bob
    """

    approvers: Set[str] = Field(default_factory=set)
    reviewers: Set[str] = Field(default_factory=set)

    @field_validator("approvers", "reviewers", mode="before")
    @classmethod
    def coerce_logins(cls, v: Any) -> Any:
        # `approvers:` with no entries is null in YAML
        if v is None:
            return set()
        # YAML reads a login like `1234` as an int and a bare `-` as null
        if isinstance(v, (list, tuple, set)):
            return {str(login) for login in v if login is not None}
        return v

    def for_role(self, role: AuthorizationRole) -> Set[str]:
        if role == "approvers":
            return self.approvers
        if role == "reviewers":
            return self.reviewers
        assert_never(role)

    @classmethod
    def parse_yaml(cls, content: str) -> Union[Owners, yaml.YAMLError, ValidationError]:
        try:
            return cls.model_validate(yaml.safe_load(content) or {})
        except (yaml.YAMLError, ValidationError) as e:
            return e


async def fetch_owners(api: Client) -> Optional[Owners]:
    """
    Fetch and parse the OWNERS file from the default branch.

    Returns None when the repository has no OWNERS file. A file we cannot parse
    raises `MalformedOwnersFile`.
    """
    log = api.log.bind(path=OWNERS_PATH)
    operation = "repos/get_content"
    res = await api.get_contents(OWNERS_PATH)
    if res.status_code == status.HTTP_404_NOT_FOUND:
        log.debug("owners file not found")
        return None
    try:
        res.raise_for_status()
    except http.HTTPStatusError as e:
        log.warning("problem fetching owners file", res=res)
        raise UpstreamAPIError.from_response(operation, res) from e

    try:
        content = Content.model_validate(res.json())
    except (ValueError, pydantic.ValidationError) as e:
        # a directory named OWNERS, or a file too large to be inlined
        log.warning("could not parse contents response", res=res, exc_info=True)
        raise UpstreamAPIError(
            operation, status_code=res.status_code, detail=str(e)
        ) from e

    try:
        text = content.decode()
    except ValueError as e:
        raise MalformedOwnersFile(e) from e

    owners = Owners.parse_yaml(text)
    if isinstance(owners, Owners):
        return owners
    log.warning("invalid owners file", error=str(owners))
    raise MalformedOwnersFile(owners)
