from __future__ import annotations

from typing import Callable

import httpx as http
import structlog
from typing_extensions import Protocol

from prowbot.app_config import ActionConfig
from prowbot.auth import assert_authorized
from prowbot.errors import ProwError, UpstreamAPIError
from prowbot.owners import AuthorizationRole
from prowbot.queries import Client
from prowbot.trigger import TriggerEvent

logger = structlog.get_logger()


class CommandHandler(Protocol):
    async def __call__(
        self, trigger: TriggerEvent, *, api: Client, settings: ActionConfig
    ) -> None:
        ...


async def notify(api: Client, trigger: TriggerEvent, message: str) -> None:
    """
    Best effort comment on the issue or pull request. A failure here is logged
    and never raised so it can't hide the error we are reporting.
    """
    log = api.log.bind(number=trigger.parent.number)
    try:
        res = await api.create_comment(message, trigger.parent.number)
        res.raise_for_status()
    except (ProwError, http.HTTPError) as e:
        log.warning("could not comment with an auth error", error=str(e))


async def authorize_or_notify(
    api: Client,
    trigger: TriggerEvent,
    *,
    role: AuthorizationRole,
    get_message: Callable[[Exception], str],
) -> None:
    """
    Check the commenter is allowed to act as `role`. When they aren't, explain
    why on the issue and re-raise the authorization error.
    """
    try:
        await assert_authorized(api, role, trigger.comment.author)
    except ProwError as e:
        await notify(api, trigger, get_message(e))
        raise


def check_response(res: http.Response, operation: str) -> None:
    try:
        res.raise_for_status()
    except http.HTTPStatusError as e:
        logger.warning("github api request failed", operation=operation, res=res)
        raise UpstreamAPIError.from_response(operation, res) from e
