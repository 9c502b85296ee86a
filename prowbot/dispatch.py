from __future__ import annotations

import asyncio
from typing import List

import structlog

from prowbot.app_config import ActionConfig
from prowbot.commands import HANDLERS
from prowbot.errors import CommandsFailed, NoCommandsConfigured, UnsupportedCommand
from prowbot.queries import Client
from prowbot.trigger import TriggerEvent, parent_kind

logger = structlog.get_logger()


def find_commands(commands: List[str], body: str) -> List[str]:
    """
    Configured commands that appear anywhere in the comment.
    """
    return [command for command in commands if command in body]


async def run_command(
    command: str, trigger: TriggerEvent, *, api: Client, settings: ActionConfig
) -> None:
    if command == "":
        raise NoCommandsConfigured()
    handler = HANDLERS.get(command)
    if handler is None:
        raise UnsupportedCommand(command)
    await handler(trigger, api=api, settings=settings)


async def dispatch(
    trigger: TriggerEvent, *, api: Client, settings: ActionConfig
) -> None:
    """
    Run every configured command found in the comment concurrently.

    A failing command doesn't stop the others. Once all of them finish, any
    failures are raised together as `CommandsFailed`.
    """
    log = logger.bind(
        owner=trigger.owner,
        repo=trigger.repo,
        number=trigger.parent.number,
        parent=parent_kind(trigger),
        author=trigger.comment.author,
    )
    commands = find_commands(list(settings.commands), trigger.comment.body or "")
    if not commands:
        log.info("no configured commands in comment", configured=settings.commands)
        return

    results = await asyncio.gather(
        *(
            run_command(command, trigger, api=api, settings=settings)
            for command in commands
        ),
        return_exceptions=True,
    )

    errors: List[Exception] = []
    for command, result in zip(commands, results):
        if isinstance(result, Exception):
            log.info("command failed", command=command, error=str(result))
            errors.append(result)
        elif isinstance(result, BaseException):
            # cancellation and interpreter exit are not command failures
            raise result
        else:
            log.info("command handled", command=command)
    if errors:
        raise CommandsFailed(errors)
