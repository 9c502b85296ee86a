"""
Entry point for a GitHub Actions run.
"""
from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from prowbot import app_config
from prowbot.app_config import ActionConfig
from prowbot.dispatch import dispatch
from prowbot.errors import ConfigurationError
from prowbot.logging import configure_logging, format_workflow_command
from prowbot.queries import Client
from prowbot.trigger import normalize_event

logger = structlog.get_logger()


def load_payload(event_path: Optional[str]) -> Dict[str, Any]:
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set")
    payload = json.loads(Path(event_path).read_text())
    if not isinstance(payload, dict):
        raise ConfigurationError(f"event payload at {event_path} is not an object")
    return payload


async def run(settings: ActionConfig, event_name: str, payload: Dict[str, Any]) -> None:
    log = logger.bind(event_name=event_name)
    trigger = normalize_event(event_name, payload)
    async with Client(
        owner=trigger.owner, repo=trigger.repo, token=settings.token
    ) as api:
        await dispatch(trigger, api=api, settings=settings)
    log.info("event handled")


def set_failed(message: str) -> None:
    """
    Mark the step as failed the same way `core.setFailed` does for JavaScript
    actions.
    """
    sys.stdout.write(format_workflow_command("error", message) + "\n")
    sys.exit(1)


def main() -> None:
    configure_logging()
    try:
        settings = app_config.load_config()
        payload = load_payload(settings.event_path)
        asyncio.run(run(settings, settings.event_name, payload))
    except Exception as e:
        logger.debug("run failed", exc_info=True)
        set_failed(str(e))


if __name__ == "__main__":
    main()
