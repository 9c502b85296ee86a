from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from starlette.config import Config

from prowbot.errors import MissingCredential, NoCommandsConfigured

config = Config(".env")

LOGGING_LEVEL = config("LOGGING_LEVEL", default="INFO")

# For GitHub Enterprise, the v3 API root has the form:
# http(s)://[hostname]/api/v3, instead of https://api.github.com.
GITHUB_V3_API_ROOT = config("GITHUB_V3_API_ROOT", default="https://api.github.com")

# An extra header to send with git API requests.
GITHUB_API_HEADER_NAME = config("GITHUB_API_HEADER_NAME", default=None)
GITHUB_API_HEADER_VALUE = config("GITHUB_API_HEADER_VALUE", default=None)

# the identity a GITHUB_TOKEN acts as inside of a workflow.
DEFAULT_BOT_LOGIN = "github-actions[bot]"
DEFAULT_BOT_NAME = "prow-github-actions"


def v3_url(path: str) -> str:
    return GITHUB_V3_API_ROOT + path


def parse_commands(raw: str) -> Tuple[str, ...]:
    """
    Workflow files usually pass the command list as a YAML block, so newlines
    separate commands just like spaces do.

    Runs of separators leave empty names in the list. The dispatcher rejects
    those with `NoCommandsConfigured`.
    """
    raw = raw.strip()
    if not raw:
        raise NoCommandsConfigured()
    return tuple(raw.replace("\n", " ").split(" "))


@dataclass(frozen=True)
class ActionConfig:
    """
    Settings for a single run of the action. Built once at startup and passed
    down to the dispatcher and command handlers.
    """

    token: str
    commands: Tuple[str, ...]
    event_name: str = ""
    event_path: Optional[str] = None
    bot_login: str = DEFAULT_BOT_LOGIN
    bot_name: str = DEFAULT_BOT_NAME

    @classmethod
    def from_config(cls, config: Config) -> ActionConfig:
        # GitHub Actions exposes an input `foo-bar` as the env var INPUT_FOO-BAR.
        token = config("INPUT_GITHUB-TOKEN", default=None) or config(
            "GITHUB_TOKEN", default=None
        )
        if not token:
            raise MissingCredential("github-token")
        return cls(
            token=token,
            commands=parse_commands(config("INPUT_PROW-COMMANDS", default="")),
            event_name=config("GITHUB_EVENT_NAME", default=""),
            event_path=config("GITHUB_EVENT_PATH", default=None),
            bot_login=config("PROW_BOT_LOGIN", default=DEFAULT_BOT_LOGIN),
            bot_name=config("PROW_BOT_NAME", default=DEFAULT_BOT_NAME),
        )


def load_config() -> ActionConfig:
    return ActionConfig.from_config(config)
