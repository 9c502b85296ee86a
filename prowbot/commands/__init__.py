from typing import Mapping

from prowbot.commands.approve import approve
from prowbot.commands.base import CommandHandler
from prowbot.commands.lgtm import lgtm

HANDLERS: Mapping[str, CommandHandler] = {
    "/approve": approve,
    "/lgtm": lgtm,
}
