import logging
import sys
from typing import Any, Dict, Optional, TextIO

import structlog
from httpx import Response
from typing_extensions import Literal

from prowbot import app_config as conf

EventDict = Dict[str, Any]
AnnotationCommand = Literal["error", "warning", "notice"]


def get_logging_level(name: str) -> int:
    # structlog reports `log.exception(...)` with the "exception" method name
    if name.lower() == "exception":
        return logging.ERROR
    return logging._nameToLevel[name.upper()]


def escape_annotation(message: str) -> str:
    """
    Workflow commands are line oriented, so newlines and `%` must be escaped.
    https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
    """
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_workflow_command(command: AnnotationCommand, message: str) -> str:
    return f"::{command}::{escape_annotation(message)}"


class ActionsAnnotationProcessor:
    """
    structlog processor that mirrors log events as GitHub Actions annotations
    so they show up in the summary of the workflow run.
    """

    def __init__(
        self, level: int = logging.WARNING, stream: Optional[TextIO] = None
    ) -> None:
        self.level = level
        self.stream = stream

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        level = get_logging_level(method_name)
        if level < self.level:
            return event_dict

        command: AnnotationCommand = "error" if level >= logging.ERROR else "warning"
        message = str(event_dict.get("event"))
        error = event_dict.get("error")
        if error is not None:
            message = f"{message}: {error}"
        stream = self.stream or sys.stdout
        stream.write(format_workflow_command(command, message) + "\n")
        event_dict["annotated"] = True
        return event_dict


def add_request_info_processor(
    _: Any, __: Any, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Structlog processor for adding more information to log events that provide
    `res` with an httpx Response object.
    """
    response = event_dict.get("res", None)
    if isinstance(response, Response):
        event_dict["response_content"] = response.content
        event_dict["response_status_code"] = response.status_code
        try:
            request = response.request
        except RuntimeError:
            # responses built by hand don't have a request attached
            return event_dict
        event_dict["request_url"] = str(request.url)
        event_dict["request_method"] = request.method
    return event_dict


def configure_logging() -> None:

    # for info on logging formats see: https://docs.python.org/3/library/logging.html#logrecord-attributes
    logging.basicConfig(
        stream=sys.stdout,
        level=get_logging_level(conf.LOGGING_LEVEL),
        format="%(levelname)s %(name)s:%(filename)s:%(lineno)d %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_request_info_processor,
            ActionsAnnotationProcessor(level=logging.WARNING),
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
