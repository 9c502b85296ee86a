import json
from pathlib import Path

import click

from prowbot.command import get_command_args
from prowbot.owners import Owners


@click.group()
def cli() -> None:
    pass


@cli.command(help="handle the event of the current GitHub Actions run")
def run() -> None:
    """
    reads GITHUB_EVENT_NAME, GITHUB_EVENT_PATH and the action inputs from the
    environment
    """
    from prowbot.main import main

    main()


@cli.command(help="prints out prowbot's view of an OWNERS file")
@click.argument("owners_path", type=click.Path(exists=True))
def validate_owners(owners_path: str) -> None:
    """
    parse and output the json representation of an OWNERS file
    """
    owners = Owners.parse_yaml(Path(owners_path).read_text())
    if not isinstance(owners, Owners):
        raise click.ClickException(f"invalid OWNERS file: {owners}")
    click.echo(
        json.dumps(
            dict(
                approvers=sorted(owners.approvers), reviewers=sorted(owners.reviewers)
            ),
            indent=2,
        )
    )


@cli.command(help="generate the JSON schema for the OWNERS file")
def gen_owners_json_schema() -> None:
    click.echo(json.dumps(Owners.model_json_schema(), indent=2))


@cli.command("parse-command", help="show the arguments prowbot parses for a command")
@click.argument("command")
@click.argument("body")
def parse_command(command: str, body: str) -> None:
    click.echo(json.dumps(get_command_args(command, body)))
