"""CLI entry point for chathub."""

import logging
from pathlib import Path

import click

from .agents import filter_and_sort_agents, get_agent_route
from .codec import find_one_from_models_response, flatten_model, from_string_to_model, stringify_model
from .config import get_data_path, get_log_level, get_timezone
from .core import AgentFilter, StreamingState
from .export import (
    agent_to_dict,
    flat_model_to_dict,
    groups_to_dict,
    message_to_dict,
    route_to_dict,
    to_json,
)
from .grouping import group_conversations_by_date
from .source import ChatDataSource
from .sources import JsonFileSource, get_available_sources
from .streaming import create_ai_message_from_streaming_state

logger = logging.getLogger(__name__)

file_option = click.option(
    "--file",
    "data_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Chat data JSON file (defaults to CHATHUB_DATA_PATH).",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output.")
def main(verbose: bool):
    """Normalize chat sessions, agents and model tokens."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@file_option
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
def sessions(data_file: Path | None, as_json: bool):
    """List conversations grouped by Today, Yesterday, This week and Older."""
    source = _get_source(data_file)
    groups = group_conversations_by_date(source.list_sessions(), tz=get_timezone())

    if as_json:
        click.echo(to_json(groups_to_dict(groups)))
        return

    for group in groups:
        click.echo(group.group)
        for session in group.sessions:
            click.echo(f"  {session.title or '(untitled)'}  [{session.id}]")


@main.command()
@file_option
@click.option("--search", default="", help="Case-insensitive text to find in agent names.")
@click.option("--provider", default="", help="Only agents of this provider.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
def agents(data_file: Path | None, search: str, provider: str, as_json: bool):
    """List catalog agents, newest first."""
    source = _get_source(data_file)
    catalog = [agent for bucket in source.get_models().values() for agent in bucket.models]
    selected = filter_and_sort_agents(catalog, AgentFilter(search=search, provider=provider))

    if as_json:
        click.echo(to_json([agent_to_dict(a) for a in selected]))
        return

    for agent in selected:
        click.echo(f"{agent.name}  {stringify_model(agent.model)}")


@main.command("first-model")
@file_option
def first_model(data_file: Path | None):
    """Print the token of the agent a new chat starts with."""
    agent = find_one_from_models_response(_get_source(data_file).get_models())
    if agent is None:
        raise click.ClickException("No models available")
    click.echo(stringify_model(agent.model))


@main.command("parse-token")
@click.argument("token")
def parse_token(token: str):
    """Print the stored form of a "<provider>::<identifier>" token."""
    click.echo(to_json(flat_model_to_dict(flatten_model(_parse_token(token)))))


@main.command()
@click.argument("token")
def route(token: str):
    """Print the chat route that opens the agent behind TOKEN."""
    click.echo(to_json(route_to_dict(get_agent_route(_parse_token(token)))))


@main.command("new-message")
@click.argument("session_id")
@click.argument("message_id")
@click.option("--model", "token", default=None, help="Model token of the responding agent.")
@click.option("--execution-id", type=int, default=None)
@click.option("--previous-message-id", default=None)
def new_message(
    session_id: str,
    message_id: str,
    token: str | None,
    execution_id: int | None,
    previous_message_id: str | None,
):
    """Print the record of an assistant reply that has just started streaming."""
    streaming = StreamingState(
        execution_id=execution_id,
        previous_message_id=previous_message_id,
        model=_parse_token(token) if token else None,
    )
    message = create_ai_message_from_streaming_state(session_id, message_id, streaming)
    click.echo(to_json(message_to_dict(message)))


def _get_source(data_file: Path | None) -> ChatDataSource:
    if data_file is not None:
        if not data_file.is_file():
            raise click.ClickException(f"File not found: {data_file}")
        return JsonFileSource(data_file)

    sources = get_available_sources()
    if not sources:
        raise click.ClickException(f"No chat data found at {get_data_path()}")
    logger.debug("Using source %s", sources[0].name)
    return sources[0]


def _parse_token(token: str):
    selector = from_string_to_model(token)
    if selector is None:
        raise click.ClickException(f"Invalid model token: {token}")
    return selector
