"""Command-line interface for RuleCraft.

This module provides the CLI commands for running the service and for
trying rules out locally without a database.
"""

import json
from typing import NoReturn

import click

from rulecraft import __version__
from rulecraft.core.config import get_settings
from rulecraft.core.logging import configure_logging, get_logger
from rulecraft.core.rules import RuleSyntaxError, evaluate_rule, node_to_dict, parse_rule


@click.group()
@click.version_option(version=__version__, prog_name="RuleCraft")
def cli() -> None:
    """RuleCraft - boolean rule engine over named attributes."""


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the RuleCraft API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting RuleCraft server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "rulecraft.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates the rules and attributes tables. Use this only in development.
    In production, use migrations instead.
    """
    import asyncio

    from rulecraft.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize():
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.argument("rule")
def parse(rule: str) -> None:
    """Parse RULE and print its tree as JSON."""
    try:
        ast = parse_rule(rule, get_settings().max_rule_depth)
    except RuleSyntaxError as e:
        click.echo(f"Syntax error: {e}", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(node_to_dict(ast)))


@cli.command()
@click.argument("rule")
@click.option(
    "--data",
    "data",
    type=str,
    default="{}",
    help="Record to evaluate against, as a JSON object",
)
def evaluate(rule: str, data: str) -> None:
    """Evaluate RULE against a JSON record.

    Exits with status 0 when the rule passes, 1 when it fails and 2 on
    errors.
    """
    try:
        record = json.loads(data)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data")
    if not isinstance(record, dict):
        raise click.BadParameter("record must be a JSON object", param_hint="--data")

    try:
        ast = parse_rule(rule, get_settings().max_rule_depth)
    except RuleSyntaxError as e:
        click.echo(f"Syntax error: {e}", err=True)
        raise SystemExit(2)

    result = evaluate_rule(ast, record)
    click.echo(result.display)
    if result.is_error:
        raise SystemExit(2)
    raise SystemExit(0 if result.is_passed else 1)


@cli.command()
def info() -> None:
    """Display RuleCraft configuration."""
    settings = get_settings()

    click.echo(f"""
RuleCraft v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Rules:
  Numeric hints:  {', '.join(settings.numeric_attribute_hints)}
  Max length:     {settings.max_rule_length}
  Max depth:      {settings.max_rule_depth}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
