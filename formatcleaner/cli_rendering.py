"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
notifications, rule listings, and settings summaries.
"""

from __future__ import annotations

import json
from typing import NoReturn

import typer

from .config import CleanerSettings, SettingsLoader
from .errors import CleanerStageError
from .models.datatypes import RuleList


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CleanerStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


class EchoNotifier:
    """Notifier that prints transient messages to stderr."""

    def info(self, message: str) -> None:
        typer.echo(message, err=True)

    def error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, err=True)


def echo_rule_list(name: str, rules: RuleList) -> None:
    """Print compact deterministic index/from/to rows for one rule list."""

    typer.echo(f"[{name}] {len(rules)} rule(s)")
    for index, rule in enumerate(rules):
        from_text = json.dumps(rule.from_text, ensure_ascii=False)
        to_text = json.dumps(rule.to_text, ensure_ascii=False)
        typer.echo(f"{index}. {from_text} -> {to_text}")


def echo_settings(settings: CleanerSettings) -> None:
    """Print settings in the persisted JSON shape."""

    payload = SettingsLoader.to_mapping(settings)
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
