"""Command-line interface for formatcleaner.

Responsibilities:
- Expose user-facing commands for cleaning, heading formatting, pattern checks,
  and rule/settings management.
- Resolve effective settings from YAML config, the JSON settings store, the
  environment, and explicit CLI overrides.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated

import typer

from . import notifications
from .cli_rendering import (
    EchoNotifier,
    echo_rule_list,
    echo_settings,
    exit_with_command_error,
)
from .config import CleanerSettings, SettingsLoader
from .errors import CleanerStageError, PersistenceError
from .io.storage import SettingsStore, read_document, write_document
from .models.datatypes import CleanStats, ReplacementRule
from .parsing import parse_line_range
from .pipeline import FormatCleaner
from .telemetry.logger import RunLogger
from .text.patterns import compile_pattern_set, is_safe_pattern

app = typer.Typer(
    name="formatcleaner",
    no_args_is_help=True,
    help="Clean pasted Markdown and AI-assistant text.",
)
rules_app = typer.Typer(no_args_is_help=True, help="Manage replacement rule lists.")
settings_app = typer.Typer(no_args_is_help=True, help="Inspect or initialize settings.")
app.add_typer(rules_app, name="rules")
app.add_typer(settings_app, name="settings")

_DEFAULT_SETTINGS_PATH = Path("formatcleaner.json")
_RULE_SETS = ("custom", "chatgpt", "claude")

SettingsOption = Annotated[
    Path,
    typer.Option("--settings", help="Path to the JSON settings store."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to a YAML settings file (overrides the store)."),
]
RuleSetOption = Annotated[
    str,
    typer.Option("--set", help="Rule list: `custom`, `chatgpt`, or `claude`."),
]


def _load_settings(config_file: Path | None, settings_file: Path) -> CleanerSettings:
    """Load settings from YAML when requested, else from the JSON store."""

    if config_file is None:
        try:
            return SettingsStore(settings_file).load()
        except PersistenceError as exc:
            raise CleanerStageError(
                stage="settings",
                detail=str(exc),
                hint="Fix or delete the settings file, or run `formatcleaner settings init --force`.",
            ) from exc

    try:
        return SettingsLoader.from_yaml(config_file)
    except FileNotFoundError as exc:
        raise CleanerStageError(
            stage="config",
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CleanerStageError(
            stage="config",
            detail=f"Invalid config file `{config_file}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise CleanerStageError(
            stage="config",
            detail=f"Failed to load config file `{config_file}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_settings(
    config_file: Path | None,
    settings_file: Path,
    overrides: dict[str, object],
) -> CleanerSettings:
    """Apply environment and CLI overrides on top of loaded settings."""

    loaded = _load_settings(config_file, settings_file)
    try:
        return SettingsLoader.with_overrides(loaded, cli=overrides)
    except ValueError as exc:
        raise CleanerStageError(
            stage="config",
            detail=str(exc),
            hint="Use one of `none`, `chatgpt`, `claude` for the AI source.",
        ) from exc


def _read_input(input_path: Path | None) -> str:
    """Read a document from a path, or from stdin when the path is `-` or omitted."""

    if input_path is None or str(input_path) == "-":
        return sys.stdin.read()
    try:
        return read_document(input_path)
    except OSError as exc:
        raise CleanerStageError(
            stage="read",
            detail=f"Could not read input `{input_path}`: {exc}",
            hint="Pass an existing UTF-8 text file or `-` for stdin.",
        ) from exc


def _write_output(
    text: str,
    input_path: Path | None,
    out: Path | None,
    in_place: bool,
) -> None:
    """Write results in place, to `--out`, or to stdout."""

    if in_place:
        if input_path is None or str(input_path) == "-":
            raise CleanerStageError(
                stage="write",
                detail="`--in-place` requires an input file path.",
                hint="Pass a file path or use `--out <path>`.",
            )
        out = input_path
    if out is None:
        typer.echo(text)
        return
    try:
        write_document(out, text)
    except OSError as exc:
        raise CleanerStageError(
            stage="write",
            detail=f"Could not write output `{out}`: {exc}",
        ) from exc


def _select_lines(text: str, line_range: str) -> tuple[list[str], int, int]:
    """Split a document into lines and resolve a 1-based inclusive line range."""

    lines = text.split("\n")
    try:
        start, end = parse_line_range(line_range)
    except ValueError as exc:
        raise CleanerStageError(stage="select", detail=str(exc)) from exc
    if end > len(lines):
        raise CleanerStageError(
            stage="select",
            detail=f"Line range `{line_range}` exceeds document length ({len(lines)} lines).",
        )
    return lines, start, end


def _splice_selection(document_lines: list[str], start: int, end: int, cleaned: str) -> str:
    """Replace lines `start`..`end` with `cleaned`, keeping CRLF endings on the span."""

    if document_lines[end - 1].endswith("\r"):
        cleaned = cleaned.replace("\n", "\r\n") + "\r"
    return "\n".join([*document_lines[: start - 1], cleaned, *document_lines[end:]])


def _require_rule_set(name: str) -> str:
    if name not in _RULE_SETS:
        raise CleanerStageError(
            stage="rules",
            detail=f"Unknown rule list `{name}`.",
            hint=f"Use one of: {', '.join(_RULE_SETS)}.",
        )
    return name


def _save_settings(store: SettingsStore, settings: CleanerSettings) -> None:
    """Persist settings, then recompile their patterns."""

    try:
        store.save(settings)
    except PersistenceError as exc:
        raise CleanerStageError(stage="settings", detail=str(exc)) from exc
    patterns = compile_pattern_set(settings)
    typer.echo(f"Saved {store.path}; compiled {patterns.total} pattern(s).")


@app.command("clean")
def clean_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Document to clean; `-` or omitted reads stdin."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the cleaned document to this path."),
    ] = None,
    in_place: Annotated[
        bool,
        typer.Option("--in-place", help="Overwrite the input document."),
    ] = False,
    lines: Annotated[
        str | None,
        typer.Option("--lines", help="Clean only a 1-based line range: `5` or `3-7`."),
    ] = None,
    config_file: ConfigOption = None,
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
    ai_source: Annotated[
        str | None,
        typer.Option("--ai-source", help="AI rule set: `none`, `chatgpt`, or `claude`."),
    ] = None,
    wechat: Annotated[
        bool | None,
        typer.Option("--wechat/--no-wechat", help="Apply WeChat spacing rules."),
    ] = None,
    remove_markdown: Annotated[
        bool | None,
        typer.Option("--remove-markdown/--keep-markdown", help="Apply custom replacements."),
    ] = None,
    unify_lists: Annotated[
        bool | None,
        typer.Option("--unify-lists/--keep-lists", help="Rewrite `-`/`*` markers to bullets."),
    ] = None,
    format_headings: Annotated[
        bool | None,
        typer.Option("--format-headings/--keep-headings", help="Normalize heading spacing."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Emit stage logs to stderr."),
    ] = False,
) -> None:
    """Clean a document, or a line range of it, with the configured rules."""

    try:
        settings = _resolve_settings(
            config_file,
            settings_file,
            {
                "default_ai_source": ai_source,
                "wechat_ready": wechat,
                "remove_markdown": remove_markdown,
                "unify_list_marker": unify_lists,
                "auto_format_headings": format_headings,
            },
        )
        cleaner = FormatCleaner(
            settings,
            notifier=EchoNotifier(),
            run_logger=RunLogger() if verbose else None,
        )
        text = _read_input(input_path)
        if lines is None:
            result = cleaner.clean(text)
            output = result.result
            message = notifications.format_cleaned(result.stats.replacements)
        else:
            document_lines, start, end = _select_lines(text, lines)
            result = cleaner.clean("\n".join(document_lines[start - 1 : end]))
            output = _splice_selection(document_lines, start, end, result.result)
            message = notifications.selection_cleaned(result.stats.replacements)
        _write_output(output, input_path, out, in_place)
    except Exception as exc:
        exit_with_command_error("clean", exc)

    typer.echo(message, err=True)


@app.command("heading")
def heading_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Document containing the line to rewrite."),
    ] = None,
    level: Annotated[
        int,
        typer.Option("--level", min=1, help="Heading level (number of `#`)."),
    ] = 1,
    line: Annotated[
        int | None,
        typer.Option("--line", min=1, help="1-based line number to rewrite."),
    ] = None,
    text: Annotated[
        str | None,
        typer.Option("--text", help="Rewrite this text instead of a document line."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the updated document to this path."),
    ] = None,
    in_place: Annotated[
        bool,
        typer.Option("--in-place", help="Overwrite the input document."),
    ] = False,
) -> None:
    """Format a line (or `--text`) as a heading of the given level."""

    try:
        cleaner = FormatCleaner(notifier=EchoNotifier())
        if text is not None:
            typer.echo(cleaner.format_heading(text, level))
            return
        if input_path is None or line is None:
            raise CleanerStageError(
                stage="select",
                detail="A document path and `--line` are required unless `--text` is given.",
                hint="Run `formatcleaner heading notes.md --line 3 --level 2`.",
            )
        document_lines, start, _ = _select_lines(_read_input(input_path), str(line))
        document_lines[start - 1] = cleaner.format_heading(document_lines[start - 1], level)
        _write_output("\n".join(document_lines), input_path, out, in_place)
    except Exception as exc:
        exit_with_command_error("heading", exc)


@app.command("check-pattern")
def check_pattern_command(
    pattern: Annotated[str, typer.Argument(help="Regular expression to screen.")],
) -> None:
    """Check a user-authored regex against the safety heuristics."""

    if is_safe_pattern(pattern):
        typer.echo("Pattern is safe.")
        return
    typer.secho(notifications.invalid_pattern(pattern), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("apply-pattern")
def apply_pattern_command(
    input_path: Annotated[Path, typer.Argument(help="Document to rewrite; `-` reads stdin.")],
    pattern: Annotated[str, typer.Argument(help="Regular expression to match.")],
    replacement: Annotated[str, typer.Argument(help="Replacement template (`\\1` allowed).")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the updated document to this path."),
    ] = None,
    in_place: Annotated[
        bool,
        typer.Option("--in-place", help="Overwrite the input document."),
    ] = False,
) -> None:
    """Apply one user-authored regex replacement to a whole document."""

    try:
        if not is_safe_pattern(pattern):
            raise CleanerStageError(
                stage="pattern",
                detail=notifications.invalid_pattern(pattern),
                hint="Patterns must compile, stay under 1000 characters and 50 groups, "
                "and avoid `(.*)` or `(.+)`.",
            )
        cleaner = FormatCleaner(notifier=EchoNotifier())
        stats = CleanStats()
        output = cleaner.apply_custom_pattern(_read_input(input_path), pattern, replacement, stats)
        _write_output(output, input_path, out, in_place)
    except Exception as exc:
        exit_with_command_error("apply-pattern", exc)

    typer.echo(notifications.format_cleaned(stats.replacements), err=True)


@rules_app.command("list")
def rules_list_command(
    rule_set: Annotated[
        str | None,
        typer.Option("--set", help="Only list `custom`, `chatgpt`, or `claude`."),
    ] = None,
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
) -> None:
    """List replacement rules in application order."""

    try:
        names = _RULE_SETS if rule_set is None else (_require_rule_set(rule_set),)
        settings = _load_settings(None, settings_file)
    except Exception as exc:
        exit_with_command_error("rules list", exc)

    for name in names:
        echo_rule_list(name, settings.rule_list(name))


@rules_app.command("add")
def rules_add_command(
    from_text: Annotated[str, typer.Argument(help="Literal text to find.")],
    to_text: Annotated[str, typer.Argument(help="Literal replacement text.")] = "",
    rule_set: RuleSetOption = "custom",
    index: Annotated[
        int | None,
        typer.Option("--index", help="Insert before this 0-based position (default: end)."),
    ] = None,
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
) -> None:
    """Add a literal replacement rule."""

    try:
        store = SettingsStore(settings_file)
        settings = _load_settings(None, settings_file)
        rules = settings.rule_list(_require_rule_set(rule_set))
        rule = ReplacementRule(from_text, to_text)
        try:
            if index is None:
                rules.append(rule)
            else:
                rules.insert(index, rule)
        except ValueError as exc:
            raise CleanerStageError(
                stage="rules",
                detail=str(exc),
                hint="Pass the literal text to match as the first argument.",
            ) from exc
        _save_settings(store, settings)
    except Exception as exc:
        exit_with_command_error("rules add", exc)


@rules_app.command("remove")
def rules_remove_command(
    index: Annotated[int, typer.Argument(help="0-based position of the rule to remove.")],
    rule_set: RuleSetOption = "custom",
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
) -> None:
    """Remove a replacement rule by position."""

    try:
        store = SettingsStore(settings_file)
        settings = _load_settings(None, settings_file)
        rules = settings.rule_list(_require_rule_set(rule_set))
        try:
            removed = rules.remove_at(index)
        except IndexError as exc:
            raise CleanerStageError(
                stage="rules",
                detail=str(exc),
                hint="Run `formatcleaner rules list` to see rule positions.",
            ) from exc
        _save_settings(store, settings)
        typer.echo(f"Removed {removed.from_text!r} from `{rule_set}`.")
    except Exception as exc:
        exit_with_command_error("rules remove", exc)


@settings_app.command("show")
def settings_show_command(
    config_file: ConfigOption = None,
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
) -> None:
    """Print effective settings, including environment overrides."""

    try:
        settings = _resolve_settings(config_file, settings_file, {})
    except Exception as exc:
        exit_with_command_error("settings show", exc)

    echo_settings(settings)


@settings_app.command("init")
def settings_init_command(
    settings_file: SettingsOption = _DEFAULT_SETTINGS_PATH,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write default settings to the JSON store."""

    try:
        store = SettingsStore(settings_file)
        if store.exists() and not force:
            raise CleanerStageError(
                stage="settings",
                detail=f"Settings file already exists: `{settings_file}`.",
                hint="Pass `--force` to overwrite it.",
            )
        _save_settings(store, SettingsLoader.defaults())
    except Exception as exc:
        exit_with_command_error("settings init", exc)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
