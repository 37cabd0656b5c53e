"""
prompter — CLI entrypoint.

Usage:
    prompter --help
    prompter ask --name "Letter grade" --delimiter , --choice A --choice B
    prompter check --compare ">= 5" 7
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

import click

from prompter import __version__
from prompter.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    level_from_flags,
    setup_logging,
)

# Options shared by ``ask`` and ``check`` that declare checks
_CHECK_OPTIONS = [
    click.option("--regex", "regexes", multiple=True, help="Regular expression the value must match."),
    click.option("--choice", "choices", multiple=True, help="Allowed value (repeatable)."),
    click.option("--compare", "comparisons", multiple=True, help='Comparison such as ">= 5" or "lt m".'),
    click.option("--type", "value_type", type=click.Choice(["plain", "date"]), default=None),
    click.option("--delimiter", default=None, help="Split input into a list on this string."),
    click.option("--allow-null", is_flag=True, help="Accept the word NULL as a null value."),
    click.option("--date-format", default=None, help="strftime pattern used to show dates."),
    click.option("--date-format-return", default=None, help="strftime pattern for returned dates."),
    click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."),
]


def _check_options(func: Any) -> Any:
    for option in reversed(_CHECK_OPTIONS):
        func = option(func)
    return func


def _declared_checks(
    regexes: tuple[str, ...],
    choices: tuple[str, ...],
    comparisons: tuple[str, ...],
) -> dict[str, Any]:
    checks: dict[str, Any] = {}
    if regexes:
        checks["regex_check"] = [(pattern, "%s does not match %s") for pattern in regexes]
    if choices:
        checks["list_check"] = (list(choices), "%s is not one of: %s")
    if comparisons:
        checks["compare_check"] = [(expr, "%s must be %s") for expr in comparisons]
    return checks


def _common_params(
    value_type: str | None,
    delimiter: str | None,
    allow_null: bool,
    date_format: str | None,
    date_format_return: str | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if value_type:
        params["value_type"] = value_type
    if delimiter:
        params["delimiter"] = delimiter
    if allow_null:
        params["allow_null"] = True
    if date_format:
        params["date_format"] = date_format
    if date_format_return:
        params["date_format_return"] = date_format_return
    return params


def _build_prompter(ctx: click.Context) -> Any:
    """Prompter configured from --config, a discovered prompter.yml, or defaults."""
    from prompter.core.config.loader import find_config_file
    from prompter.core.engine.prompter import Prompter

    path = ctx.obj.get("config_path") or find_config_file()
    if path is not None:
        return Prompter.from_file(path)
    return Prompter()


def _fail(message: str, code: int) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(code)


@click.group()
@click.version_option(version=__version__, prog_name="prompter")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to prompter.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """prompter — ask for values and validate them."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--name", default=None, help="Name shown in front of the message.")
@click.option("--message", "-m", default=None, help="Message shown before the first prompt.")
@click.option("--prompt", default=None, help='Prompt string (default "> ").')
@click.option("--reprompt", default=None, help="Prompt used after a rejected answer.")
@click.option(
    "--case",
    type=click.Choice(["upper", "lower", "capitalize", "uc", "lc", "ucfirst"]),
    default=None,
)
@click.option("--confirm", is_flag=True, help="Ask the user to confirm the answer.")
@click.option("--hide-input", is_flag=True, help="Do not echo what the user types.")
@click.option("--default", "defaults", multiple=True, help="Default value (repeatable for lists).")
@click.option("--min-elem", "min_elements", type=int, default=None)
@click.option("--max-elem", "max_elements", type=int, default=None)
@click.option("--unique", is_flag=True, help="List elements must be unique.")
@click.option("--max-tries", type=int, default=None)
@click.option("--timeout", type=int, default=None, help="Seconds to wait for input (0 = forever).")
@_check_options
@click.pass_context
def ask(
    ctx: click.Context,
    name: str | None,
    message: str | None,
    prompt: str | None,
    reprompt: str | None,
    case: str | None,
    confirm: bool,
    hide_input: bool,
    defaults: tuple[str, ...],
    min_elements: int | None,
    max_elements: int | None,
    unique: bool,
    max_tries: int | None,
    timeout: int | None,
    regexes: tuple[str, ...],
    choices: tuple[str, ...],
    comparisons: tuple[str, ...],
    value_type: str | None,
    delimiter: str | None,
    allow_null: bool,
    date_format: str | None,
    date_format_return: str | None,
    as_json: bool,
) -> None:
    """Prompt for a value and print it once it passes every check."""
    from prompter.core.errors import ConfigurationError, PrompterError

    params = _common_params(value_type, delimiter, allow_null, date_format, date_format_return)
    optional = {
        "name": name,
        "message": message,
        "prompt": prompt,
        "reprompt": reprompt,
        "case": case,
        "min_elements": min_elements,
        "max_elements": max_elements,
        "max_tries": max_tries,
        "timeout": timeout,
    }
    params.update({key: value for key, value in optional.items() if value is not None})
    if confirm:
        params["confirm"] = True
    if hide_input:
        params["hide_input"] = True
    if unique:
        params["unique_elements"] = True
    if defaults:
        params["default"] = list(defaults) if delimiter else defaults[0]
    params.update(_declared_checks(regexes, choices, comparisons))

    try:
        prompter = _build_prompter(ctx)
        value = prompter.get(**params)
    except ConfigurationError as e:
        _fail(str(e), 2)
        return
    except PrompterError as e:
        _fail(str(e), 1)
        return

    if as_json:
        click.echo(json.dumps({"value": value}, indent=2))
        return

    if isinstance(value, list):
        click.echo("\n".join(str(v) for v in value))
    else:
        click.echo(value)


@cli.command()
@click.argument("values", nargs=-1, required=True)
@_check_options
@click.pass_context
def check(
    ctx: click.Context,
    values: tuple[str, ...],
    regexes: tuple[str, ...],
    choices: tuple[str, ...],
    comparisons: tuple[str, ...],
    value_type: str | None,
    delimiter: str | None,
    allow_null: bool,
    date_format: str | None,
    date_format_return: str | None,
    as_json: bool,
) -> None:
    """Validate VALUES against the given checks without prompting."""
    from prompter.core.errors import ConfigurationError, PrompterError

    params = _common_params(value_type, delimiter, allow_null, date_format, date_format_return)
    checks = _declared_checks(regexes, choices, comparisons)
    if not checks:
        _fail("No checks given; use --regex, --choice or --compare", 2)
        return
    params.update(checks)

    value: Any = list(values) if len(values) > 1 else values[0]
    try:
        result = _build_prompter(ctx).validate(value, **params)
    except ConfigurationError as e:
        _fail(str(e), 2)
        return
    except PrompterError as e:
        _fail(str(e), 1)
        return

    valid = result is not None
    if as_json:
        click.echo(json.dumps({"valid": valid, "value": result}, indent=2))
        sys.exit(0 if valid else 1)
        return

    if valid:
        if not ctx.obj.get("quiet"):
            click.secho("✅ Valid", fg="green", bold=True)
    else:
        click.secho("❌ Invalid", fg="red", bold=True)
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
