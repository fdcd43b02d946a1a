"""Typer CLI — inspect validation rules and check form definitions and submissions."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from formdee.config import load_form, load_settings, load_submission
from formdee.rules.catalog import UnknownRuleError, list_by_category
from formdee.rules.resolver import resolve_pattern
from formdee.rules.source import LegacyRaw, pattern_source
from formdee.rules.validator import check_pattern, error_message, validate_value
from formdee.schemas.field import FieldType
from formdee.schemas.rules import RuleId
from formdee.submission import clean_submission, validate_submission

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="formdee",
    help="FormDee — field validation rules and form checks.",
    no_args_is_help=True,
)
console = Console()

_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", envvar="FORMDEE_CONFIG", help="Path to formdee.yml"
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_rule(rule: str) -> RuleId:
    try:
        return RuleId(rule)
    except ValueError:
        console.print(f"[red]{escape(str(UnknownRuleError(rule)))}[/]")
        console.print(f"Known rules: {', '.join(r.value for r in RuleId)}")
        raise typer.Exit(code=1)


@app.command()
def rules(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    """List the validation rules, grouped by category."""
    _setup_logging(verbose)

    for category, entries in list_by_category().items():
        if not entries:
            continue
        table = Table(title=category.value.capitalize(), title_justify="left")
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Label")
        table.add_column("Pattern", style="dim")
        table.add_column("Example")
        for rule in entries:
            table.add_row(
                rule.id.value, escape(rule.label), escape(rule.pattern_template or "—"), escape(rule.example)
            )
        console.print(table)


@app.command()
def resolve(
    rule: str = typer.Argument(..., help="Rule id, e.g. phone_number"),
    pattern: str = typer.Option(None, "--pattern", "-p", help="Pattern for custom_regex"),
    domain: str = typer.Option(None, "--domain", "-d", help="Domain for email_domain"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the regex a rule choice resolves to."""
    _setup_logging(verbose)
    rule_id = _parse_rule(rule)

    resolved = resolve_pattern(rule_id, pattern, domain)
    if resolved is None:
        console.print("[yellow]No pattern — input is not validated.[/]")
        return
    # Print raw so the pattern can be copied without Rich markup interference.
    console.print(resolved, markup=False, highlight=False)


@app.command()
def test(
    value: str = typer.Argument(..., help="Value to validate"),
    rule: str = typer.Option(..., "--rule", "-r", help="Rule id, e.g. username"),
    pattern: str = typer.Option(None, "--pattern", "-p", help="Pattern for custom_regex"),
    domain: str = typer.Option(None, "--domain", "-d", help="Domain for email_domain"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a single value against a rule. Exits 1 when rejected."""
    _setup_logging(verbose)
    rule_id = _parse_rule(rule)

    if pattern and (err := check_pattern(pattern)):
        console.print(f"[yellow]Warning:[/] pattern does not compile ({escape(err)}); it is not enforced")

    if validate_value(value, rule_id, pattern, domain):
        console.print("[green]Accepted[/]")
        return
    console.print(f"[red]Rejected:[/] {error_message(rule_id)}")
    raise typer.Exit(code=1)


@app.command()
def validate(
    form: Path = typer.Option(..., "--form", "-f", help="Form definition (.json or .yml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a form definition without submitting anything."""
    _setup_logging(verbose)

    try:
        cfg = load_form(form)
    except Exception as exc:
        console.print(f"[red]Form validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print("[green]Form is valid![/]\n")
    console.print(f"  Ref key: {escape(cfg.ref_key)}")
    console.print(f"  Title:   {escape(cfg.title)}")
    console.print(f"  Fields:  {len(cfg.fields)}")

    warnings = 0
    for field in cfg.fields:
        line = f"    - {field.key} ({field.type.value}{', required' if field.required else ''})"
        if field.type is FieldType.TEXT:
            source = pattern_source(field)
            if isinstance(source, LegacyRaw):
                line += " [dim]legacy pattern[/]"
                pattern = source.pattern
            else:
                if source.rule_id is not RuleId.NONE:
                    line += f" [cyan]{source.rule_id.value}[/]"
                pattern = source.custom_pattern if source.rule_id is RuleId.CUSTOM_REGEX else None
            if pattern and (err := check_pattern(pattern)):
                warnings += 1
                line += f"\n      [yellow]Warning:[/] pattern does not compile ({escape(err)}); it is not enforced"
        console.print(line)

    if warnings:
        console.print(f"\n[yellow]{warnings} field pattern(s) will not be enforced.[/]")


@app.command()
def check(
    form: Path = typer.Option(..., "--form", "-f", help="Form definition (.json or .yml)"),
    values: Path = typer.Option(..., "--values", help="Submitted values (.json or .yml)"),
    config: Path = _CONFIG_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Check a submission against a form. Exits 1 when any field is rejected."""
    _setup_logging(verbose)

    try:
        settings = load_settings(config)
        cfg = load_form(form)
        submission = load_submission(values, cfg.ref_key)
    except Exception as exc:
        console.print(f"[red]Could not load input:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if submission.ref_key != cfg.ref_key:
        console.print(
            f"[red]Submission is for form {escape(repr(submission.ref_key))}, not {escape(repr(cfg.ref_key))}[/]"
        )
        raise typer.Exit(code=1)

    cleaned = clean_submission(cfg, submission.values, settings.max_text_length)
    errors = validate_submission(cfg, cleaned)
    if not errors:
        console.print(f"[green]Submission accepted[/] ({len(cleaned)} value(s))")
        return

    table = Table(title="Rejected fields", title_justify="left")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Problem", style="red")
    for err in errors:
        table.add_row(escape(err.key), escape(err.message))
    console.print(table)
    raise typer.Exit(code=1)
