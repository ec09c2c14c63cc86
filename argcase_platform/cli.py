from __future__ import annotations

import json
import logging
from typing import Iterable, Optional

import typer

from argcase_platform.core.enumerate.enumerate_cases import enumerate_cases
from argcase_platform.core.enumerate.strategies import STRATEGIES, get_strategy
from argcase_platform.core.enumerate.suite import build_case_plan, unpinned_args
from argcase_platform.core.errors import CaseConfigError, CaseConfigLoadError, CaseConfigValidationError
from argcase_platform.core.io.dump_cases import cases_to_data, plan_to_data, render, write_output
from argcase_platform.core.io.load_config import load_config
from argcase_platform.core.lint.lint_config import DEFAULT_MAX_CASES, lint_config
from argcase_platform.core.model import CaseConfig
from argcase_platform.core.validate.validate_config import summarize_config, validate_config

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Argument case enumeration CLI."""
    setup_logging(verbose)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


@app.command("validate")
def validate(
    path: str = typer.Argument(..., help="Path to an arg config file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Validate an argument config file."""
    _check_choice(format, ("text", "json"), code="E_VALIDATE_UNKNOWN_FORMAT", path="format")

    def _emit_json(ok: bool, *, exit_code: int, errors: list[CaseConfigError], summary: dict | None) -> None:
        payload = {
            "tool": "argcase",
            "command": "validate",
            "ok": ok,
            "error_count": len(errors),
            "errors": [e.as_item() for e in errors],
            "summary": summary,
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        raw = load_config(path)
    except CaseConfigLoadError as e:
        if format == "json":
            _emit_json(False, exit_code=1, errors=[e], summary=None)
        _print_errors([e])
        raise typer.Exit(code=1)

    config, errors = validate_config(raw)
    if errors or config is None:
        if format == "json":
            _emit_json(False, exit_code=2, errors=list(errors), summary=None)
        _print_errors(list(errors))
        raise typer.Exit(code=2)

    if format == "text":
        typer.echo(summarize_config(config))
        return

    summary = {
        "schema_version": config.schema_version,
        "function": config.function,
        "arg_count": len(config.args),
        "args": [a.name for a in config.args],
        "optional": [a.name for a in config.args if a.optional],
    }
    _emit_json(True, exit_code=0, errors=[], summary=summary)


@app.command("lint")
def lint(
    path: str = typer.Argument(..., help="Path to an arg config file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    max_cases: int = typer.Option(DEFAULT_MAX_CASES, "--max-cases", help="Largest acceptable all-valid plan"),
) -> None:
    """Lint an argument config (vacuous targets, case blow-up)."""
    _check_choice(format, ("text", "json"), code="E_LINT_UNKNOWN_FORMAT", path="format")

    def _emit_json(ok: bool, errors: list[CaseConfigError], exit_code: int) -> None:
        payload = {
            "tool": "argcase",
            "command": "lint",
            "ok": ok,
            "error_count": len(errors),
            "errors": [e.as_item() for e in errors],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        raw = load_config(path)
    except CaseConfigLoadError as e:
        if format == "json":
            _emit_json(False, [e], 1)
        _print_errors([e])
        raise typer.Exit(code=1)

    lint_errors = lint_config(raw, max_cases=max_cases)
    _, validation_errors = validate_config(raw)
    errors: list[CaseConfigError] = [*lint_errors, *validation_errors]

    if format == "text":
        if errors:
            _print_errors(errors)
            raise typer.Exit(code=2)
        typer.echo("OK: lint passed")
        return

    if errors:
        _emit_json(False, errors, 2)
    _emit_json(True, [], 0)


@app.command("enumerate")
def enumerate_cmd(
    path: str = typer.Argument(..., help="Path to an arg config file (.yaml/.yml/.json)"),
    faulted: Optional[str] = typer.Option(
        None,
        "--faulted",
        help="Arg name or index to receive invalid cases; omit for the all-valid plan",
    ),
    style: str = typer.Option("positional", "--style", help="Case style: positional|list|named"),
    format: str = typer.Option("json", "--format", help="Output format: json|yaml"),
    out: Optional[str] = typer.Option(None, "--out", help="Write cases to this file instead of stdout"),
) -> None:
    """Enumerate the all-valid plan, or the single-faulted plan for one arg."""
    _check_choice(format, ("json", "yaml"), code="E_ENUMERATE_UNKNOWN_FORMAT", path="format")
    _check_choice(style, tuple(STRATEGIES), code="E_ENUMERATE_UNKNOWN_STYLE", path="style")
    config = _load_valid_config(path)

    faulted_index = _resolve_faulted(config, faulted)
    if faulted_index is not None:
        _require_pinnable(config, [faulted_index])
    cases = enumerate_cases(get_strategy(style))(config.args, faulted_index)
    logger.info("generated %d cases", len(cases))

    _emit(render(cases_to_data(cases), format), out, f"{len(cases)} cases")


@app.command("plan")
def plan_cmd(
    path: str = typer.Argument(..., help="Path to an arg config file (.yaml/.yml/.json)"),
    style: str = typer.Option("positional", "--style", help="Case style: positional|list|named"),
    format: str = typer.Option("json", "--format", help="Output format: json|yaml"),
    out: Optional[str] = typer.Option(None, "--out", help="Write the plan to this file instead of stdout"),
) -> None:
    """Emit the all-valid cases plus one faulted plan per arg."""
    _check_choice(format, ("json", "yaml"), code="E_PLAN_UNKNOWN_FORMAT", path="format")
    _check_choice(style, tuple(STRATEGIES), code="E_PLAN_UNKNOWN_STYLE", path="style")
    config = _load_valid_config(path)

    _require_pinnable(config, range(len(config.args)))
    case_plan = build_case_plan(get_strategy(style))(config.args)
    _emit(render(plan_to_data(case_plan), format), out, f"{case_plan.total} cases")


def _load_valid_config(path: str) -> CaseConfig:
    try:
        raw = load_config(path)
    except CaseConfigLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    config, errors = validate_config(raw)
    if errors or config is None:
        _print_errors(list(errors))
        raise typer.Exit(code=2)
    return config


def _resolve_faulted(config: CaseConfig, faulted: Optional[str]) -> Optional[int]:
    """Resolve --faulted: an arg name wins over an index, so args named "1" stay reachable."""
    if faulted is None:
        return None

    index = config.index_of(faulted)
    if index is not None:
        return index
    try:
        return int(faulted)
    except ValueError:
        pass

    _print_errors(
        [
            CaseConfigValidationError(
                code="E_ENUMERATE_UNKNOWN_ARG",
                message=f"--faulted references unknown arg: {faulted}",
                file=config.file,
                path="faulted",
            )
        ]
    )
    raise typer.Exit(code=2)


def _require_pinnable(config: CaseConfig, faulted_indices: Iterable[int]) -> None:
    missing = unpinned_args(config.args, faulted_indices)
    if not missing:
        return
    _print_errors(
        [
            CaseConfigValidationError(
                code="E_NO_VALID_CASE_TO_PIN",
                message=f"arg {config.args[j].name} has no valid_cases to pin while another arg is faulted",
                file=config.file,
                path=f"args[{j}].valid_cases",
            )
            for j in missing
        ]
    )
    raise typer.Exit(code=2)


def _emit(text: str, out: Optional[str], what: str) -> None:
    if out is None:
        typer.echo(text)
        return
    write_output(out, text)
    typer.echo(f"OK: wrote {what} to {out}")


def _check_choice(value: str, choices: tuple[str, ...], *, code: str, path: str) -> None:
    if value in choices:
        return
    _print_errors(
        [
            CaseConfigValidationError(
                code=code,
                message=f"unknown {path}: {value} (choose one of: {', '.join(choices)})",
                file=None,
                path=path,
            )
        ]
    )
    raise typer.Exit(code=2)


def _print_errors(errors: list[CaseConfigError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="argcase")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
