"""CLI entry point for mealy."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from mealy import __version__
from mealy.codec.document import parse_machine, parse_machine_strict
from mealy.codec.parser import parse_lines, parse_state
from mealy.codec.serializer import state_to_line
from mealy.config import MealyConfig, load_config
from mealy.machine import Machine
from mealy.utils.atomic import atomic_write_text
from mealy.utils.logging import configure_logging, get_logger, set_command
from mealy.utils.result import ExitCode, collect_results


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: MealyConfig) -> None:
        self.config = config
        self.logger = get_logger("cli")

    def strict(self, flag: Optional[bool]) -> bool:
        return self.config.parser.strict if flag is None else flag

    def record_history(self, flag: Optional[bool]) -> bool:
        return self.config.engine.record_history if flag is None else flag


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def output_line(data: dict) -> None:
    """Output one compact JSON object per line."""
    click.echo(json.dumps(data, default=str))


def exit_with(code: int) -> NoReturn:
    click.get_current_context().exit(code)


def load_machine(ctx: Context, path: Path, strict: bool) -> Machine:
    """Read and parse a machine document, exiting on a strict parse failure."""
    text = path.read_text(encoding="utf-8")

    if not strict:
        return parse_machine(text)

    result = parse_machine_strict(text)
    if result.is_err():
        error = result.unwrap_err()
        ctx.logger.info("document_rejected", path=str(path), error=str(error))
        output_json({
            "status": "parse_error",
            "message": str(error),
            "line_number": error.line_number,
            "offset": error.offset,
            "reason": error.reason,
        })
        exit_with(ExitCode.PARSE_FAILED)
    return result.unwrap()


def require_valid(ctx: Context, machine: Machine) -> None:
    """Exit with INVALID_MACHINE unless the machine passes validation."""
    check = machine.validate()
    if not check.ok:
        ctx.logger.info("machine_invalid", **check.to_dict())
        output_json({
            "status": "invalid",
            "message": f"Unable to execute: {check.message}",
            "check": check.to_dict(),
        })
        exit_with(ExitCode.INVALID_MACHINE)


strict_option = click.option(
    "--strict/--lenient",
    default=None,
    help="Fail on the first line that does not parse (default from config)",
)

history_option = click.option(
    "--history/--no-history",
    default=None,
    help="Record the states visited (default from config)",
)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to YAML config file",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    mealy - finite-state transducers from a line notation.

    Each line of a machine file declares one state:

        [START] S0 :: S0: 0|a, S1: 1|b
    """
    result = load_config(config)
    if result.is_err():
        output_json({
            "status": "error",
            "message": str(result.unwrap_err()),
        })
        ctx.exit(ExitCode.CONFIG_INVALID)

    settings = result.unwrap()
    configure_logging(
        level=log_level or settings.logging.level,
        format_type=log_format or settings.logging.format,
    )
    if ctx.invoked_subcommand:
        set_command(ctx.invoked_subcommand)

    ctx.obj = Context(settings)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@strict_option
@pass_context
def check(ctx: Context, file: Path, strict: Optional[bool]) -> None:
    """Parse and validate a machine file."""
    strict = ctx.strict(strict)
    machine = load_machine(ctx, file, strict)

    skipped = []
    if not strict:
        collected = collect_results(parse_lines(file.read_text(encoding="utf-8")))
        if collected.is_err():
            skipped = [
                {"line_number": e.line_number, "offset": e.offset, "reason": e.reason}
                for e in collected.unwrap_err()
            ]

    result = machine.validate()
    warnings = machine.lint()

    ctx.logger.info("check_completed", path=str(file), code=result.code.name)

    output_json({
        "status": "valid" if result.ok else "invalid",
        "states": len(machine),
        "check": result.to_dict(),
        "warnings": [w.to_dict() for w in warnings],
        "skipped_lines": skipped,
    })

    if not result.ok:
        exit_with(ExitCode.INVALID_MACHINE)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text", metavar="INPUT")
@history_option
@strict_option
@pass_context
def run(
    ctx: Context,
    file: Path,
    text: str,
    history: Optional[bool],
    strict: Optional[bool],
) -> None:
    """Run a machine over INPUT to completion."""
    machine = load_machine(ctx, file, ctx.strict(strict))
    require_valid(ctx, machine)

    result = machine.execute(text, record_history=ctx.record_history(history))
    ctx.logger.info("run_completed", final=result.final, accepted=result.accepted)

    output_json({
        "status": "accepted" if result.accepted else "rejected",
        **result.to_dict(),
    })

    if not result.accepted:
        exit_with(ExitCode.INPUT_REJECTED)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text", metavar="INPUT")
@history_option
@strict_option
@pass_context
def step(
    ctx: Context,
    file: Path,
    text: str,
    history: Optional[bool],
    strict: Optional[bool],
) -> None:
    """Step a machine over INPUT, printing one JSON line per step."""
    machine = load_machine(ctx, file, ctx.strict(strict))
    require_valid(ctx, machine)

    session = machine.create_session(text, record_history=ctx.record_history(history))

    output_line(session.snapshot().to_dict())
    for snapshot in session.steps():
        output_line(snapshot.to_dict())

    result = session.result()
    output_line({
        "status": "accepted" if result.accepted else "rejected",
        **result.to_dict(),
    })

    if not result.accepted:
        exit_with(ExitCode.INPUT_REJECTED)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--write",
    is_flag=True,
    default=False,
    help="Rewrite FILE in place instead of printing",
)
@strict_option
@pass_context
def fmt(ctx: Context, file: Path, write: bool, strict: Optional[bool]) -> None:
    """Normalize a machine file through parse and serialize."""
    machine = load_machine(ctx, file, ctx.strict(strict))
    text = machine.to_text() + "\n"

    if not write:
        click.echo(text, nl=False)
        return

    atomic_write_text(file, text)
    ctx.logger.info("document_rewritten", path=str(file), states=len(machine))
    output_json({
        "status": "written",
        "path": str(file),
        "states": len(machine),
    })


@cli.command("parse-line")
@click.argument("line")
@pass_context
def parse_line(ctx: Context, line: str) -> None:
    """Parse a single state LINE and report where it fails."""
    result = parse_state(line)

    if result.is_err():
        error = result.unwrap_err()
        output_json({
            "status": "parse_error",
            "message": str(error),
            "offset": error.offset,
            "reason": error.reason,
        })
        click.echo(error.caret(), err=True)
        exit_with(ExitCode.PARSE_FAILED)

    state = result.unwrap()
    output_json({
        "status": "ok",
        "line": state_to_line(state),
        "state": state.to_dict(),
    })


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
