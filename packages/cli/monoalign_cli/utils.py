"""Shared console helpers and the single place where flow results become exit codes."""

import traceback
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

from monoalign_common import ExitCodes, MonoalignError, OperationCancelled, get_logger
from monoalign_sdk import OperationResult, OperationStatus

console = Console()
logger = get_logger("cli")


def success(message: str) -> None:
    console.print(f"[bold green]✅ {escape(message)}[/bold green]")


def error(message: str) -> None:
    console.print(f"[bold red]❌ {escape(message)}[/bold red]")


def warning(message: str) -> None:
    console.print(f"[bold yellow]⚠️  {escape(message)}[/bold yellow]")


def info(message: str) -> None:
    console.print(f"[cyan]ℹ️  {escape(message)}[/cyan]")


def handle_error(e: Exception, verbose: bool = False) -> None:
    """Report an unexpected exception, with traceback when verbose."""
    error(f"An error occurred: {e}")
    logger.exception("Unhandled error", error=str(e))
    if verbose:
        console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")


def exit_code_for(result: OperationResult) -> int:
    if result.status is OperationStatus.CANCELLED:
        return ExitCodes.CANCELLED
    if result.status is OperationStatus.ERROR:
        return ExitCodes.ERROR
    return ExitCodes.SUCCESS


def finish(result: OperationResult) -> None:
    """Print the result summary and exit with the matching code."""
    if result.message:
        if result.status is OperationStatus.SUCCESS:
            success(result.message)
        elif result.status is OperationStatus.NOOP:
            info(result.message)
        elif result.status is OperationStatus.CANCELLED:
            warning(result.message)
        else:
            error(result.message)
    raise typer.Exit(exit_code_for(result))


def run_flow(flow: Callable[[], OperationResult], verbose: bool = False) -> None:
    """
    Run a flow and translate its result or failure into an exit code.

    Flows only return results or raise; this is the only place deciding how
    the process ends.
    """
    try:
        result = flow()
    except typer.Exit:
        raise
    except OperationCancelled as e:
        result = OperationResult.cancelled(e.message)
    except KeyboardInterrupt:
        result = OperationResult.cancelled("Operation cancelled by user")
    except MonoalignError as e:
        error(e.message)
        logger.error("Flow failed", code=e.code, error=e.message)
        raise typer.Exit(ExitCodes.ERROR)
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(ExitCodes.ERROR)
    finish(result)
