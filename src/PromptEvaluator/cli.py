"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .config import Settings, load_settings
from .engine import SubprocessEngine
from .exceptions import ConfigError, JobLoadError
from .job.loader import load_job_file
from .job.models import JobSpecification
from .logging_utils import configure_logging
from .run.controller import RunController
from .run.events import LOG_EVENT, EventChannel
from .run.models import RunResult, RunState
from .run.notifications import Notification, NotificationLevel, RecordingNotifier
from .state import AppState

CLI_VERSION = "0.1.0"

app = typer.Typer(help="Generate and run prompt variants against local models and remote APIs")


@dataclass
class CLIContext:
    settings: Settings


class ConsoleNotifier(RecordingNotifier):
    """Prints notifications as they arrive and keeps them for the exit code."""

    def __init__(self, console: Console) -> None:
        super().__init__()
        self._console = console

    def notify(self, notification: Notification) -> None:
        super().notify(notification)
        style = "red" if notification.level is NotificationLevel.ERROR else "green"
        self._console.print(Text.assemble((notification.title, style), ": ", notification.message))


def _settings(ctx: typer.Context) -> Settings:
    context: CLIContext = ctx.obj
    return context.settings


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML settings file."),
    engine: Optional[str] = typer.Option(None, "--engine", help="Engine executable to run jobs with."),
    use_gpu: bool = typer.Option(False, "--use-gpu", help="Ask the engine to use the GPU."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="Log format: text or json."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    overrides = {
        "engine_command": [engine] if engine else None,
        "use_gpu": True if use_gpu else None,
        "log_format": log_format,
        "verbose": True if verbose else None,
    }
    try:
        settings = load_settings(config, overrides=overrides)
    except ConfigError as exc:
        typer.secho(f"[error] {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    configure_logging(settings)
    ctx.obj = CLIContext(settings=settings)


@app.command("validate")
def validate(
    job_file: Path = typer.Argument(..., help="Path to a job JSON file."),
) -> None:
    """Check that a job file can be loaded."""

    try:
        spec = load_job_file(job_file)
    except JobLoadError as exc:
        typer.secho(f"Error loading JSON file: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    typer.echo(
        f"Loaded input: {len(spec.variables)} variables, "
        f"{len(spec.local_models)} local models, {len(spec.remote_models)} remote models"
    )


async def run_headless(
    spec: JobSpecification,
    settings: Settings,
    *,
    console: Console,
    show_logs: bool = True,
) -> tuple[Sequence[RunResult], ConsoleNotifier]:
    """Run one job to completion without a GUI and return its results."""

    events = EventChannel()
    app_state = AppState()
    notifier = ConsoleNotifier(console)
    engine = SubprocessEngine(
        settings.engine_command,
        events,
        output_dir=settings.output_dir,
        use_gpu=settings.use_gpu,
    )
    controller = RunController(
        engine,
        events,
        app_state,
        notifier=notifier,
        reveal_delay_s=0.0,
    )
    finished = asyncio.Event()
    controller.add_listener(lambda state: finished.set() if state is RunState.IDLE else None)
    echo = None
    if show_logs:
        echo = events.subscribe(LOG_EVENT, lambda fragment: typer.echo(fragment, nl=False, err=True))
    try:
        if await controller.submit(spec):
            if show_logs:
                await finished.wait()
            else:
                with Console(stderr=True).status("Waiting for the engine"):
                    await finished.wait()
    finally:
        if echo is not None:
            events.unsubscribe(echo)
        controller.close()
        await engine.aclose()
    return app_state.results, notifier


def _print_results(console: Console, results: Sequence[RunResult]) -> None:
    for result in results:
        body = Text.assemble(
            ("System\n", "bold"),
            result.system,
            ("\n\nUser\n", "bold"),
            result.user,
            ("\n\nResponse\n", "bold"),
            result.response,
        )
        console.print(Panel(body, title=Text(result.name), expand=True))


@app.command("run")
def run(
    ctx: typer.Context,
    job_file: Path = typer.Argument(..., help="Path to a job JSON file."),
    show_logs: bool = typer.Option(True, "--show-logs/--hide-logs", help="Stream engine output."),
) -> None:
    """Submit a job to the engine and print the results."""

    settings = _settings(ctx)
    try:
        spec = load_job_file(job_file)
    except JobLoadError as exc:
        typer.secho(f"Error loading JSON file: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    console = Console()
    results, notifier = asyncio.run(run_headless(spec, settings, console=console, show_logs=show_logs))
    if notifier.failures:
        raise typer.Exit(code=1)
    _print_results(console, results)


@app.command("ui")
def ui_command(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8080, help="Port to serve the UI on."),
) -> None:
    """Start the graphical editor."""

    from .gui.app import run_app

    run_app(_settings(ctx), host=host, port=port)


@app.command("version")
def version() -> None:
    typer.echo(CLI_VERSION)


def main() -> None:  # pragma: no cover - console script
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
