"""Command line entry point for the core profiler."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml

from .config import load_settings
from .engine import GraphDefinitionError, RealActionRunner, SpecLoader
from .host import TerminalHost
from .profiler import MACHINE_NAME, create_core_profiler, register_services

app = typer.Typer(help="Store onboarding wizard driven by a declarative state machine.")


def configure_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def run(config: Optional[Path] = typer.Option(None, help="profiler-config.yaml to load"),
        answers: Optional[Path] = typer.Option(None, help="YAML answers keyed by component (headless mode)"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo side effects and debug logs")):
    """Run the onboarding wizard."""
    settings = load_settings(config)
    if verbose:
        settings = settings.model_copy(update={'verbose': True})
    configure_logging(settings.log_level, settings.verbose)

    scripted = None
    if answers is not None:
        scripted = yaml.safe_load(answers.read_text()) or {}

    runner = RealActionRunner(settings)
    try:
        engine = create_core_profiler(runner)
    except GraphDefinitionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    snapshot = asyncio.run(TerminalHost(engine, runner, scripted).run())
    runner.display(f"Wizard finished in state '{snapshot.value}'")


@app.command()
def graph(name: str = typer.Option(MACHINE_NAME, help="Graph name under flows/"),
          base_path: Optional[Path] = typer.Option(None, help="Directory holding flows/")):
    """Validate a state graph and print its states and transitions."""
    try:
        machine = SpecLoader(base_path=base_path).load_machine(name)
    except (FileNotFoundError, GraphDefinitionError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{machine.id} v{machine.version}: {machine.description}")
    for state_name, node in machine.states.items():
        marker = '*' if state_name == machine.initial else ' '
        progress = node.meta.get('progress', '-')
        typer.echo(f"{marker} {state_name} [{progress}] {node.meta.get('component', '')}".rstrip())
        for kind, candidates in node.events.items():
            for transition in candidates:
                typer.echo(f"    {kind} -> {transition.target or '(internal)'}")
        for transition in node.always:
            typer.echo(f"    always -> {transition.target}")
        if node.invoke:
            typer.echo(f"    invoke {node.invoke.src}")

    if name == MACHINE_NAME:
        missing = register_services().missing(machine)
        unresolved = [f"{kind}: {n}" for kind, names in missing.items() for n in names]
        for line in unresolved:
            typer.echo(f"Unresolved {line}", err=True)
        if unresolved:
            raise typer.Exit(1)


if __name__ == "__main__":
    app()
