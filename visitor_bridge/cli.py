"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(name="visitor-bridge", help="Run script-defined visitors over program trees")


def _load_program_or_exit(program_path: Path):
    from visitor_bridge.core.errors import ASTDeserializeError
    from visitor_bridge.core.serialize import load_program

    try:
        return load_program(program_path)
    except OSError as e:
        typer.echo(f"Cannot read program {program_path}: {e}", err=True)
        raise typer.Exit(code=1)
    except ASTDeserializeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


@app.command("transform")
def transform(
    program_path: Path = typer.Argument(..., help="Program tree as interchange JSON"),
    config: Optional[str] = typer.Option(None, help="Config payload as a JSON string"),
    config_file: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="Read the config payload from a file",
    ),
    root: Optional[Path] = typer.Option(None, help="Directory transformImplPath is resolved against"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the resulting program here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every stage"),
    json_output: bool = typer.Option(False, "--json", help="Print diagnostics as JSON"),
) -> None:
    """Run the configured transform; the program passes through unchanged on failure."""
    import json

    from rich.console import Console

    from visitor_bridge.core.config import ConfigResolver
    from visitor_bridge.core.diagnostics import CollectingReporter
    from visitor_bridge.core.serialize import export_program, load_config_payload, program_to_json
    from visitor_bridge.logging_config import configure_logging
    from visitor_bridge.pipelines.executor import TransformExecutor
    from visitor_bridge.reports.render_diagnostics import (
        diagnostics_to_json,
        render_diagnostics_table,
        render_stage_log,
    )

    if config is not None and config_file is not None:
        typer.echo("Pass either --config or --config-file, not both", err=True)
        raise typer.Exit(code=2)

    configure_logging(verbose=verbose)
    program = _load_program_or_exit(program_path)
    payload = load_config_payload(config_file) if config_file is not None else config

    reporter = CollectingReporter()
    executor = TransformExecutor(resolver=ConfigResolver(root=root), reporter=reporter)
    result = executor.run(program, payload)

    if out is not None:
        export_program(result.program, out)
    else:
        typer.echo(program_to_json(result.program))

    if json_output:
        typer.echo(json.dumps(diagnostics_to_json(result.diagnostics), indent=2), err=True)
    else:
        console = Console(stderr=True)
        if verbose:
            render_stage_log(result.stage_log, console)
        render_diagnostics_table(result.diagnostics, console)

    if result.diagnostics:
        raise typer.Exit(code=1)


@app.command("assemble")
def assemble(
    impl_path: Path = typer.Argument(..., help="Transform script file"),
    visitor_class: str = typer.Option("TransformVisitor", help="Visitor class to instantiate"),
) -> None:
    """Print the program text the runtime would evaluate."""
    from visitor_bridge.transforms.assembler import CodeAssembler

    try:
        source = impl_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Cannot read transform {impl_path}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(CodeAssembler().assemble(source, visitor_class))


@app.command("roundtrip")
def roundtrip(
    program_path: Path = typer.Argument(..., help="Program tree as interchange JSON"),
) -> None:
    """Check that a program survives serialize -> deserialize unchanged."""
    from visitor_bridge.core.codec import ASTCodec
    from visitor_bridge.core.ecma_ast import iter_nodes

    program = _load_program_or_exit(program_path)
    codec = ASTCodec()
    again = codec.round_trip(program)
    count = sum(1 for _ in iter_nodes(program))
    if again != program:
        typer.echo(f"Round trip changed the program ({count} nodes)", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Round trip OK ({count} nodes)")


if __name__ == "__main__":
    app()
