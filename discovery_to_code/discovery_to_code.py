import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    DecoratorPipeline,
    GeneratorError,
    OutputMode,
    generate_services,
)


def _setup_logging(debug: bool) -> logging.Logger:
    log = logging.getLogger("discovery_to_code")
    log.handlers = [RichHandler(rich_tracebacks=True, show_path=False, show_time=False)]
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.propagate = False
    return log


def _load_document(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{Path(path).name} is not valid JSON: {e}") from e


def _error_table(rows: list[tuple[str, str, str, str]]) -> Table:
    table = Table(title="Generation errors", show_lines=False)
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Error", style="red", no_wrap=True)
    table.add_column("Location", style="magenta")
    table.add_column("Message")
    for row in rows:
        table.add_row(*row)
    return table


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True), help="JSON configuration file")
@click.option("--namespace", "-n", default=None, type=str, help="Namespace of the generated code")
@click.option("--one-file-per-type", is_flag=True, default=False, help="Write one file per top-level type")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--jobs", "-j", default=1, type=click.IntRange(min=1), help="Number of services generated in parallel")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def discovery_to_code(config, namespace, one_file_per_type, force, jobs, debug, paths, output):
    """Generate C# client code from discovery documents PATHS into OUTPUT."""
    log = _setup_logging(debug)

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if namespace:
        config.namespace = namespace
    if one_file_per_type:
        config.one_file_per_type = True
    if force:
        config.output.mode = OutputMode.FORCE

    try:
        DecoratorPipeline.from_config(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    documents = [_load_document(path) for path in paths]
    results = generate_services(documents, config, max_workers=jobs)

    writer = AtomicWriter(config.output, require_namespace=True)
    output_dir = Path(output)
    rows: list[tuple[str, str, str, str]] = []

    for path, result in zip(paths, results):
        service = result.service_name or Path(path).name
        written = 0
        for unit in result.units:
            try:
                writer.write_unit(output_dir, unit.file_name, unit.text)
                written += 1
            except (FileExistsError, GeneratorError) as e:
                log.error(f"[{service}] {unit.file_name}: {e}")
                rows.append((service, type(e).__name__, unit.file_name, str(e)))
        for error in result.report.errors:
            rows.append((service, type(error).__name__, error.location, error.message))
        log.info(f"{service}: wrote {written} file(s) to {output_dir}")

    if rows:
        Console(stderr=True).print(_error_table(rows))
        sys.exit(1)


if __name__ == "__main__":
    discovery_to_code()
