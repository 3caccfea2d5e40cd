"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import logging
import random
import sys

import click

from simple_map_fuzzer.artifact_generation import (
    ActionSequenceGenerator,
    EncodingError,
    GenerationSettings,
    InvalidConfiguration,
    MapFileType,
    RandomMapGenerator,
    enumerate_action_sequences,
    write_artifact,
)
from simple_map_fuzzer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from simple_map_fuzzer.run_execution import (
    ReportRequest,
    RunExecutionError,
    RunRequest,
    execute_fuzz_run,
    rebuild_report,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-map-fuzzer")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log run progress to stderr.")
def cli(verbose: bool) -> None:
    """Randomized map and action sequence fuzzer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML fuzzing configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML fuzzing configuration with defaults and guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-map")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON fuzzing configuration file; defaults apply without it",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    default="maps",
    show_default=True,
    type=click.Path(path_type=str),
    help="Directory for the generated map files",
)
@click.option("--count", default=1, show_default=True, type=click.IntRange(min=1))
@click.option(
    "--type",
    "map_file_type",
    required=False,
    type=click.Choice(["text", "binary", "all"], case_sensitive=False),
    help="Override the configured map file type",
)
@click.option("--seed", required=False, type=int, help="Seed for reproducible maps")
def generate_map(
    config_path: str | None,
    output_dir: str,
    count: int,
    map_file_type: str | None,
    seed: int | None,
) -> None:
    """Generate random map files and print their paths."""
    generation = _generation_settings(config_path)
    if map_file_type:
        generation = dataclasses.replace(
            generation, map_file_type=MapFileType(map_file_type.upper())
        )
    if seed is not None:
        generation = dataclasses.replace(generation, seed=seed)
    try:
        generator = RandomMapGenerator(generation)
        for _ in range(count):
            click.echo(str(write_artifact(generator.generate_random_map(), output_dir)))
    except (InvalidConfiguration, EncodingError, FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="generate-actions")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON fuzzing configuration file; defaults apply without it",
)
@click.option("--count", default=1, show_default=True, type=click.IntRange(min=1))
@click.option(
    "--valid",
    "valid_only",
    is_flag=True,
    default=False,
    help="Draw tokens from the valid subset instead of the full alphabet.",
)
@click.option(
    "--enumerate",
    "enumerate_length",
    required=False,
    type=click.IntRange(min=0),
    help="Print every sequence of exactly this length instead of random ones.",
)
@click.option(
    "--require-exit",
    is_flag=True,
    default=False,
    help="Only enumerate sequences containing an exit action.",
)
@click.option(
    "--require-closed-starts",
    is_flag=True,
    default=False,
    help="Only enumerate sequences whose start actions are followed by exit or quit.",
)
@click.option("--seed", required=False, type=int, help="Seed for reproducible sequences")
def generate_actions(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    config_path: str | None,
    count: int,
    valid_only: bool,
    enumerate_length: int | None,
    require_exit: bool,
    require_closed_starts: bool,
    seed: int | None,
) -> None:
    """Print random action sequences, one per line."""
    generation = _generation_settings(config_path)
    settings = generation.action_sequence
    try:
        if enumerate_length is not None:
            alphabet = settings.valid_subset if valid_only else settings.alphabet
            for sequence in enumerate_action_sequences(
                enumerate_length,
                alphabet,
                require_exit=require_exit,
                require_closed_starts=require_closed_starts,
            ):
                click.echo(str(sequence))
            return
        generator = ActionSequenceGenerator(
            settings, rng=random.Random(generation.seed if seed is None else seed)
        )
    except InvalidConfiguration as exc:
        raise CliError(str(exc)) from exc
    for _ in range(count):
        sequence = (
            generator.generate_valid_action_sequence()
            if valid_only
            else generator.generate_random_action_sequence()
        )
        click.echo(str(sequence))


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON fuzzing configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Override the configured output directory",
)
@click.option(
    "--max-iterations",
    required=False,
    type=click.IntRange(min=1),
    help="Override the configured iteration budget",
)
@click.option("--seed", required=False, type=int, help="Override the configured seed")
def run_fuzzer(
    config_path: str,
    output_dir: str | None,
    max_iterations: int | None,
    seed: int | None,
) -> None:
    """Run the subject program against generated maps and write the reports."""
    try:
        outcome = execute_fuzz_run(
            RunRequest(
                config_path=config_path,
                output_dir=output_dir,
                max_iterations=max_iterations,
                seed=seed,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"{outcome.total_iterations} iterations ({outcome.stop_reason})")
    click.echo(str(outcome.output_dir))


@cli.command(name="report")
@click.option(
    "--results",
    "results_csv",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the results CSV of a finished run",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the rebuilt report; defaults to the run directory",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Configuration whose reporting section controls formatting",
)
def report(results_csv: str, output_dir: str | None, config_path: str | None) -> None:
    """Rebuild the HTML report and results workbook from a results CSV."""
    try:
        outcome = rebuild_report(
            ReportRequest(results_csv=results_csv, output_dir=output_dir, config_path=config_path)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_dir))


def _generation_settings(config_path: str | None) -> GenerationSettings:
    if not config_path:
        return GenerationSettings()
    try:
        return load_configuration(config_path).generation
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
