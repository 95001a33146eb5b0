"""Main CLI entry point for lazy-random.

Renders fixture profiles and samples individual generators from the
command line.
"""

from pathlib import Path
from typing import Any
import json
import sys

import click
import yaml
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from lazy_random import __version__
from lazy_random.datasets.loader import DatasetLoader, load_datasets
from lazy_random.engine.fixture_engine import FixtureEngine
from lazy_random.engine.validation_engine import ValidationEngine
from lazy_random.generators.registry import GeneratorRegistry
from lazy_random.observability import configure_logging
from lazy_random.profiles.loader import ProfileLoader, load_profile

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="lazy-random")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lazy-random - Generate synthetic fixture data from composable generators.

    Render whole fixtures from YAML profiles, or sample a single generator.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


@cli.command()
@click.argument("profile_path", type=click.Path(exists=True))
@click.option("--count", "-n", type=int, help="Number of records (overrides profile)")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--output", "-o", type=click.Path(), help="Output directory (overrides profile)")
@click.option("--format", "-f", type=click.Choice(["json", "jsonl", "csv"]), help="Output format (overrides profile)")
@click.option("--dry-run", is_flag=True, help="Show what would be generated without creating files")
@click.pass_context
def generate(
    ctx: click.Context,
    profile_path: str,
    count: int | None,
    seed: int | None,
    output: str | None,
    format: str | None,
    dry_run: bool,
) -> None:
    """Generate a fixture from a profile.

    PROFILE_PATH is the path to the YAML profile file.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        profile = load_profile(profile_path)
        if seed is not None:
            profile.seed = seed
        if count is not None:
            profile.count = count

        if dry_run:
            _show_dry_run(profile)
            return

        engine = FixtureEngine()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Generating records...", total=None)

            result = engine.generate(profile)

            progress.update(task, description="Exporting files...")
            files = engine.export_result(result, output, format=format)

        console.print(Panel.fit(
            f"[green]Generated {result.total_records} records in {result.duration_seconds:.2f}s[/green]\n"
            f"Seed: {result.dataset.seed}",
            title="Generation Complete",
        ))

        if verbose:
            console.print("\nCreated files:")
            for f in files:
                console.print(f"  - {f}")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.argument("generator_name")
@click.argument("args", nargs=-1)
@click.option("--count", "-n", type=int, default=1, help="Number of values")
@click.option("--seed", "-s", type=int, help="Random seed")
@click.option("--datasets", "-d", "datasets_path", type=click.Path(exists=True), help="YAML file with lookup tables")
@click.option("--pretty", is_flag=True, help="Pretty print JSON output")
@click.pass_context
def sample(
    ctx: click.Context,
    generator_name: str,
    args: tuple[str, ...],
    count: int,
    seed: int | None,
    datasets_path: str | None,
    pretty: bool,
) -> None:
    """Sample values from a single generator.

    GENERATOR_NAME is the generator to call; ARGS are its arguments, read as
    YAML scalars (so 1 is a number and 2020-01-01 is a date).

    \b
    Examples:
      lazy-random sample number 1 6 -n 10
      lazy-random sample wave 20 10 -n 20
      lazy-random sample date 2020-01-01 2020-12-31 -n 3
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        datasets = load_datasets(datasets_path) if datasets_path else None
        values = FixtureEngine().sample(
            generator_name,
            *[yaml.safe_load(arg) for arg in args],
            count=count,
            seed=seed,
            datasets=datasets,
        )
        click.echo(json.dumps(values, indent=2 if pretty else None, default=str))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.pass_context
def list_generators(ctx: click.Context) -> None:
    """List available generators."""
    registry = GeneratorRegistry()

    table = Table(title="Available Generators")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")

    for spec in registry:
        table.add_row(spec.name, spec.signature or "-", spec.description)

    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True))
@click.option("--sample", "sample_count", type=int, default=0, help="Render N records and check them against the profile schema")
@click.pass_context
def validate(ctx: click.Context, path: str, sample_count: int) -> None:
    """Validate a profile file.

    PATH is the path to the YAML profile to validate.
    """
    validation_engine = ValidationEngine()

    try:
        profile = load_profile(path)
        result = validation_engine.validate_profile(profile)

        if result.valid and sample_count > 0 and profile.json_schema:
            generated = FixtureEngine().generate(profile, count=sample_count)
            result = result.merge(
                validation_engine.validate_dataset(generated.dataset, profile.json_schema)
            )

        _print_validation_result(profile.name, result)

    except Exception as e:
        console.print(f"[red]Error loading file: {e}[/red]")
        sys.exit(1)

    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--name", "-n", required=True, help="Profile name")
@click.option("--output", "-o", type=click.Path(), default="profile.yaml", help="Output file path")
@click.option("--count", "-c", type=int, default=10, help="Number of records")
@click.pass_context
def init_profile(ctx: click.Context, name: str, output: str, count: int) -> None:
    """Initialize a new profile file.

    Creates a template profile YAML file.
    """
    from lazy_random.profiles.base import Profile, OutputConfig

    profile = Profile(
        name=name,
        description=f"Generated profile for {name}",
        count=count,
        template={
            "id": {"$sequence": [1, 2, 3, 4, 5]},
            "name": {"$join": [{"$first_name": None}, " ", {"$last_name": None}]},
            "age": {"$number": [18, 65]},
            "country": {"$country": None},
            "score": {"$float": [0, 100, 1]},
            "joined": {"$transform": [{"$date": ["2020-01-01", "2024-12-31"]}, "isoformat"]},
        },
        output=OutputConfig(),
    )

    loader = ProfileLoader()
    loader.save_file(profile, output)

    console.print(f"[green]Created profile: {output}[/green]")


@cli.command()
@click.option("--locale", "-l", default="en_US", help="Faker locale to draw names from")
@click.option("--size", type=int, default=25, help="Number of draws per table")
@click.option("--seed", "-s", type=int, help="Random seed")
@click.option("--output", "-o", type=click.Path(), help="Output YAML file (stdout if not specified)")
@click.pass_context
def datasets(
    ctx: click.Context,
    locale: str,
    size: int,
    seed: int | None,
    output: str | None,
) -> None:
    """Build lookup tables for country/first_name/last_name from Faker."""
    verbose = ctx.obj.get("verbose", False)
    loader = DatasetLoader()

    try:
        built = loader.from_faker(locale=locale, size=size, seed=seed)

        if output:
            loader.save_file(built, output)
            console.print(f"[green]Wrote datasets to {output}[/green]")
        else:
            click.echo(yaml.dump(
                loader.to_dict(built),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            ))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


def _show_dry_run(profile: Any) -> None:
    """Show what would be generated in a dry run."""
    console.print(Panel.fit(
        f"Profile: [cyan]{profile.name}[/cyan]\n"
        f"Records: {profile.count}\n"
        f"Seed: {profile.seed if profile.seed is not None else 'random'}\n"
        f"Output: {Path(profile.output.directory)} ({profile.output.format.value})",
        title="Dry Run",
    ))

    if isinstance(profile.template, dict):
        table = Table(title="Template Fields")
        table.add_column("Field", style="cyan")
        table.add_column("Definition")

        for key, value in profile.template.items():
            table.add_row(str(key), json.dumps(value, default=str))

        console.print(table)


def _print_validation_result(name: str, result: Any) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(f"\n{name}: {status}")

    if result.issues:
        for issue in result.issues:
            color = {
                "error": "red",
                "warning": "yellow",
                "info": "blue",
            }.get(issue.severity.value, "white")

            console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {issue.message}")
            if issue.path:
                console.print(f"    Path: {issue.path}")


if __name__ == "__main__":
    cli()
