"""Fixture Engine - renders profiles into datasets.

The Fixture Engine orchestrates the generation process by:
- Compiling profile templates into generators
- Binding them to a seeded Random and the profile's lookup tables
- Rendering and exporting records
"""

from typing import Any, Iterator
from datetime import datetime, timezone
from pathlib import Path
import csv
import json

import structlog
from pydantic import BaseModel, Field

from lazy_random.datasets.base import Datasets
from lazy_random.generators.base import unwrap
from lazy_random.generators.random_gen import Random
from lazy_random.generators.registry import GeneratorRegistry, get_global_generator_registry
from lazy_random.profiles.base import Profile, OutputFormat
from lazy_random.profiles.compiler import TemplateCompiler
from lazy_random.utils.helpers import flatten_dict, generate_seed

logger = structlog.get_logger(__name__)


class GeneratedRecord(BaseModel):
    """A single rendered record."""

    data: Any = Field(..., description="The generated value")
    sequence_number: int = Field(default=0, description="Record sequence number")


class GeneratedDataset(BaseModel):
    """All records rendered from one profile."""

    profile_name: str = Field(..., description="Source profile name")
    records: list[GeneratedRecord] = Field(default_factory=list, description="Generated records")
    seed: int | None = Field(default=None, description="Random seed used")
    total_count: int = Field(default=0, description="Total number of records")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Dataset metadata")

    def __iter__(self) -> Iterator[GeneratedRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def values(self) -> list[Any]:
        """The rendered values without record wrappers."""
        return [r.data for r in self.records]


class GenerationResult:
    """Result of a generation run."""

    def __init__(
        self,
        profile: Profile,
        dataset: GeneratedDataset,
        start_time: datetime,
        end_time: datetime,
    ):
        self.profile = profile
        self.dataset = dataset
        self.start_time = start_time
        self.end_time = end_time

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def total_records(self) -> int:
        return len(self.dataset)

    def summary(self) -> dict[str, Any]:
        return {
            "profile": self.profile.name,
            "version": self.profile.version,
            "seed": self.dataset.seed,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
            "total_records": self.total_records,
        }


class FixtureEngine:
    """Engine for rendering fixtures from profiles and named generators."""

    def __init__(self, registry: GeneratorRegistry | None = None):
        self.registry = registry or get_global_generator_registry()

    def build(self, profile: Profile, seed: int | None = None) -> Any:
        """Compile a profile template into a generator.

        Args:
            profile: The profile to compile
            seed: Seed for the Random instance (profile seed when omitted)

        Returns:
            The compiled generator, or a literal for literal templates
        """
        rand = Random(
            seed=seed if seed is not None else profile.seed,
            datasets=profile.datasets,
        )
        compiler = TemplateCompiler(rand, registry=self.registry)
        generator = compiler.compile(profile.template)
        logger.debug("profile_compiled", profile=profile.name, seed=rand.seed)
        return generator

    def generate(self, profile: Profile, count: int | None = None) -> GenerationResult:
        """Render every record of a profile.

        A profile without a seed gets a fresh one, recorded on the dataset so
        the run can be repeated.

        Args:
            profile: The profile to render
            count: Optional override of the profile's record count

        Returns:
            GenerationResult containing the rendered dataset
        """
        start_time = datetime.now(timezone.utc)
        seed = profile.seed if profile.seed is not None else generate_seed()
        count = count if count is not None else profile.count

        generator = self.build(profile, seed=seed)
        records = [
            GeneratedRecord(data=unwrap(generator), sequence_number=i)
            for i in range(count)
        ]

        dataset = GeneratedDataset(
            profile_name=profile.name,
            records=records,
            seed=seed,
            total_count=len(records),
            metadata={"version": profile.version, "tags": profile.tags},
        )
        end_time = datetime.now(timezone.utc)

        logger.debug("dataset_generated", profile=profile.name, count=len(records), seed=seed)

        return GenerationResult(
            profile=profile,
            dataset=dataset,
            start_time=start_time,
            end_time=end_time,
        )

    def stream(self, profile: Profile, count: int | None = None) -> Iterator[Any]:
        """Render records one at a time.

        Args:
            profile: The profile to render
            count: Optional limit on records (None for infinite)

        Yields:
            Rendered values
        """
        generator = self.build(profile)
        produced = 0
        while count is None or produced < count:
            yield unwrap(generator)
            produced += 1

    def sample(
        self,
        name: str,
        *args: Any,
        count: int = 1,
        seed: int | None = None,
        datasets: Datasets | None = None,
        **kwargs: Any,
    ) -> list[Any]:
        """Invoke one named generator several times.

        Args:
            name: The generator name
            *args: Positional factory arguments
            count: Number of values to draw
            seed: Optional random seed
            datasets: Optional lookup tables
            **kwargs: Keyword factory arguments

        Returns:
            The drawn values
        """
        rand = Random(seed=seed, datasets=datasets)
        generator = self.registry.create(rand, name, *args, **kwargs)
        if generator is None:
            raise ValueError(f"Unknown generator: {name}")
        return generator.take(count)

    def list_generators(self) -> list[str]:
        """List all available generator names."""
        return self.registry.list_names()

    def export_result(
        self,
        result: GenerationResult,
        output_dir: Path | str | None = None,
        format: OutputFormat | str | None = None,
    ) -> list[Path]:
        """Export generation results to files.

        Args:
            result: The generation result to export
            output_dir: Directory to write files to (profile output directory
                when omitted)
            format: Output format (profile output format when omitted)

        Returns:
            List of created file paths
        """
        output = result.profile.output
        output_dir = Path(output_dir or output.directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        format = OutputFormat(format or output.format)

        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        stem = output.filename_pattern.format(
            profile=result.profile.name,
            timestamp=timestamp,
            seed=result.dataset.seed,
        )
        filepath = output_dir / f"{stem}.{format.value}"
        dataset = result.dataset

        if format == OutputFormat.JSON:
            values = dataset.values()
            data: Any = values
            if output.include_metadata:
                data = {
                    "metadata": {
                        "profile": dataset.profile_name,
                        "seed": dataset.seed,
                        "total_count": dataset.total_count,
                        "generated_at": timestamp,
                    },
                    "records": values,
                }
            with open(filepath, "w") as f:
                json.dump(data, f, indent=2 if output.pretty_print else None, default=json_default)

        elif format == OutputFormat.JSONL:
            with open(filepath, "w") as f:
                for record in dataset.records:
                    f.write(json.dumps(record.data, default=json_default) + "\n")

        elif format == OutputFormat.CSV:
            rows = [_csv_row(record.data) for record in dataset.records]
            fieldnames: list[str] = []
            for row in rows:
                fieldnames.extend(k for k in row if k not in fieldnames)
            with open(filepath, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)

        created_files = [filepath]

        if output.include_metadata:
            summary_path = output_dir / f"summary_{timestamp}.json"
            with open(summary_path, "w") as f:
                json.dump(result.summary(), f, indent=2)
            created_files.append(summary_path)

        logger.debug("dataset_exported", profile=dataset.profile_name, format=format.value, path=str(filepath))
        return created_files


def json_default(value: Any) -> Any:
    """Serialize values json can't, dates as ISO 8601 strings."""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _csv_row(data: Any) -> dict[str, Any]:
    if isinstance(data, dict):
        row = flatten_dict(data)
    else:
        row = {"value": data}
    return {
        key: json_default(value) if hasattr(value, "isoformat") else value
        for key, value in row.items()
    }
