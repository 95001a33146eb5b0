"""Base classes for Profiles - the configuration layer.

A Profile declares a record template, how many records to render, the seed
and lookup tables to render them with, and where the output goes. It holds
no generation logic; templates are compiled into generators by the
TemplateCompiler.
"""

from typing import Any
from enum import Enum

from pydantic import BaseModel, Field

from lazy_random.datasets.base import Datasets


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    JSONL = "jsonl"
    CSV = "csv"


class OutputConfig(BaseModel):
    """Configuration for output files."""

    format: OutputFormat = Field(default=OutputFormat.JSON, description="Output format")
    directory: str = Field(default="./output", description="Output directory")
    filename_pattern: str = Field(
        default="{profile}_{timestamp}",
        description="Pattern for output filenames"
    )
    pretty_print: bool = Field(default=True, description="Pretty print JSON output")
    include_metadata: bool = Field(
        default=True,
        description="Include generation metadata in output"
    )


class Profile(BaseModel):
    """A named, reproducible fixture definition.

    A Profile declares:
    - The record template (generator calls written as ``{"$name": args}``)
    - How many records to render
    - The random seed and lookup tables
    - Output settings
    """

    name: str = Field(..., description="Profile name")
    description: str = Field(default="", description="Profile description")
    version: str = Field(default="1.0.0", description="Profile version")

    count: int = Field(default=10, ge=1, description="Number of records to render")

    seed: int | None = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    template: Any = Field(
        default=None,
        description="Record template compiled into a generator"
    )

    datasets: Datasets | None = Field(
        default=None,
        description="Lookup tables (defaults are used when omitted)"
    )

    json_schema: dict[str, Any] | None = Field(
        default=None,
        description="Optional JSON schema every record must satisfy"
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output configuration"
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Tags for categorization"
    )

    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata"
    )


class ProfileBuilder:
    """Fluent builder for creating Profiles."""

    def __init__(self, name: str):
        self._name = name
        self._description = ""
        self._version = "1.0.0"
        self._count = 10
        self._seed: int | None = None
        self._template: Any = None
        self._fields: dict[str, Any] = {}
        self._datasets: Datasets | None = None
        self._json_schema: dict[str, Any] | None = None
        self._output = OutputConfig()
        self._tags: list[str] = []
        self._metadata: dict[str, Any] = {}

    def description(self, description: str) -> "ProfileBuilder":
        self._description = description
        return self

    def version(self, version: str) -> "ProfileBuilder":
        self._version = version
        return self

    def count(self, count: int) -> "ProfileBuilder":
        self._count = count
        return self

    def seed(self, seed: int) -> "ProfileBuilder":
        self._seed = seed
        return self

    def template(self, template: Any) -> "ProfileBuilder":
        self._template = template
        return self

    def field(self, name: str, node: Any) -> "ProfileBuilder":
        """Add one field to a mapping template."""
        self._fields[name] = node
        return self

    def datasets(self, datasets: Datasets) -> "ProfileBuilder":
        self._datasets = datasets
        return self

    def json_schema(self, schema: dict[str, Any]) -> "ProfileBuilder":
        self._json_schema = schema
        return self

    def output_format(self, format: OutputFormat | str) -> "ProfileBuilder":
        if isinstance(format, str):
            format = OutputFormat(format)
        self._output.format = format
        return self

    def output_directory(self, directory: str) -> "ProfileBuilder":
        self._output.directory = directory
        return self

    def tag(self, *tags: str) -> "ProfileBuilder":
        self._tags.extend(tags)
        return self

    def metadata(self, **kwargs: Any) -> "ProfileBuilder":
        self._metadata.update(kwargs)
        return self

    def build(self) -> Profile:
        template = self._template
        if self._fields:
            template = {**(template or {}), **self._fields}

        return Profile(
            name=self._name,
            description=self._description,
            version=self._version,
            count=self._count,
            seed=self._seed,
            template=template,
            datasets=self._datasets,
            json_schema=self._json_schema,
            output=self._output,
            tags=self._tags,
            metadata=self._metadata,
        )
