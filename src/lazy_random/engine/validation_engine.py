"""Validation Engine - checks profiles and rendered data.

Generators themselves never reject input: an empty item source yields None
and a reversed range yields nonsense numbers. The Validation Engine is where
such templates get reported, before anything is rendered:
- Profiles reference known generators with workable arguments
- Rendered records match the profile's JSON schema
"""

from typing import Any
from enum import Enum
from dataclasses import dataclass, field
import json
import math

import jsonschema

from lazy_random.generators.random_gen import Random
from lazy_random.generators.registry import GeneratorRegistry, get_global_generator_registry
from lazy_random.profiles.base import Profile
from lazy_random.profiles.compiler import TemplateCompiler, call_parts, is_call
from lazy_random.engine.fixture_engine import GeneratedDataset, GeneratedRecord, json_default
from lazy_random.utils.helpers import flatten_args, parse_date


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=self.issues + other.issues,
            validated_count=self.validated_count + other.validated_count,
            metadata={**self.metadata, **other.metadata},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
            "metadata": self.metadata,
        }


# Positional argument pairs that form a [min, max] range
RANGE_ARGS = {
    "number": ("min_value", "max_value"),
    "float": ("min_value", "max_value"),
    "date": ("min_value", "max_value"),
}


class ValidationEngine:
    """Engine for validating profiles and generated data."""

    def __init__(self, registry: GeneratorRegistry | None = None):
        self.registry = registry or get_global_generator_registry()

    def validate_profile(self, profile: Profile) -> ValidationResult:
        """Validate a profile configuration.

        Checks:
        - Required fields are present
        - The template compiles
        - Ranges, sources and lengths make sense
        """
        result = ValidationResult(valid=True, validated_count=1)

        if not profile.name:
            result.add_issue(
                ValidationSeverity.ERROR,
                "Profile must have a name",
                path="name",
            )

        if profile.template is None:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Profile has no template; every record will be null",
                path="template",
            )
            return result

        compiler = TemplateCompiler(Random(seed=0), registry=self.registry)
        try:
            compiler.compile(profile.template)
        except ValueError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                str(e),
                path="template",
            )
            return result

        self._check_node(compiler, profile.template, "template", result)
        return result

    def _check_node(
        self,
        compiler: TemplateCompiler,
        node: Any,
        path: str,
        result: ValidationResult,
    ) -> None:
        """Walk a template, reporting arguments that render silently wrong."""
        if is_call(node):
            name, raw_args = call_parts(node)
            if name == "constant":
                return
            args, kwargs = compiler.split_args(name, raw_args)
            self._check_call(name, args, kwargs, f"{path}.${name}", result)
            for i, arg in enumerate(args):
                self._check_node(compiler, arg, f"{path}.${name}[{i}]", result)
            for key, value in kwargs.items():
                self._check_node(compiler, value, f"{path}.${name}.{key}", result)
        elif isinstance(node, dict):
            for key, value in node.items():
                self._check_node(compiler, value, f"{path}.{key}", result)
        elif isinstance(node, list):
            for i, value in enumerate(node):
                self._check_node(compiler, value, f"{path}[{i}]", result)

    def _check_call(
        self,
        name: str,
        args: list[Any],
        kwargs: dict[str, Any],
        path: str,
        result: ValidationResult,
    ) -> None:
        if name in RANGE_ARGS:
            low_name, high_name = RANGE_ARGS[name]
            low = args[0] if len(args) > 0 else kwargs.get(low_name)
            high = args[1] if len(args) > 1 else kwargs.get(high_name)

            if name == "date":
                low, high = self._date_bound(low, path, result), self._date_bound(high, path, result)

            if _is_number(low) and _is_number(high) and low > high:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"'{name}' range is reversed: {low} > {high}",
                    path=path,
                    min_value=low,
                    max_value=high,
                )

        if name in ("item", "sequence"):
            values = args[0] if name == "sequence" and args else flatten_args(args)
            if isinstance(values, list) and not values:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"'{name}' has no values and will render null",
                    path=path,
                )

        if name == "array":
            length = args[0] if args else kwargs.get("length")
            if _is_number(length) and length < 0:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"'array' length is negative: {length}",
                    path=path,
                )
            elif length is not None and not isinstance(length, int):
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"'array' length must be an integer: {length!r}",
                    path=path,
                )

    def _date_bound(self, value: Any, path: str, result: ValidationResult) -> Any:
        if value is None or is_call(value):
            return None
        timestamp = parse_date(value)
        if isinstance(timestamp, float) and math.isnan(timestamp):
            result.add_issue(
                ValidationSeverity.WARNING,
                f"Unparseable date '{value}'; 'date' will render null",
                path=path,
            )
            return None
        return timestamp

    def validate_dataset(
        self,
        dataset: GeneratedDataset,
        schema: dict[str, Any] | None = None,
    ) -> ValidationResult:
        """Validate a generated dataset.

        Checks:
        - Dataset has records
        - Records match optional schema
        """
        result = ValidationResult(valid=True, validated_count=len(dataset))

        if not dataset.records:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Dataset has no records",
                path="records",
            )

        if schema:
            for i, record in enumerate(dataset.records):
                record_result = self.validate_record(record, schema)
                for issue in record_result.issues:
                    issue.path = f"records[{i}].{issue.path}" if issue.path else f"records[{i}]"
                    result.issues.append(issue)
                    if issue.severity == ValidationSeverity.ERROR:
                        result.valid = False

        return result

    def validate_record(
        self,
        record: GeneratedRecord,
        schema: dict[str, Any],
    ) -> ValidationResult:
        """Validate a single record against a JSON schema.

        The record is checked in its exported form, so dates are ISO 8601
        strings as they are in the written files.

        Args:
            record: The record to validate
            schema: JSON Schema to validate against

        Returns:
            Validation result
        """
        result = ValidationResult(valid=True, validated_count=1)

        try:
            data = json.loads(json.dumps(record.data, default=json_default))
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                schema_path=list(e.schema_path),
            )
        except jsonschema.SchemaError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Invalid schema: {e.message}",
                path="schema",
            )

        return result


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
