"""Tests for the Engine module."""

import pytest
import json
import csv
import tempfile
from pathlib import Path

import structlog
from structlog.testing import capture_logs

from lazy_random.datasets.base import Datasets
from lazy_random.engine.fixture_engine import (
    FixtureEngine,
    GeneratedDataset,
    GeneratedRecord,
)
from lazy_random.engine.validation_engine import (
    ValidationEngine,
    ValidationResult,
    ValidationSeverity,
)
from lazy_random.profiles.base import Profile, ProfileBuilder, OutputConfig, OutputFormat


@pytest.fixture
def user_profile():
    """A small profile with deterministic lookups."""
    return (
        ProfileBuilder("users")
        .count(5)
        .seed(42)
        .field("id", {"$sequence": [1, 2, 3]})
        .field("name", {"$join": [{"$first_name": None}, " ", {"$last_name": None}]})
        .field("age", {"$number": [18, 65]})
        .field("tags", [{"$item": ["a", "b"]}, "fixed"])
        .datasets(Datasets(first_names=["Ada"], last_names=["Lovelace"]))
        .build()
    )


@pytest.fixture
def engine():
    return FixtureEngine()


class TestFixtureEngine:
    """Tests for FixtureEngine."""

    def test_generate(self, engine, user_profile):
        result = engine.generate(user_profile)

        assert result.total_records == 5
        assert result.dataset.seed == 42
        assert [r.sequence_number for r in result.dataset] == [0, 1, 2, 3, 4]

        values = result.dataset.values()
        assert [v["id"] for v in values] == [1, 2, 3, 1, 2]
        assert all(v["name"] == "Ada Lovelace" for v in values)
        assert all(18 <= v["age"] <= 65 for v in values)
        assert all(v["tags"][0] in ("a", "b") and v["tags"][1] == "fixed" for v in values)

    def test_generate_is_reproducible(self, engine, user_profile):
        first = engine.generate(user_profile).dataset.values()
        second = engine.generate(user_profile).dataset.values()

        assert first == second

    def test_generate_without_seed_records_seed(self, engine):
        profile = Profile(name="x", count=3, template={"$number": [1, 1000000]})
        result = engine.generate(profile)

        assert isinstance(result.dataset.seed, int)

        replay = engine.generate(profile.model_copy(update={"seed": result.dataset.seed}))
        assert replay.dataset.values() == result.dataset.values()

    def test_count_override(self, engine, user_profile):
        result = engine.generate(user_profile, count=2)
        assert result.total_records == 2

    def test_literal_template(self, engine):
        profile = Profile(name="literal", count=3, template="hello")
        assert engine.generate(profile).dataset.values() == ["hello"] * 3

    def test_stream(self, engine, user_profile):
        values = list(engine.stream(user_profile, count=4))

        assert len(values) == 4
        assert [v["id"] for v in values] == [1, 2, 3, 1]

    def test_summary(self, engine, user_profile):
        summary = engine.generate(user_profile).summary()

        assert summary["profile"] == "users"
        assert summary["seed"] == 42
        assert summary["total_records"] == 5
        assert summary["duration_seconds"] >= 0

    def test_sample(self, engine):
        assert engine.sample("number", 1, 1, count=3) == [1, 1, 1]
        assert engine.sample("sequence", ["a", "b"], count=3) == ["a", "b", "a"]
        assert engine.sample("number", min_value=2, max_value=2) == [2]

    def test_sample_is_seeded(self, engine):
        first = engine.sample("float", 0, 100, count=10, seed=7)
        second = engine.sample("float", 0, 100, count=10, seed=7)

        assert first == second

    def test_sample_with_datasets(self, engine):
        values = engine.sample("country", count=3, datasets=Datasets(countries=["Atlantis"]))
        assert values == ["Atlantis"] * 3

    def test_sample_unknown(self, engine):
        with pytest.raises(ValueError, match="Unknown generator"):
            engine.sample("nope")

    def test_list_generators(self, engine):
        names = engine.list_generators()

        assert "number" in names
        assert "wave" in names
        assert "first_name" in names


class TestExport:
    """Tests for FixtureEngine.export_result."""

    def test_export_json(self, engine, user_profile):
        result = engine.generate(user_profile)

        with tempfile.TemporaryDirectory() as tmpdir:
            files = engine.export_result(result, tmpdir)

            assert len(files) == 2
            data = json.loads(files[0].read_text())
            summary = json.loads(files[1].read_text())

        assert data["metadata"]["seed"] == 42
        assert data["records"] == result.dataset.values()
        assert summary["total_records"] == 5

    def test_export_json_without_metadata(self, engine, user_profile):
        user_profile.output = OutputConfig(include_metadata=False)
        result = engine.generate(user_profile)

        with tempfile.TemporaryDirectory() as tmpdir:
            files = engine.export_result(result, tmpdir)

            assert len(files) == 1
            data = json.loads(files[0].read_text())

        assert data == result.dataset.values()

    def test_export_jsonl(self, engine, user_profile):
        result = engine.generate(user_profile)

        with tempfile.TemporaryDirectory() as tmpdir:
            files = engine.export_result(result, tmpdir, format="jsonl")

            assert files[0].suffix == ".jsonl"
            lines = files[0].read_text().splitlines()

        assert len(lines) == 5
        assert json.loads(lines[0]) == result.dataset.values()[0]

    def test_export_csv(self, engine, user_profile):
        user_profile.template["address"] = {"city": "Paris"}
        result = engine.generate(user_profile)

        with tempfile.TemporaryDirectory() as tmpdir:
            files = engine.export_result(result, tmpdir, format=OutputFormat.CSV)

            with open(files[0], newline="") as f:
                rows = list(csv.DictReader(f))

        assert len(rows) == 5
        assert rows[0]["name"] == "Ada Lovelace"
        assert rows[0]["address.city"] == "Paris"

    def test_export_csv_scalars(self, engine):
        profile = Profile(name="dates", count=2, template={"$date": ["2020-01-01", "2020-01-01"]})
        result = engine.generate(profile)

        with tempfile.TemporaryDirectory() as tmpdir:
            files = engine.export_result(result, tmpdir, format="csv")

            with open(files[0], newline="") as f:
                rows = list(csv.DictReader(f))

        assert rows[0]["value"] == "2020-01-01T00:00:00+00:00"

    def test_export_uses_profile_directory(self, engine, user_profile):
        with tempfile.TemporaryDirectory() as tmpdir:
            user_profile.output = OutputConfig(directory=str(Path(tmpdir) / "out"))
            files = engine.export_result(engine.generate(user_profile))

            assert files[0].parent == Path(tmpdir) / "out"
            assert files[0].name.startswith("users_")


class TestValidationEngine:
    """Tests for ValidationEngine."""

    def test_valid_profile(self, user_profile):
        result = ValidationEngine().validate_profile(user_profile)

        assert result.valid
        assert result.issues == []

    def test_missing_template(self):
        result = ValidationEngine().validate_profile(Profile(name="empty"))

        assert result.valid
        assert result.warning_count == 1

    def test_unknown_generator(self):
        profile = Profile(name="bad", template={"a": {"$nope": None}})
        result = ValidationEngine().validate_profile(profile)

        assert not result.valid
        assert "unknown generator 'nope'" in result.issues[0].message

    def test_reversed_range(self):
        profile = Profile(name="range", template={"a": {"$number": [10, 1]}})
        result = ValidationEngine().validate_profile(profile)

        assert result.valid
        assert result.warning_count == 1
        assert result.issues[0].path == "template.a.$number"

    def test_reversed_range_keywords(self):
        profile = Profile(name="range", template={"$float": {"min_value": 5, "max_value": 1}})
        result = ValidationEngine().validate_profile(profile)

        assert result.warning_count == 1

    def test_date_checks(self):
        profile = Profile(
            name="dates",
            template={
                "reversed": {"$date": ["2021-01-01", "2020-01-01"]},
                "broken": {"$date": ["not a date", "2020-01-01"]},
            },
        )
        result = ValidationEngine().validate_profile(profile)

        assert result.valid
        assert result.warning_count == 2

    def test_empty_sources(self):
        profile = Profile(
            name="empty",
            template={"a": {"$item": []}, "b": {"$sequence": []}},
        )
        result = ValidationEngine().validate_profile(profile)

        assert result.warning_count == 2

    def test_nested_empty_item_source(self):
        profile = Profile(name="empty", template={"x": {"$item": [[]]}})
        result = ValidationEngine().validate_profile(profile)

        assert result.warning_count == 1
        assert result.issues[0].path == "template.x.$item"

    def test_array_length(self):
        engine = ValidationEngine()

        negative = engine.validate_profile(Profile(name="n", template={"$array": [-1]}))
        assert negative.valid
        assert negative.warning_count == 1

        fractional = engine.validate_profile(Profile(name="f", template={"$array": [1.5]}))
        assert not fractional.valid

    def test_nested_calls_are_checked(self):
        profile = Profile(
            name="nested",
            template={"$array": [2, {"$number": [9, 3]}]},
        )
        result = ValidationEngine().validate_profile(profile)

        assert result.warning_count == 1
        assert result.issues[0].path == "template.$array[1].$number"

    def test_constant_is_not_checked(self):
        profile = Profile(name="c", template={"$constant": {"$number": [9, 3]}})
        assert ValidationEngine().validate_profile(profile).issues == []

    def test_validate_dataset(self):
        schema = {
            "type": "object",
            "properties": {"age": {"type": "integer", "minimum": 0}},
            "required": ["age"],
        }
        dataset = GeneratedDataset(
            profile_name="test",
            records=[
                GeneratedRecord(data={"age": 5}, sequence_number=0),
                GeneratedRecord(data={"age": -1}, sequence_number=1),
            ],
        )
        result = ValidationEngine().validate_dataset(dataset, schema)

        assert not result.valid
        assert result.error_count == 1
        assert result.issues[0].path == "records[1].age"

    def test_validate_empty_dataset(self):
        result = ValidationEngine().validate_dataset(GeneratedDataset(profile_name="x"))

        assert result.valid
        assert result.warning_count == 1

    def test_generated_records_match_schema(self, engine, user_profile):
        schema = {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string"},
                "age": {"type": "integer", "minimum": 18, "maximum": 65},
            },
            "required": ["id", "name", "age"],
        }
        dataset = engine.generate(user_profile).dataset

        assert ValidationEngine().validate_dataset(dataset, schema).valid

    def test_dates_validate_as_exported_strings(self, engine):
        profile = Profile(
            name="members",
            count=3,
            seed=1,
            template={"joined": {"$date": ["2020-01-01", "2020-12-31"]}},
        )
        schema = {
            "type": "object",
            "properties": {"joined": {"type": "string", "format": "date-time"}},
            "required": ["joined"],
        }
        dataset = engine.generate(profile).dataset

        result = ValidationEngine().validate_dataset(dataset, schema)

        assert result.valid
        assert result.issues == []

    def test_merge(self):
        first = ValidationResult(valid=True, validated_count=1)
        second = ValidationResult(valid=True, validated_count=2)
        second.add_issue(ValidationSeverity.ERROR, "boom")

        merged = first.merge(second)

        assert not merged.valid
        assert merged.validated_count == 3
        assert merged.to_dict()["error_count"] == 1


class TestLogging:
    """Tests for the engine's log events."""

    @pytest.fixture(autouse=True)
    def default_logging(self):
        structlog.reset_defaults()
        yield
        structlog.reset_defaults()

    def test_library_events_are_debug(self, engine, user_profile):
        with tempfile.TemporaryDirectory() as tmpdir:
            with capture_logs() as logs:
                engine.export_result(engine.generate(user_profile), tmpdir)

        events = {entry["event"]: entry["log_level"] for entry in logs}

        assert events["dataset_generated"] == "debug"
        assert events["dataset_exported"] == "debug"
