"""Profile Loader for loading profiles from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from lazy_random.datasets.base import Datasets
from lazy_random.datasets.loader import DatasetLoader
from lazy_random.profiles.base import (
    Profile,
    OutputConfig,
    OutputFormat,
)


class ProfileLoader:
    """Loads profiles from YAML files."""

    def __init__(self):
        self._dataset_loader = DatasetLoader()

    def load_file(self, path: Path | str) -> Profile:
        """Load a profile from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded Profile instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Profile file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return self._parse_profile(data, base_dir=path.parent)

    def load_from_string(self, content: str) -> Profile:
        """Load a profile from a YAML string.

        Args:
            content: YAML content as string

        Returns:
            Loaded Profile instance
        """
        data = yaml.safe_load(content)
        return self._parse_profile(data)

    def _parse_profile(self, data: Any, base_dir: Path | None = None) -> Profile:
        """Parse profile data from YAML structure."""
        if not isinstance(data, dict):
            raise ValueError("Profile must be a YAML mapping")
        if "name" not in data:
            raise ValueError("Profile must have a 'name' field")

        output_data = data.get("output", {})
        output_format_str = output_data.get("format", "json")
        try:
            output_format = OutputFormat(output_format_str)
        except ValueError:
            output_format = OutputFormat.JSON

        output = OutputConfig(
            format=output_format,
            directory=output_data.get("directory", "./output"),
            filename_pattern=output_data.get("filename_pattern", "{profile}_{timestamp}"),
            pretty_print=output_data.get("pretty_print", True),
            include_metadata=output_data.get("include_metadata", True),
        )

        return Profile(
            name=data["name"],
            description=data.get("description", ""),
            version=str(data.get("version", "1.0.0")),
            count=data.get("count", 10),
            seed=data.get("seed"),
            template=data.get("template"),
            datasets=self._parse_datasets(data.get("datasets"), base_dir),
            json_schema=data.get("schema"),
            output=output,
            tags=data.get("tags", []),
            metadata=data.get("metadata", {}),
        )

    def _parse_datasets(self, value: Any, base_dir: Path | None) -> Datasets | None:
        """Datasets are either inline tables or a path to a dataset file."""
        if value is None:
            return None
        if isinstance(value, str):
            path = Path(value)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            return self._dataset_loader.load_file(path)
        return self._dataset_loader.from_mapping(value)

    def save_file(self, profile: Profile, path: Path | str) -> None:
        """Save a profile to a YAML file.

        Args:
            profile: The profile to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._profile_to_dict(profile)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def _profile_to_dict(self, profile: Profile) -> dict[str, Any]:
        """Convert a Profile to a dictionary for YAML serialization."""
        data: dict[str, Any] = {
            "name": profile.name,
            "description": profile.description,
            "version": profile.version,
            "count": profile.count,
            "seed": profile.seed,
            "template": profile.template,
        }

        if profile.datasets is not None:
            data["datasets"] = self._dataset_loader.to_dict(profile.datasets)
        if profile.json_schema is not None:
            data["schema"] = profile.json_schema

        data.update({
            "output": {
                "format": profile.output.format.value,
                "directory": profile.output.directory,
                "filename_pattern": profile.output.filename_pattern,
                "pretty_print": profile.output.pretty_print,
                "include_metadata": profile.output.include_metadata,
            },
            "tags": profile.tags,
            "metadata": profile.metadata,
        })
        return data


def load_profile(path: Path | str) -> Profile:
    """Convenience function to load a profile from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded Profile instance
    """
    loader = ProfileLoader()
    return loader.load_file(path)
