"""Dataset Loader for lookup tables stored in YAML or built with Faker."""

from pathlib import Path
from typing import Any

import structlog
import yaml
from faker import Faker

from lazy_random.datasets.base import Datasets, TABLE_FIELDS

logger = structlog.get_logger(__name__)


class DatasetLoader:
    """Loads lookup tables from YAML files or Faker locales."""

    def load_file(self, path: Path | str) -> Datasets:
        """Load lookup tables from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded Datasets instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dataset file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        datasets = self._parse_datasets(data)
        logger.debug("datasets_loaded", path=str(path), **datasets.sizes())
        return datasets

    def load_from_string(self, content: str) -> Datasets:
        """Load lookup tables from a YAML string."""
        data = yaml.safe_load(content)
        return self._parse_datasets(data)

    def from_mapping(self, data: dict[str, Any] | None) -> Datasets:
        """Build Datasets from an already parsed mapping."""
        return self._parse_datasets(data)

    def from_faker(
        self,
        locale: str = "en_US",
        size: int = 25,
        seed: int | None = None,
    ) -> Datasets:
        """Build lookup tables from Faker providers.

        Args:
            locale: Faker locale, e.g. ``de_DE``
            size: Number of draws per table (duplicates are dropped)
            seed: Optional seed for reproducible tables

        Returns:
            Datasets with Faker-provided countries and names
        """
        fake = Faker(locale)
        if seed is not None:
            fake.seed_instance(seed)

        datasets = Datasets(
            countries=_unique(fake.country() for _ in range(size)),
            first_names=_unique(fake.first_name() for _ in range(size)),
            last_names=_unique(fake.last_name() for _ in range(size)),
        )
        logger.debug("datasets_built", locale=locale, **datasets.sizes())
        return datasets

    def save_file(self, datasets: Datasets, path: Path | str) -> None:
        """Save lookup tables to a YAML file.

        Args:
            datasets: The tables to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(
                self.to_dict(datasets),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    def to_dict(self, datasets: Datasets) -> dict[str, list[str]]:
        """Convert Datasets to a mapping keyed by generator name."""
        return {name: datasets.table(name) or [] for name in TABLE_FIELDS}

    def _parse_datasets(self, data: dict[str, Any] | None) -> Datasets:
        """Parse tables keyed by generator name or by field name."""
        if data is None:
            return Datasets()
        if not isinstance(data, dict):
            raise ValueError("Datasets must be a YAML mapping")

        values: dict[str, list[str]] = {}
        for name, field_name in TABLE_FIELDS.items():
            table = data.get(name, data.get(field_name))
            if table is None:
                continue
            if not isinstance(table, list):
                raise ValueError(f"Dataset '{name}' must be a list")
            values[field_name] = [str(v) for v in table]

        return Datasets(**values)


def _unique(values: Any) -> list[str]:
    return list(dict.fromkeys(values))


def load_datasets(path: Path | str) -> Datasets:
    """Convenience function to load lookup tables from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded Datasets instance
    """
    loader = DatasetLoader()
    return loader.load_file(path)
