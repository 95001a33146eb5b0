"""Lookup tables used by the name and place generators.

A Datasets instance is injected into Random at construction time. The
tables are read every time a lookup generator is invoked, so assigning a
new list (or a whole new Datasets) takes effect on the next value.
"""

from pydantic import BaseModel, Field

DEFAULT_COUNTRIES = [
    "Afghanistan", "Bulgaria", "Canada", "Dominican Republic", "Egypt",
    "France", "Germany", "Haiti", "Israel", "Japan", "Kuwait", "Libya",
    "Mexico", "North Korea", "Oman", "Philippines", "Qatar", "Russia",
    "South Korea", "Turkey", "United States", "Venezuela", "Yemen",
    "Zimbabwe",
]

DEFAULT_FIRST_NAMES = [
    "Adam", "Bill", "Carlos", "Daniel", "Edward", "Frank", "Gary", "Harley",
    "James", "Luke", "Mark", "Nathan", "Oscar", "Patrick", "Ricardo", "Sam",
    "Thomas", "Victor", "Wayne", "Xavier", "Zack",
]

DEFAULT_LAST_NAMES = [
    "Adams", "Bailey", "Dallas", "Edwards", "Ford", "Gerald", "Holmes",
    "Jones", "Kuntz", "Lyons", "Miller", "Nellis", "Ortiz", "Paul",
    "Quevedo", "Smith", "White",
]

TABLE_FIELDS = {
    "country": "countries",
    "first_name": "first_names",
    "last_name": "last_names",
}


class Datasets(BaseModel):
    """The lookup tables behind country(), first_name() and last_name()."""

    model_config = {"validate_assignment": True}

    countries: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COUNTRIES),
        description="Values returned by country()"
    )
    first_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FIRST_NAMES),
        description="Values returned by first_name()"
    )
    last_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LAST_NAMES),
        description="Values returned by last_name()"
    )

    def table(self, name: str) -> list[str] | None:
        """Get a table by generator name (country, first_name, last_name)."""
        field_name = TABLE_FIELDS.get(name)
        if field_name is None:
            return None
        return getattr(self, field_name)

    def sizes(self) -> dict[str, int]:
        """Number of entries per table, keyed by generator name."""
        return {name: len(getattr(self, field)) for name, field in TABLE_FIELDS.items()}
