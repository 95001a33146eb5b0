"""Generator Registry for looking up generator factories by name."""

from dataclasses import dataclass
from typing import Any, Iterator

from lazy_random.generators.base import Thunk
from lazy_random.generators.random_gen import Random


@dataclass(frozen=True)
class GeneratorSpec:
    """Describes one named generator factory on Random."""

    name: str
    description: str
    min_args: int = 0
    max_args: int | None = None
    signature: str = ""

    def accepts(self, arg_count: int) -> bool:
        """Check whether a call with ``arg_count`` arguments fits the factory."""
        if arg_count < self.min_args:
            return False
        return self.max_args is None or arg_count <= self.max_args


DEFAULT_SPECS = [
    GeneratorSpec("number", "Integer in [min, max], both inclusive", 2, 2, "min_value, max_value"),
    GeneratorSpec("float", "Real in [min, max) truncated to precision digits", 2, 3, "min_value, max_value, precision=2"),
    GeneratorSpec("item", "One value chosen uniformly from the arguments", 0, None, "*values"),
    GeneratorSpec("sequence", "Next value of a list, round-robin", 1, 1, "data"),
    GeneratorSpec("constant", "A value returned verbatim, never resolved further", 1, 1, "value"),
    GeneratorSpec("array", "List of resolved elements", 1, 2, "length, items=None"),
    GeneratorSpec("object", "Dict with every value resolved", 1, 1, "fields"),
    GeneratorSpec("join", "Resolved parts concatenated into a string", 0, None, "*parts"),
    GeneratorSpec("transform", "Resolved source passed through a callback", 2, 2, "source, callback"),
    GeneratorSpec("date", "UTC datetime between two dates, both inclusive", 2, 2, "min_value, max_value"),
    GeneratorSpec("country", "Country from the datasets table", 0, 0),
    GeneratorSpec("first_name", "First name from the datasets table", 0, 0),
    GeneratorSpec("last_name", "Last name from the datasets table", 0, 0),
    GeneratorSpec("mountains", "Bounded random walk, one height per call", 0, 2, "max_height=50, step_change=10"),
    GeneratorSpec("wave", "Sine series, one point per call", 2, 5, "count, size, repeat=1, shift=0, noise=0"),
]


class GeneratorRegistry:
    """Registry of named generators.

    Maps generator names to their specs and creates generators by name on a
    given Random instance. Used by the profile template compiler and the CLI.
    """

    def __init__(self):
        self._specs: dict[str, GeneratorSpec] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in generators."""
        for spec in DEFAULT_SPECS:
            self.register(spec)

    def register(self, spec: GeneratorSpec) -> None:
        """Register a generator spec.

        The name must match a factory method on Random.

        Args:
            spec: The generator spec to register
        """
        if not callable(getattr(Random, spec.name, None)):
            raise ValueError(f"Random has no generator named '{spec.name}'")
        self._specs[spec.name] = spec

    def get(self, name: str) -> GeneratorSpec | None:
        """Get a generator spec by name.

        Args:
            name: The generator name

        Returns:
            The spec or None if not found
        """
        return self._specs.get(name)

    def create(self, rand: Random, name: str, *args: Any, **kwargs: Any) -> Thunk | None:
        """Create a generator by name.

        Args:
            rand: The Random instance to build on
            name: The generator name
            *args: Positional factory arguments
            **kwargs: Keyword factory arguments

        Returns:
            A Thunk or None if the name is not registered
        """
        if name not in self._specs:
            return None
        return getattr(rand, name)(*args, **kwargs)

    def list_names(self) -> list[str]:
        """List all registered generator names."""
        return list(self._specs.keys())

    def unregister(self, name: str) -> bool:
        """Remove a generator from the registry.

        Args:
            name: The generator name to remove

        Returns:
            True if removed, False if not found
        """
        if name in self._specs:
            del self._specs[name]
            return True
        return False

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[GeneratorSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


_global_registry: GeneratorRegistry | None = None


def get_global_generator_registry() -> GeneratorRegistry:
    """Get the global generator registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
    return _global_registry
