"""Random - factories for every generator.

Each method captures its configuration and returns a Thunk; calling the
Thunk produces a value. Combinators resolve their generator inputs on every
call, so nested generators produce fresh values each time:

    rand = Random(seed=7)
    person = rand.object({
        "name": rand.join(rand.first_name(), " ", rand.last_name()),
        "age": rand.number(18, 60),
    })
    person()  # {'name': 'Gary Ortiz', 'age': 23}

Generators never raise for bad input. Empty sources produce None, reversed
ranges produce meaningless numbers, and unparseable dates produce None.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable
import math
import random

from lazy_random.datasets.base import Datasets
from lazy_random.generators import procedural
from lazy_random.generators.base import ConstantThunk, Thunk, unwrap
from lazy_random.utils.helpers import flatten_args, from_timestamp, parse_date


class Random:
    """Generator factory bound to its own random source and lookup tables."""

    def __init__(self, seed: int | None = None, datasets: Datasets | None = None):
        """Initialize the factory.

        Args:
            seed: Optional random seed for deterministic generation
            datasets: Lookup tables for country/first_name/last_name
        """
        self._seed = seed
        self._rng = random.Random(seed)
        self.datasets = datasets or Datasets()

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value: int | None) -> None:
        self._seed = value
        self._rng = random.Random(value)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def number(self, min_value: int, max_value: int) -> Thunk:
        """Returns a random integer between the two values, both inclusive."""
        upper = max_value + 1

        return Thunk(
            lambda: math.floor(self._rng.random() * (upper - min_value) + min_value),
            name="number",
        )

    def float(self, min_value: float, max_value: float, precision: int = 2) -> Thunk:
        """Returns a random real in ``[min_value, max_value)``.

        The result is truncated, not rounded, to ``precision`` decimal digits.
        """
        scale = 10 ** precision

        def draw() -> float:
            result = self._rng.random() * (max_value - min_value) + min_value
            return math.floor(result * scale) / scale

        return Thunk(draw, name="float")

    def item(self, *values: Any) -> Thunk:
        """Returns any random item from the values.

        Accepts either one list (``item([a, b])``) or the values themselves
        (``item(a, b)``).
        """
        data = flatten_args(values)
        return Thunk(lambda: self._pick(data), name="item")

    def sequence(self, data: Any) -> Thunk:
        """Returns the next item of ``data`` each time it's called.

        Not random, but it's often useful to have a generator hand things out
        in order. ``data`` may be a generator; it is resolved once, here.
        """
        data = unwrap(data)
        index = 0

        def next_item() -> Any:
            nonlocal index
            i = index
            index += 1
            if not data:
                return None
            return data[i % len(data)]

        return Thunk(next_item, name="sequence")

    def constant(self, value: Any) -> ConstantThunk:
        """Makes a generator whose result is never resolved any further.

        Use it to hand out a value that would otherwise be mistaken for a
        generator, such as another Thunk.
        """
        return ConstantThunk(value)

    def array(self, length: int, items: Any = None) -> Thunk:
        """Generates a list with ``length`` elements.

        Args:
            length: How big the list should be
            items: Either a list/tuple of per-index values or generators, or a
                single value or generator used for every slot. Slots without
                a source hold their own index.
        """
        def build() -> list[Any]:
            return [unwrap(_slot(items, i)) for i in range(length)]

        return Thunk(build, name="array")

    def object(self, fields: Mapping[str, Any]) -> Thunk:
        """Generates a dict with the same keys as ``fields``.

        Each value may be a literal or a generator; generators are resolved
        independently on every call. Keys keep the order of ``fields``.
        """
        def build() -> dict[str, Any]:
            return {key: unwrap(value) for key, value in fields.items()}

        return Thunk(build, name="object")

    def join(self, *parts: Any) -> Thunk:
        """Joins the resolved parts into one string with no separator.

        Accepts one list or the parts themselves, like item(). None renders
        as an empty string.
        """
        data = flatten_args(parts)

        def build() -> str:
            return "".join(_to_text(unwrap(part)) for part in data)

        return Thunk(build, name="join")

    def transform(self, source: Any, callback: Callable[[Any], Any]) -> Thunk:
        """Passes the resolved source through ``callback``.

        Calling the Thunk directly returns the callback result as-is. When the
        transform sits inside object, array or take(), the result goes through
        unwrap() like any other value, so a returned Thunk is resolved there.

        Example:

            rand.transform(rand.number(1, 10), str)
        """
        return Thunk(lambda: callback(unwrap(source)), name="transform")

    def date(self, min_value: Any, max_value: Any) -> Thunk:
        """Returns a random UTC datetime between the two dates, both inclusive.

        Bounds may be date/datetime objects or date strings in any format
        parse_date() reads (ISO 8601, ``Jan 1 2016``, ``2016-01-01 CST``). If
        either bound can't be parsed the generator yields None.
        """
        def draw() -> Any:
            low = parse_date(min_value)
            high = parse_date(max_value)
            if math.isnan(low) or math.isnan(high):
                return None
            return from_timestamp(self.number(low, high)())

        return Thunk(draw, name="date")

    def country(self) -> Thunk:
        """Returns a random country from ``datasets.countries``."""
        return Thunk(lambda: self._pick(self.datasets.countries), name="country")

    def first_name(self) -> Thunk:
        """Returns a random first name from ``datasets.first_names``."""
        return Thunk(lambda: self._pick(self.datasets.first_names), name="first_name")

    def last_name(self) -> Thunk:
        """Returns a random last name from ``datasets.last_names``."""
        return Thunk(lambda: self._pick(self.datasets.last_names), name="last_name")

    def mountains(self, max_height: Any = 50, step_change: Any = 10) -> Thunk:
        """Generate a random series that looks like a mountain range."""
        return procedural.mountains(self, max_height, step_change)

    def wave(
        self,
        count: Any,
        size: Any,
        repeat: Any = 1,
        shift: Any = 0,
        noise: Any = 0,
    ) -> Thunk:
        """Generate a series of points along a sine wave."""
        return procedural.wave(self, count, size, repeat, shift, noise)

    def _pick(self, data: Any) -> Any:
        if not data:
            return None
        return data[self.number(0, len(data) - 1)()]


def _slot(items: Any, index: int) -> Any:
    if items is None:
        return index
    if isinstance(items, (list, tuple)):
        return items[index] if index < len(items) else index
    return items


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
