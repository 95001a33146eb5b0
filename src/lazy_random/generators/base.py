"""Base classes for generators - the deferred evaluation layer.

Every generator factory returns a Thunk: a zero-argument producer that
yields a value each time it is called. A produced value may itself be a
Thunk, so chains of arbitrary depth are legal and are flattened by unwrap().

Generator values form a small tagged union:
- Thunk: deferred producer, resolved recursively
- ConstantThunk: producer whose result is returned verbatim after one call
- anything else: a literal, returned unchanged

Dispatch is on the Thunk type, never on "is this callable", so ordinary
Python functions travel through the algebra as plain data.
"""

from itertools import islice
from typing import Any, Callable, Iterator, TypeVar, Union

T = TypeVar("T")


class Thunk:
    """A zero-argument deferred value producer."""

    constant = False

    __slots__ = ("_producer", "name")

    def __init__(self, producer: Callable[[], Any], name: str = "thunk"):
        self._producer = producer
        self.name = name

    def __call__(self) -> Any:
        return self._producer()

    def stream(self, count: int | None = None) -> Iterator[Any]:
        """Yield resolved values, one invocation at a time.

        Args:
            count: Optional limit on values (None for infinite)

        Yields:
            The fully unwrapped result of each invocation
        """
        produced = 0
        while count is None or produced < count:
            yield unwrap(self)
            produced += 1

    def take(self, count: int) -> list[Any]:
        """Resolve this thunk ``count`` times and collect the results."""
        return list(islice(self.stream(), count))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ConstantThunk(Thunk):
    """A thunk that is opaque to further resolution.

    unwrap() invokes it exactly once and returns the result as-is, even when
    that result is itself a Thunk.
    """

    constant = True

    __slots__ = ("value",)

    def __init__(self, value: Any):
        super().__init__(lambda: value, name="constant")
        self.value = value


Value = Union[T, Thunk]


def unwrap(value: Any) -> Any:
    """Resolve a value down to a literal.

    Thunks are invoked until a non-thunk value is produced. A ConstantThunk
    stops resolution: it is invoked once and its result returned untouched.
    Literals are returned unchanged without any invocation.

    Args:
        value: A literal, a Thunk, or a ConstantThunk

    Returns:
        The resolved value
    """
    while isinstance(value, Thunk):
        if value.constant:
            return value()
        value = value()

    return value
