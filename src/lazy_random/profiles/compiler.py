"""Template compiler - turns profile templates into generators.

Template nodes:
- ``{"$name": args}``: a generator call. ``args`` is a list of positional
  arguments, a mapping of keyword arguments, null for no arguments, or a
  single scalar. Generators taking exactly one argument (object, sequence,
  constant) receive ``args`` as that argument.
- ``{"$constant": value}``: ``value`` is passed through untouched.
- ``{"$transform": [source, "callback"]}``: the callback is named; see
  TRANSFORMS.
- any other mapping: an object whose values are compiled
- a list: an array whose elements are compiled
- anything else: a literal
"""

from typing import Any, Callable

from lazy_random.generators.base import Thunk
from lazy_random.generators.random_gen import Random
from lazy_random.generators.registry import GeneratorRegistry, get_global_generator_registry

CALL_PREFIX = "$"

# Generators whose list arguments hold one node per element
LIST_ARGS = {"array", "sequence", "item", "join"}


def _isoformat(value: Any) -> Any:
    return value.isoformat() if hasattr(value, "isoformat") else value


def _text(method: str) -> Callable[[Any], Any]:
    return lambda value: getattr(str(value), method)() if value is not None else None


TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "str": lambda value: "" if value is None else str(value),
    "int": int,
    "float": float,
    "round": round,
    "abs": abs,
    "upper": _text("upper"),
    "lower": _text("lower"),
    "title": _text("title"),
    "isoformat": _isoformat,
}


def is_call(node: Any) -> bool:
    """Check whether a template node is a ``{"$name": args}`` generator call."""
    return (
        isinstance(node, dict)
        and len(node) == 1
        and isinstance(next(iter(node)), str)
        and next(iter(node)).startswith(CALL_PREFIX)
    )


def call_parts(node: dict[str, Any]) -> tuple[str, Any]:
    """Split a generator call node into its name and raw arguments."""
    key, args = next(iter(node.items()))
    return key[len(CALL_PREFIX):], args


class TemplateCompiler:
    """Compiles template nodes into Thunks bound to one Random instance."""

    def __init__(
        self,
        rand: Random,
        registry: GeneratorRegistry | None = None,
        transforms: dict[str, Callable[[Any], Any]] | None = None,
    ):
        self.rand = rand
        self.registry = registry or get_global_generator_registry()
        self.transforms = {**TRANSFORMS, **(transforms or {})}

    def compile(self, node: Any, path: str = "template") -> Any:
        """Compile a template node.

        Args:
            node: The template node
            path: Location of the node, used in error messages

        Returns:
            A Thunk, or the node itself when it is a literal

        Raises:
            ValueError: If the node calls an unknown generator or transform,
                or passes the wrong number of arguments
        """
        if is_call(node):
            return self._compile_call(node, path)

        if isinstance(node, dict):
            fields = {
                key: self.compile(value, f"{path}.{key}")
                for key, value in node.items()
            }
            return self.rand.object(fields)

        if isinstance(node, list):
            items = self._compile_list(node, path)
            return self.rand.array(len(items), items)

        return node

    def _compile_call(self, node: dict[str, Any], path: str) -> Thunk:
        name, raw_args = call_parts(node)
        spec = self.registry.get(name)
        if spec is None:
            raise ValueError(f"{path}: unknown generator '{name}'")

        if name == "constant":
            return self.rand.constant(raw_args)

        args, kwargs = self.split_args(name, raw_args)
        call_path = f"{path}.${name}"

        if name == "transform":
            args, kwargs = self._resolve_callback(args, kwargs, call_path)

        if not spec.accepts(len(args) + len(kwargs)):
            raise ValueError(
                f"{path}: '{name}' expects {spec.signature or 'no arguments'}"
            )

        args = [self._compile_arg(name, arg, f"{call_path}[{i}]") for i, arg in enumerate(args)]
        kwargs = {
            key: self._compile_arg(name, value, f"{call_path}.{key}")
            for key, value in kwargs.items()
        }

        try:
            return self.registry.create(self.rand, name, *args, **kwargs)
        except TypeError as e:
            raise ValueError(f"{path}: bad arguments for '{name}': {e}") from e

    def split_args(self, name: str, raw_args: Any) -> tuple[list[Any], dict[str, Any]]:
        """Normalise raw call arguments into positional and keyword arguments."""
        spec = self.registry.get(name)

        if raw_args is None:
            return [], {}
        if spec is not None and spec.max_args == 1:
            return [raw_args], {}
        if isinstance(raw_args, list):
            return list(raw_args), {}
        if isinstance(raw_args, dict) and not is_call(raw_args):
            return [], dict(raw_args)
        return [raw_args], {}

    def _compile_arg(self, name: str, value: Any, path: str) -> Any:
        """Compile a call argument.

        Lists given to array, sequence, item and join keep their shape so that
        per-index items and sequence data stay as written; the field mapping
        of object keeps its keys. Any other argument is compiled as a node.
        """
        if name in LIST_ARGS and isinstance(value, list):
            return self._compile_list(value, path)
        if name == "object":
            if not isinstance(value, dict) or is_call(value):
                raise ValueError(f"{path}: object fields must be a mapping")
            return {
                key: self.compile(item, f"{path}.{key}")
                for key, item in value.items()
            }
        return self.compile(value, path)

    def _compile_list(self, values: list[Any], path: str) -> list[Any]:
        return [self.compile(value, f"{path}[{i}]") for i, value in enumerate(values)]

    def _resolve_callback(
        self,
        args: list[Any],
        kwargs: dict[str, Any],
        path: str,
    ) -> tuple[list[Any], dict[str, Any]]:
        if "callback" in kwargs:
            kwargs = {**kwargs, "callback": self._lookup_transform(kwargs["callback"], path)}
        elif len(args) == 2:
            args = [args[0], self._lookup_transform(args[1], path)]
        return args, kwargs

    def _lookup_transform(self, name: Any, path: str) -> Callable[[Any], Any]:
        callback = self.transforms.get(name) if isinstance(name, str) else None
        if callback is None:
            available = ", ".join(sorted(self.transforms))
            raise ValueError(f"{path}: unknown transform '{name}'. Available: {available}")
        return callback
