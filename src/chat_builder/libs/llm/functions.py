"""Function definitions the model may ask to call, and their registry.

A definition can be described in three shapes, each with its own
constructor on :class:`FunctionDefinition`:

- structured: a ``FunctionDefinition`` or a mapping with ``name``,
  ``description`` and ``parameters`` (validated);
- callable reference: any object with a ``__name__`` (trusted as-is);
- bare name: a plain string (trusted as-is).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from chat_builder.core.errors import InvalidParameterError
from chat_builder.core.validation import validate_function_name


JSONSchema = Dict[str, Any]


@dataclass(frozen=True)
class FunctionDefinition:
    """Callable descriptor sent to the model.

    Attributes:
        name: Function name the model refers to.
        description: Optional human-readable summary shown to the model.
        parameters: Optional JSON Schema describing accepted arguments.
    """

    name: str
    description: Optional[str] = None
    parameters: Optional[JSONSchema] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FunctionDefinition":
        """Build a structured definition from an OpenAI-style mapping."""
        if "name" not in data or not isinstance(data["name"], str):
            raise InvalidParameterError(
                "<functionDefinition>.name", "must be provided as a string."
            )
        return cls(
            name=data["name"],
            description=data.get("description"),
            parameters=data.get("parameters"),
        )

    @classmethod
    def from_callable(
        cls,
        func: Callable[..., Any],
        description: Optional[str] = None,
        parameters: Optional[JSONSchema] = None,
    ) -> "FunctionDefinition":
        """Reference a Python callable by its ``__name__``."""
        return cls(name=func.__name__, description=description, parameters=parameters)

    @classmethod
    def from_name(
        cls,
        name: str,
        description: Optional[str] = None,
        parameters: Optional[JSONSchema] = None,
    ) -> "FunctionDefinition":
        return cls(name=name, description=description, parameters=parameters)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation, omitting unset optional fields."""
        payload: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        if self.parameters is not None:
            payload["parameters"] = self.parameters
        return payload


def normalize_function(
    func: Any,
    description: Optional[str] = None,
    parameters: Optional[JSONSchema] = None,
) -> FunctionDefinition:
    """Turn any accepted shape into a :class:`FunctionDefinition`.

    Only structured shapes go through name validation; callable references
    and bare names are taken as given.

    ``description`` and ``parameters`` only apply to those two shapes; a
    structured definition already carries its own.

    Raises:
        InvalidParameterError: If a structured definition has an invalid name
            or the shape is not recognised, or if ``description``/``parameters``
            accompany a structured definition.
    """
    structured = isinstance(func, (FunctionDefinition, Mapping))
    if structured and (description is not None or parameters is not None):
        raise InvalidParameterError(
            "f",
            "a structured function definition already carries its description "
            "and parameters; pass them inside it.",
        )
    if isinstance(func, FunctionDefinition):
        validate_function_name(func)
        return func
    if isinstance(func, Mapping):
        definition = FunctionDefinition.from_mapping(func)
        validate_function_name(definition)
        return definition
    if isinstance(func, str):
        return FunctionDefinition.from_name(func, description, parameters)
    if callable(func) and hasattr(func, "__name__"):
        return FunctionDefinition.from_callable(func, description, parameters)
    raise InvalidParameterError(
        "f",
        "must be a function definition, a named callable, or a function name.",
    )


@dataclass
class FunctionRegistry:
    """Ordered collection of function definitions for one request."""

    _definitions: List[FunctionDefinition] = field(default_factory=list)

    def add(self, definition: FunctionDefinition) -> None:
        """Append a definition.

        Raises:
            InvalidParameterError: If a function with the same name is already registered.
        """
        if definition.name in self:
            raise InvalidParameterError(
                "functionName",
                f'function "{definition.name}" has already been described.',
            )
        self._definitions.append(definition)

    def get(self, name: str) -> Optional[FunctionDefinition]:
        """Return the first definition registered under ``name``."""
        return next((d for d in self._definitions if d.name == name), None)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [definition.to_dict() for definition in self._definitions]

    def __contains__(self, name: object) -> bool:
        return any(d.name == name for d in self._definitions)

    def __iter__(self) -> Iterator[FunctionDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)
