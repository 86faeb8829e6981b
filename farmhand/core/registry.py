"""Schema-validated tool registry.

Every tool is a plain function paired with an input model and an output
schema. Inputs and outputs are validated on each call, so the model (and the
UI, through the API) only ever sees values the declared schema accepts.
"""

from dataclasses import dataclass
from typing import Any, Callable

import structlog
from langchain_core.tools import StructuredTool
from pydantic import BaseModel, TypeAdapter, ValidationError

logger = structlog.get_logger(__name__)


class UnknownToolError(KeyError):
    """No tool registered under the requested name."""
    pass


class ToolOutputError(RuntimeError):
    """A tool returned a value its output schema rejects."""
    pass


@dataclass(frozen=True)
class ToolDefinition:
    """A named tool the model may invoke.

    Attributes:
        name: Tool name exposed to the model.
        description: What the tool does; shown to the model.
        input_model: Pydantic model validating the call arguments.
        output_schema: TypeAdapter every return value must satisfy.
        implementation: Function taking the input fields as keyword arguments.
    """
    name: str
    description: str
    input_model: type[BaseModel]
    output_schema: TypeAdapter
    implementation: Callable[..., Any]


class ToolRegistry:
    """Holds tool definitions and runs them with validation on both sides."""

    def __init__(self, definitions: list[ToolDefinition] | None = None):
        self._tools: dict[str, ToolDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: ToolDefinition) -> None:
        if definition.name in self._tools:
            raise ValueError(f"Tool '{definition.name}' is already registered")
        self._tools[definition.name] = definition

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> Any:
        """Validate arguments, run the tool, validate and serialize its output.

        Args:
            name: Registered tool name.
            arguments: Raw keyword arguments for the tool.

        Returns:
            JSON-ready output (camelCase keys for record fields).

        Raises:
            UnknownToolError: If no tool has that name.
            pydantic.ValidationError: If the arguments violate the input model.
            ToolOutputError: If the tool output violates its schema.
        """
        definition = self.get(name)
        params = definition.input_model.model_validate(arguments or {})
        logger.debug("tool.invoke", tool=name, args=params.model_dump())

        raw = definition.implementation(**params.model_dump())
        try:
            validated = definition.output_schema.validate_python(raw)
        except ValidationError as e:
            logger.error("tool.bad_output", tool=name, errors=e.error_count())
            raise ToolOutputError(f"Tool '{name}' returned invalid output") from e
        return definition.output_schema.dump_python(validated, mode="json", by_alias=True)

    def as_langchain_tools(self) -> list[StructuredTool]:
        """Expose every registered tool as a LangChain StructuredTool."""
        return [self._to_structured_tool(d) for d in self._tools.values()]

    def _to_structured_tool(self, definition: ToolDefinition) -> StructuredTool:
        def run(**kwargs):
            return self.invoke(definition.name, kwargs)

        return StructuredTool.from_function(
            func=run,
            name=definition.name,
            description=definition.description,
            args_schema=definition.input_model,
            handle_validation_error=True,
        )
