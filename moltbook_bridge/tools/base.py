"""Base tool interface and definitions."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from moltbook_bridge.errors import InvalidArgumentError


class ParameterType(str, Enum):
    """JSON Schema parameter types."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


class ToolParameter(BaseModel):
    """Definition of a tool parameter."""

    name: str
    type: ParameterType
    description: str
    required: bool = True
    default: Any | None = None
    min_length: int | None = None

    def to_schema(self) -> dict[str, Any]:
        prop: dict[str, Any] = {
            "type": self.type.value,
            "description": self.description,
        }
        if self.min_length is not None:
            prop["minLength"] = self.min_length
        if self.default is not None:
            prop["default"] = self.default
        return prop


class ToolDefinition(BaseModel):
    """Name, description and parameter schema of a tool."""

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)

    def to_json_schema(self) -> dict[str, Any]:
        """Parameters as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {param.name: param.to_schema() for param in self.parameters},
            "required": [param.name for param in self.parameters if param.required],
        }

    def to_openai_format(self) -> dict[str, Any]:
        """Convert to OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.to_json_schema(),
            },
        }


@dataclass
class ToolExecutionContext:
    """Context passed to tool during execution."""

    tool_call_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ToolResultEnvelope:
    """Uniform success result returned by every tool."""

    details: Any
    content: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_value(cls, value: Any) -> ToolResultEnvelope:
        text = json.dumps(value, indent=2, ensure_ascii=False)
        return cls(details=value, content=[{"type": "text", "text": text}])

    @property
    def text(self) -> str:
        return "\n".join(part["text"] for part in self.content if part.get("type") == "text")

    def to_dict(self) -> dict[str, Any]:
        return {"content": list(self.content), "details": self.details}


def _matches_type(value: Any, param_type: ParameterType) -> bool:
    if param_type == ParameterType.STRING:
        return isinstance(value, str)
    if param_type == ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if param_type == ParameterType.INTEGER:
        return isinstance(value, int)
    return isinstance(value, (int, float))


class BaseTool(ABC):
    """Abstract base class for all tools.

    ``execute`` validates arguments against ``parameters`` and only then
    delegates to ``run``, so no tool body sees arguments that break its schema.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description."""
        ...

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        ...

    @abstractmethod
    async def run(
        self,
        arguments: dict[str, Any],
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        """Run the tool with validated arguments."""
        ...

    async def execute(
        self,
        arguments: dict[str, Any] | None = None,
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        """Validate arguments and run the tool.

        Raises:
            InvalidArgumentError: if the arguments break the parameter schema.
        """
        arguments = {k: v for k, v in (arguments or {}).items() if v is not None}
        is_valid, error = self.validate_arguments(arguments)
        if not is_valid:
            raise InvalidArgumentError(error)
        return await self.run(arguments, context)

    def get_definition(self) -> ToolDefinition:
        """Get tool definition."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )

    def validate_arguments(self, arguments: dict[str, Any]) -> tuple[bool, str | None]:
        """Validate arguments against parameter definitions."""
        for param in self.parameters:
            if param.required and param.name not in arguments:
                return False, f"Missing required parameter: {param.name}"

            if param.name not in arguments:
                continue

            value = arguments[param.name]
            if not _matches_type(value, param.type):
                return False, f"Parameter {param.name} must be a {param.type.value}"

            if param.min_length is not None and len(value) < param.min_length:
                return False, (
                    f"Parameter {param.name} must be at least {param.min_length} characters"
                )

        return True, None
