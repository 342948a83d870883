"""
Tool dispatcher: routes a (name, arguments) call to its handler and turns
the outcome into a ToolResponse. Nothing raised by a tool escapes call_tool().
"""

from typing import Any, Dict, List, Mapping, Optional

import pydantic

from .client import QuartzyClient
from .errors import QuartzyError, UnknownToolError, ValidationError
from .logging_config import get_logger
from .schemas import ToolArguments, ToolDescriptor, ToolResponse
from .tools import TOOL_REGISTRY, ToolSpec

logger = get_logger("dispatcher")

_EXPECTED_TYPES = {
    "string_type": "a string",
    "int_type": "a number",
    "float_type": "a number",
    "bool_type": "a boolean",
    "list_type": "an array",
    "dict_type": "an object",
    "model_type": "an object",
    "model_attributes_type": "an object",
}


def _parameter_name(loc: tuple) -> str:
    name = ""
    for part in loc:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name = f"{name}.{part}" if name else str(part)
    return name


def _describe_error(error: Dict[str, Any]) -> str:
    name = _parameter_name(error.get("loc", ()))
    kind = error.get("type", "")

    if kind == "value_error":
        reason = str(error.get("ctx", {}).get("error", error.get("msg", "")))
        return f"Invalid parameter '{name}': {reason}" if name else reason
    if kind == "missing":
        return f"Required parameter '{name}' is missing"
    if kind == "string_too_short":
        return f"Required parameter '{name}' is missing or empty"
    if kind == "extra_forbidden":
        return f"Unknown parameter '{name}'"
    if kind in _EXPECTED_TYPES:
        return f"Invalid parameter '{name}': must be {_EXPECTED_TYPES[kind]}"
    return f"Invalid parameter '{name}': {error.get('msg', 'invalid value')}"


def parse_arguments(model: type, arguments: Optional[Mapping[str, Any]]) -> ToolArguments:
    """Validate raw tool arguments, raising ValidationError naming each bad parameter."""
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError(["Tool arguments must be an object"])

    try:
        return model.model_validate(dict(arguments))
    except pydantic.ValidationError as e:
        errors = e.errors(include_url=False)
        problems = [_describe_error(error) for error in errors]
        first = _parameter_name(errors[0].get("loc", ())) if errors else ""
        raise ValidationError(problems, parameter=first or None) from e


class ToolDispatcher:
    """Maps tool names to handlers and wraps every outcome in a ToolResponse."""

    def __init__(self, client: QuartzyClient, registry: Optional[Mapping[str, ToolSpec]] = None):
        self.client = client
        self.registry = TOOL_REGISTRY if registry is None else registry

    def list_tools(self) -> List[ToolDescriptor]:
        return [spec.descriptor for spec in self.registry.values()]

    def get_tool(self, name: str) -> ToolSpec:
        try:
            return self.registry[name]
        except KeyError:
            raise UnknownToolError(name) from None

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        try:
            spec = self.get_tool(name)
            args = parse_arguments(spec.arguments, arguments)
            if spec.catalog_aware:
                response = await spec.handler(self.client, args, self.list_tools())
            else:
                response = await spec.handler(self.client, args)
        except QuartzyError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResponse.failure(str(e))
        except Exception as e:  # unexpected failures still become an error envelope
            logger.exception("Unexpected error in tool %s", name)
            return ToolResponse.failure(str(e) or e.__class__.__name__)

        logger.info("Tool %s succeeded", name)
        return response
