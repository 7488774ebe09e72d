"""Built-in tool registry for the filesystem MCP server."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Coroutine, Iterable

from .context import ToolContext as ToolContext
from .errors import SecurityError

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Coroutine[Any, Any, dict[str, Any]]]

_JSON_TYPES: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


def _type_error(name: str, key: str, value: Any, expected: str) -> str | None:
    py_type = _JSON_TYPES.get(expected)
    if py_type is None:
        return None
    # bool is an int subclass but never a valid JSON number
    if isinstance(value, bool) and expected != "boolean":
        return f"Invalid argument for {name}: {key} must be {expected}, got boolean"
    if not isinstance(value, py_type):
        return f"Invalid argument for {name}: {key} must be {expected}, got {type(value).__name__}"
    return None


class ToolRegistry:
    """Registry of tool handlers and their JSON-schema definitions."""

    def __init__(self) -> None:
        self._handlers: dict[str, ToolHandler] = {}
        self._definitions: dict[str, dict[str, Any]] = {}

    def register(self, name: str, handler: ToolHandler, definition: dict[str, Any]) -> None:
        self._handlers[name] = handler
        self._definitions[name] = definition

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    def list_tools(self) -> list[str]:
        return list(self._handlers.keys())

    def get_definitions(self) -> list[dict[str, Any]]:
        return list(self._definitions.values())

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Dispatch a tool call.

        Rejected paths and commands come back as error dicts carrying the
        error kind and its context; they are never retried.
        """
        handler = self._handlers.get(name)
        if not handler:
            raise ValueError(f"Unknown tool: {name}")

        schema = self._definitions[name].get("parameters", {})
        properties = schema.get("properties", {})
        missing = [field for field in schema.get("required", []) if arguments.get(field) is None]
        if missing:
            return {"error": f"Missing required argument(s) for {name}: {', '.join(missing)}"}

        # null for an optional argument means "use the default"
        kwargs = {key: value for key, value in arguments.items() if key in properties and value is not None}
        for key, value in kwargs.items():
            error = _type_error(name, key, value, properties[key].get("type", ""))
            if error:
                return {"error": error, "error_type": "invalid_argument"}

        logger.info("Tool call: %s", name)
        try:
            return await handler(**kwargs)
        except SecurityError as e:
            logger.warning("Tool %s rejected (%s): %s", name, e.kind, e)
            return e.to_dict()


def register_default_tools(
    registry: ToolRegistry, ctx: ToolContext, disabled: Iterable[str] = ()
) -> None:
    """Register all built-in tools bound to ``ctx``."""
    from . import directories, files, search, shell, system, transfer

    tools: list[tuple[dict[str, Any], ToolHandler]] = [
        (system.DEFINITION, system.handle),
        (directories.LIST_DIRECTORY_DEFINITION, directories.handle_list_directory),
        (files.READ_FILE_DEFINITION, files.handle_read_file),
        (files.WRITE_FILE_DEFINITION, files.handle_write_file),
        (directories.CREATE_DIRECTORY_DEFINITION, directories.handle_create_directory),
        (files.DELETE_FILE_DEFINITION, files.handle_delete_file),
        (directories.DELETE_DIRECTORY_DEFINITION, directories.handle_delete_directory),
        (transfer.MOVE_DEFINITION, transfer.handle_move),
        (transfer.COPY_DEFINITION, transfer.handle_copy),
        (files.FILE_INFO_DEFINITION, files.handle_file_info),
        (search.DEFINITION, search.handle),
        (shell.DEFINITION, shell.handle),
        (directories.CURRENT_DIRECTORY_DEFINITION, directories.handle_current_directory),
    ]

    skipped = set(disabled)
    for definition, handler in tools:
        name = definition["name"]
        if name in skipped:
            logger.info("Tool disabled by config: %s", name)
            continue
        registry.register(name, functools.partial(handler, ctx), definition)
