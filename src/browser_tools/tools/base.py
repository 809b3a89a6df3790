"""
Tool plumbing shared by every browser tool.

A tool is an async function taking a page (or context) plus keyword
arguments. Decorating it with ``@tool`` registers it by name and makes it
return a ToolResult whatever happens, so callers only branch on
``result.success``.
"""

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from ..errors import BrowserToolsError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """
    Outcome of one tool call.

    Attributes:
        success: False when the tool could not do its job
        data: Tool-specific value (the evaluated value, cookie list, ...)
        error: Message for the user when success is False
        hint: What the user can do about the error
        metadata: Extra context such as the page URL
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    hint: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any = None, **metadata: Any) -> "ToolResult":
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, hint: Optional[str] = None, **metadata: Any) -> "ToolResult":
        return cls(success=False, error=error, hint=hint, metadata=metadata)

    def __str__(self) -> str:
        return f"Success: {self.data}" if self.success else f"Error: {self.error}"


@dataclass(frozen=True)
class ToolSpec:
    """Registry entry for a decorated tool."""

    name: str
    description: str
    parameters: dict[str, Any]
    function: Callable[..., Awaitable[ToolResult]]

    def schema(self) -> dict[str, Any]:
        """JSON-Schema style description of the tool's arguments."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


_REGISTRY: dict[str, ToolSpec] = {}


def tool(
    name: str,
    description: str,
    parameters: Optional[dict[str, Any]] = None,
):
    """
    Register an async function as a browser tool.

    Return values that are not already a ToolResult are wrapped in a
    successful one. A BrowserToolsError becomes a failed result that keeps
    its hint; any other exception becomes a failed result with its text.

    Example:
        >>> @tool(
        ...     name="title",
        ...     description="Read the page title",
        ...     parameters={"type": "object", "properties": {}},
        ... )
        ... async def title(page) -> ToolResult:
        ...     return ToolResult.ok(await page.title(), url=page.url)
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[ToolResult]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> ToolResult:
            try:
                result = await func(*args, **kwargs)
            except BrowserToolsError as e:
                logger.debug("%s failed: %s", name, e.message)
                return ToolResult.fail(e.message, hint=e.hint)
            except Exception as e:
                logger.debug("%s raised", name, exc_info=True)
                return ToolResult.fail(str(e))
            return result if isinstance(result, ToolResult) else ToolResult.ok(result)

        wrapper.tool_name = name
        _REGISTRY[name] = ToolSpec(name, description, parameters or {}, wrapper)
        return wrapper

    return decorator


def get_tool(name: str) -> Optional[ToolSpec]:
    """Look up a registered tool by name."""
    return _REGISTRY.get(name)


def get_all_tools() -> dict[str, ToolSpec]:
    """All registered tools, keyed by name."""
    return dict(_REGISTRY)


def get_tool_schemas() -> list[dict[str, Any]]:
    """Schemas of all registered tools, in registration order."""
    return [spec.schema() for spec in _REGISTRY.values()]
