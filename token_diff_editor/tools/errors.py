from enum import StrEnum


class ToolErrorType(StrEnum):
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"


class ToolError(Exception):
    def __init__(
        self,
        error_type: ToolErrorType,
        message: str,
        details: dict | None = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}


class UnknownToolError(ToolError):
    """Raised when dispatch receives a name outside the registered tools."""
    def __init__(
        self,
        name: str,
    ):
        super().__init__(
            ToolErrorType.UNKNOWN_TOOL,
            f"Unknown tool: {name}",
            details = {
                "name": name
            }
        )
        self.name = name


class InvalidArgumentsError(ToolError):
    def __init__(
        self,
        tool: str,
        message: str,
        fields: list[str] | None = None
    ):
        super().__init__(
            ToolErrorType.INVALID_ARGUMENTS,
            f"Invalid arguments for {tool}: {message}",
            details = {
                "tool": tool,
                "fields": fields or []
            }
        )
        self.tool = tool
