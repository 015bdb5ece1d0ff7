from token_diff_editor.tools.adapter import (
    TOOL_DEFINITIONS,
    ToolAdapter,
    list_available_operations,
)
from token_diff_editor.tools.contract import (
    CodePairParams,
    DiffSegment,
    SegmentKind,
    TokenCountResult,
    ToolDefinition,
    ToolName,
)
from token_diff_editor.tools.errors import (
    InvalidArgumentsError,
    ToolError,
    UnknownToolError,
)

__all__ = [
    "ToolName",
    "ToolDefinition",
    "ToolAdapter",
    "TOOL_DEFINITIONS",
    "list_available_operations",
    "CodePairParams",
    "TokenCountResult",
    "SegmentKind",
    "DiffSegment",
    "ToolError",
    "UnknownToolError",
    "InvalidArgumentsError",
]
