import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from token_diff_editor.tools.contract import CodePairParams, ToolDefinition, ToolName
from token_diff_editor.tools.diffing import generate_diff
from token_diff_editor.tools.errors import InvalidArgumentsError, UnknownToolError
from token_diff_editor.tools.tokens import Tokenizer, analyze_tokens

logger = logging.getLogger(__name__)


def _code_pair_schema(original_description: str, modified_description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "originalCode": {
                "type": "string",
                "description": original_description,
            },
            "modifiedCode": {
                "type": "string",
                "description": modified_description,
            },
        },
        "required": ["originalCode", "modifiedCode"],
    }


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=ToolName.ANALYZE_TOKENS,
        description="Analyze token usage in original and modified code",
        input_schema=_code_pair_schema("Original code to analyze", "Modified code to analyze"),
    ),
    ToolDefinition(
        name=ToolName.GENERATE_DIFF,
        description="Generate a diff between original and modified code",
        input_schema=_code_pair_schema("Original code", "Modified code"),
    ),
)


def list_available_operations() -> list[ToolDefinition]:
    return list(TOOL_DEFINITIONS)


def coerce_to_text(value: Any) -> str:
    """Force an argument value to text the way a JavaScript `String()` call would."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


_MISSING = "undefined"


class ToolAdapter:
    """
    Single entry point for both tools.

    Dispatches on the exact tool name and returns the text of the one content
    block the tool produces. Holds no per-request state.
    """

    def __init__(self, tokenizer: Tokenizer, strict: bool = True):
        self.tokenizer = tokenizer
        self.strict = strict
        self._handlers: dict[ToolName, Callable[[CodePairParams], str]] = {
            ToolName.ANALYZE_TOKENS: self._analyze_tokens,
            ToolName.GENERATE_DIFF: self._generate_diff,
        }

    def resolve(self, name: str) -> ToolName:
        try:
            return ToolName(name)
        except ValueError:
            logger.warning("Rejected call to unknown tool %r", name)
            raise UnknownToolError(name) from None

    def call(self, name: str, arguments: Mapping[str, Any] | None) -> str:
        tool = self.resolve(name)

        params = self._parse_arguments(tool, arguments or {})
        logger.debug(
            "Calling %s (original=%d chars, modified=%d chars)",
            tool,
            len(params.original_code),
            len(params.modified_code),
        )

        text = self._handlers[tool](params)

        logger.debug("%s produced %d chars", tool, len(text))
        return text

    def _parse_arguments(self, tool: ToolName, arguments: Mapping[str, Any]) -> CodePairParams:
        if not self.strict:
            return CodePairParams(
                original_code=coerce_to_text(arguments.get("originalCode", _MISSING)),
                modified_code=coerce_to_text(arguments.get("modifiedCode", _MISSING)),
            )

        try:
            return CodePairParams.model_validate(dict(arguments))
        except ValidationError as e:
            fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
            logger.warning("Invalid arguments for %s: %s", tool, fields)
            raise InvalidArgumentsError(
                tool.value,
                "; ".join(f"{field}: {err['msg']}" for field, err in zip(fields, e.errors())),
                fields=fields,
            ) from e

    def _analyze_tokens(self, params: CodePairParams) -> str:
        result = analyze_tokens(self.tokenizer, params.original_code, params.modified_code)
        return result.summary()

    def _generate_diff(self, params: CodePairParams) -> str:
        return generate_diff(params.original_code, params.modified_code)
