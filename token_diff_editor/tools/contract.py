from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from mcp import types
from pydantic import BaseModel, ConfigDict, Field, computed_field


class ToolName(StrEnum):
    ANALYZE_TOKENS = "analyze_tokens"
    GENERATE_DIFF = "generate_diff"


class CodePairParams(BaseModel):
    """Arguments shared by both tools: the code before and after an edit."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    original_code: str = Field(alias="originalCode")
    modified_code: str = Field(alias="modifiedCode")


class TokenCountResult(BaseModel):
    original_count: int = Field(ge=0)
    modified_count: int = Field(ge=0)

    @computed_field
    @property
    def delta(self) -> int:
        return self.original_count - self.modified_count

    def summary(self) -> str:
        return (
            f"Original Tokens: {self.original_count}, "
            f"Modified Tokens: {self.modified_count}, "
            f"Token Difference: {self.delta}"
        )


class SegmentKind(StrEnum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffSegment:
    kind: SegmentKind
    text: str


class ToolDefinition(BaseModel):
    name: ToolName
    description: str
    input_schema: dict[str, Any]

    def to_mcp(self) -> types.Tool:
        return types.Tool(
            name=self.name.value,
            description=self.description,
            inputSchema=self.input_schema,
        )
