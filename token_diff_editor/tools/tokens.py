import logging
from typing import Protocol, runtime_checkable

import tiktoken

from token_diff_editor.tools.contract import TokenCountResult

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "o200k_base"


@runtime_checkable
class Tokenizer(Protocol):
    """Anything that turns text into an ordered list of token ids."""

    def encode(self, text: str) -> list[int]:
        ...

    @property
    def name(self) -> str:
        ...


class TiktokenTokenizer:
    """
    Tokenizer backed by a tiktoken encoding.

    The encoding is loaded on first use and held for the lifetime of the
    instance; tiktoken may fetch the BPE file over the network the first
    time an encoding is requested on a machine.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING):
        self.encoding_name = encoding_name
        self._encoding: tiktoken.Encoding | None = None

    @property
    def name(self) -> str:
        return self.encoding_name

    def load(self) -> tiktoken.Encoding:
        if self._encoding is None:
            logger.debug("Loading tiktoken encoding %s", self.encoding_name)
            self._encoding = tiktoken.get_encoding(self.encoding_name)
        return self._encoding

    def encode(self, text: str) -> list[int]:
        # Code routinely contains strings like "<|endoftext|>"; count them as text.
        return self.load().encode(text, disallowed_special=())


def analyze_tokens(
    tokenizer: Tokenizer,
    original: str,
    modified: str
) -> TokenCountResult:
    original_tokens = tokenizer.encode(original)
    modified_tokens = tokenizer.encode(modified)

    return TokenCountResult(
        original_count=len(original_tokens),
        modified_count=len(modified_tokens),
    )
