"""Heuristic token counting and single-text truncation.

Tokens are estimated at 3.5 characters each, an average of natural-language
text (~4 chars/token) and code or symbol-dense content (~2-3 chars/token).
This is not a tokenizer. Everything else in the package calls
``estimate_token_count`` only, so an exact tokenizer can replace it here.
"""

import math
from dataclasses import dataclass

from filecontext.config.settings import Settings

CHARS_PER_TOKEN = 3.5
TRUNCATION_MARKER = "\n\n[... content truncated due to length ...]"


@dataclass(frozen=True)
class TokenLimits:
    """Advisory token limits for prompt construction."""

    max_context_tokens: int = 200000
    reserved_tokens: int = 10000
    max_file_tokens: int = 150000
    max_history_tokens: int = 40000

    @property
    def file_budget(self) -> int:
        """Tokens available for file content once reserved tokens are set aside."""
        return max(0, min(self.max_file_tokens, self.max_context_tokens - self.reserved_tokens))

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenLimits":
        return cls(
            max_context_tokens=settings.max_context_tokens,
            reserved_tokens=settings.reserved_tokens,
            max_file_tokens=settings.max_file_tokens,
            max_history_tokens=settings.max_history_tokens,
        )


DEFAULT_TOKEN_LIMITS = TokenLimits()


@dataclass(frozen=True)
class TruncationResult:
    text: str
    truncated: bool
    original_tokens: int


def estimate_token_count(text: str) -> int:
    """Estimated token count: ``ceil(len(text) / 3.5)``; 0 for empty text."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def truncate_to_token_limit(
    text: str,
    max_tokens: int,
    add_marker: bool = True,
) -> TruncationResult:
    """Cut ``text`` so its estimated token count fits ``max_tokens``.

    The marker's length is reserved inside the character budget, never added
    on top of it. When the budget cannot even hold the marker, the text is
    cut without one.
    """
    original_tokens = estimate_token_count(text)
    if original_tokens <= max_tokens:
        return TruncationResult(text=text, truncated=False, original_tokens=original_tokens)

    max_chars = max(0, math.floor(max_tokens * CHARS_PER_TOKEN))
    marker = TRUNCATION_MARKER if add_marker and max_chars >= len(TRUNCATION_MARKER) else ""
    truncated_text = text[: max_chars - len(marker)] + marker
    return TruncationResult(text=truncated_text, truncated=True, original_tokens=original_tokens)
