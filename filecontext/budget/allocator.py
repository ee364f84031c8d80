"""Recency-weighted token budget allocation across files.

When the files do not fit, they are walked most-recent first (smaller first
among equally recent files). Each file is offered its share of what is left,
scaled up by a recency weight, and the tokens it actually keeps are taken off
the remaining budget before the next file is considered.
"""

import math
from dataclasses import dataclass

from filecontext.budget.tokens import estimate_token_count, truncate_to_token_limit
from filecontext.logging.logger import Log

RECENCY_STEP = 0.2


@dataclass(frozen=True)
class FileWithTokens:
    """Allocation input. ``unique_key`` tells apart files sharing a name."""

    name: str
    content: str
    timestamp_millis: int = 0
    unique_key: str | None = None

    @property
    def tokens(self) -> int:
        return estimate_token_count(self.content)


@dataclass(frozen=True)
class TruncatedFile:
    name: str
    content: str
    original_tokens: int
    truncated_tokens: int
    truncated: bool
    unique_key: str | None = None


def _unchanged(file: FileWithTokens, tokens: int) -> TruncatedFile:
    return TruncatedFile(
        name=file.name,
        content=file.content,
        original_tokens=tokens,
        truncated_tokens=tokens,
        truncated=False,
        unique_key=file.unique_key,
    )


def allocate_budget(files: list[FileWithTokens], max_total_tokens: int) -> list[TruncatedFile]:
    """Fit the files into ``max_total_tokens``, truncating where needed.

    Results are returned in input order. The sum of ``truncated_tokens``
    never exceeds ``max_total_tokens``.
    """
    if not files:
        return []

    tokens = [file.tokens for file in files]
    if sum(tokens) <= max_total_tokens:
        return [_unchanged(file, count) for file, count in zip(files, tokens)]

    Log.info(
        f"File content needs {sum(tokens)} tokens, budget is {max_total_tokens}; truncating"
    )
    order = sorted(range(len(files)), key=lambda i: (-files[i].timestamp_millis, tokens[i]))
    file_count = len(order)
    remaining_budget = max(0, max_total_tokens)
    results: dict[int, TruncatedFile] = {}

    for position, index in enumerate(order):
        file = files[index]
        files_remaining = file_count - position
        recency_weight = 1 + (file_count - position) * RECENCY_STEP
        base_share = remaining_budget / files_remaining
        allocated = math.floor(min(tokens[index], base_share * recency_weight, remaining_budget))

        truncation = truncate_to_token_limit(file.content, allocated)
        kept_tokens = estimate_token_count(truncation.text)
        remaining_budget -= kept_tokens

        if truncation.truncated:
            Log.debug(f"Truncated {file.name}: {tokens[index]} -> {kept_tokens} tokens")
        results[index] = TruncatedFile(
            name=file.name,
            content=truncation.text,
            original_tokens=tokens[index],
            truncated_tokens=kept_tokens,
            truncated=truncation.truncated,
            unique_key=file.unique_key,
        )

    return [results[index] for index in range(file_count)]


def format_truncation_info(original_tokens: int, truncated_tokens: int) -> str:
    """Human-readable summary, e.g. ``(40% of content included, 1,000 → 400 tokens)``."""
    percent_kept = round(truncated_tokens / original_tokens * 100) if original_tokens else 100
    return (
        f"({percent_kept}% of content included, "
        f"{original_tokens:,} → {truncated_tokens:,} tokens)"
    )
