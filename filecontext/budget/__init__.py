from filecontext.budget.allocator import (
    FileWithTokens,
    TruncatedFile,
    allocate_budget,
    format_truncation_info,
)
from filecontext.budget.tokens import (
    DEFAULT_TOKEN_LIMITS,
    TokenLimits,
    estimate_token_count,
    truncate_to_token_limit,
)

__all__ = [
    "DEFAULT_TOKEN_LIMITS",
    "FileWithTokens",
    "TokenLimits",
    "TruncatedFile",
    "allocate_budget",
    "estimate_token_count",
    "format_truncation_info",
    "truncate_to_token_limit",
]
