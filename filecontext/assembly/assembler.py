"""Prompt and display-summary assembly from processed files."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from filecontext.budget.allocator import FileWithTokens, allocate_budget, format_truncation_info
from filecontext.budget.tokens import DEFAULT_TOKEN_LIMITS, TokenLimits
from filecontext.logging.logger import Log
from filecontext.pipeline.models import ProcessedFile

CONTENT_SECTION_HEADER = "## Document Content"
CONTENT_SECTION_INTRO = "I've processed the following files:"
CLOSING_INSTRUCTION = "Please analyze this content and respond to my question above."


def build_prompt(original_instruction: str, files: Sequence[ProcessedFile]) -> str:
    """Append a numbered Document Content section for every successful file.

    Failed files are left out; their failure shows up in the display summary.
    Without any successful file the instruction is returned unchanged.
    """
    included = [file for file in files if file.error is None and file.prompt_content]
    if not included:
        return original_instruction

    prompt = f"{original_instruction}\n\n{CONTENT_SECTION_HEADER}\n\n{CONTENT_SECTION_INTRO}\n\n"
    for number, file in enumerate(included, start=1):
        prompt += f"### File {number}: {file.prompt_content}\n\n"
    return prompt + f"{CLOSING_INSTRUCTION}\n"


def build_display_summary(files: Sequence[ProcessedFile]) -> str:
    """One metadata line per file (failures included), newline separated."""
    return "\n".join(file.display_content or f"📄 {file.name}" for file in files)


@dataclass(frozen=True)
class AssembledContext:
    display_text: str
    prompt_text: str
    truncated_files: tuple[str, ...] = ()


class ContextAssembler:
    """Builds the display and prompt strings, fitting extracted text to a budget."""

    def __init__(self, limits: TokenLimits = DEFAULT_TOKEN_LIMITS) -> None:
        self._limits = limits

    def assemble(
        self,
        original_instruction: str,
        files: Sequence[ProcessedFile],
        max_file_tokens: int | None = None,
        timestamps: Mapping[int, int] | None = None,
    ) -> AssembledContext:
        """Assemble both strings for one message.

        Args:
            original_instruction: The user's question or instruction.
            files: Pipeline output, in upload order.
            max_file_tokens: Budget for all extracted text together. Defaults
                             to the configured file budget.
            timestamps: Optional upload time per file index. Files without
                        one count as newer than every timestamped file
                        and among themselves later position means newer.
        """
        budget = self._limits.file_budget if max_file_tokens is None else max_file_tokens
        fitted, truncated_names = self._fit_to_budget(files, budget, timestamps or {})
        return AssembledContext(
            display_text=build_display_summary(files),
            prompt_text=build_prompt(original_instruction, fitted),
            truncated_files=truncated_names,
        )

    @staticmethod
    def _fit_to_budget(
        files: Sequence[ProcessedFile],
        budget: int,
        timestamps: Mapping[int, int],
    ) -> tuple[list[ProcessedFile], tuple[str, ...]]:
        newest = max(timestamps.values(), default=-1)
        candidates = [
            FileWithTokens(
                name=file.name,
                content=file.extracted_text,
                timestamp_millis=timestamps.get(index, newest + 1 + index),
                unique_key=str(index),
            )
            for index, file in enumerate(files)
            if file.error is None and file.extracted_text
        ]
        allocation = {
            result.unique_key: result for result in allocate_budget(candidates, budget)
        }

        fitted: list[ProcessedFile] = []
        truncated_names: list[str] = []
        for index, file in enumerate(files):
            result = allocation.get(str(index))
            if result is None or not result.truncated:
                fitted.append(file)
                continue
            truncated_names.append(file.name)
            info = format_truncation_info(result.original_tokens, result.truncated_tokens)
            heading, _, _ = file.prompt_content.partition("\n\n")
            fitted.append(
                replace(
                    file,
                    prompt_content=f"{heading} {info}\n\nExtracted Content:\n{result.content}",
                )
            )

        if truncated_names:
            Log.info(f"Truncated {len(truncated_names)} file(s) to fit {budget} tokens")
        return fitted, tuple(truncated_names)
