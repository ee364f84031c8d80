from filecontext.assembly.assembler import (
    AssembledContext,
    ContextAssembler,
    build_display_summary,
    build_prompt,
)

__all__ = ["AssembledContext", "ContextAssembler", "build_display_summary", "build_prompt"]
