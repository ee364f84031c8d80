import argparse
from collections.abc import Sequence
from pathlib import Path

from filecontext.assembly.assembler import ContextAssembler
from filecontext.budget.tokens import TokenLimits
from filecontext.config.settings import Settings
from filecontext.logging.logger import Log
from filecontext.pipeline.models import ConsumerCapabilities, ExtractionProgress, InputFile
from filecontext.pipeline.pipeline import build_pipeline


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="filecontext",
        description="Extract text from files and assemble a token-budgeted prompt.",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="files to ingest")
    parser.add_argument("--instruction", default="", help="question the files accompany")
    parser.add_argument(
        "--native-documents",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="whether the consumer reads PDF/Office documents natively and OCR can be skipped "
        "(default: SUPPORTS_NATIVE_DOCUMENTS)",
    )
    parser.add_argument("--max-file-tokens", type=int, default=None)
    return parser.parse_args(argv)


def _log_progress(file_name: str, progress: ExtractionProgress) -> None:
    Log.debug(f"[{progress.elapsed_millis}ms] {file_name}: {progress.stage} {progress.percent}%")


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point: settings -> pipeline -> assemble -> print."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    supports_native = (
        settings.supports_native_documents
        if args.native_documents is None
        else args.native_documents
    )
    pipeline = build_pipeline(settings)
    files = [InputFile.from_path(path) for path in args.paths]
    processed = pipeline.process_batch(
        files,
        ConsumerCapabilities(supports_native_documents=supports_native),
        on_progress=_log_progress,
    )

    assembler = ContextAssembler(TokenLimits.from_settings(settings))
    context = assembler.assemble(args.instruction, processed, max_file_tokens=args.max_file_tokens)
    print(context.display_text)
    print()
    print(context.prompt_text)


if __name__ == "__main__":
    main()
