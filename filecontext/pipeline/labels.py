"""Display and prompt strings attached to processed files.

Display strings carry only metadata so chat bubbles stay compact.
"""


def size_kb(size_bytes: int) -> int:
    return int(size_bytes / 1024 + 0.5)


def image_label(name: str, size_bytes: int) -> str:
    return f"📷 Image: {name} ({size_kb(size_bytes)}KB)"


def document_label(name: str, size_bytes: int) -> str:
    return f"📄 Document: {name} ({size_kb(size_bytes)}KB) - Text extracted with OCR"


def native_document_label(name: str, size_bytes: int) -> str:
    return f"📄 Document: {name} ({size_kb(size_bytes)}KB) - Processed natively"


def text_label(name: str, size_bytes: int) -> str:
    return f"📝 Text: {name} ({size_kb(size_bytes)}KB)"


def spreadsheet_label(name: str, size_bytes: int) -> str:
    return f"📊 Spreadsheet: {name} ({size_kb(size_bytes)}KB)"


def unsupported_label(name: str, mime_type: str) -> str:
    return f"❌ Unsupported file: {name} ({mime_type})"


def error_label(name: str, message: str) -> str:
    return f"❌ Error processing: {name} - {message}"


def content_prompt(kind: str, name: str, text: str) -> str:
    """Prompt block for an extracted file: heading line, then the body."""
    return f"{kind}: {name}\n\nExtracted Content:\n{text}"
