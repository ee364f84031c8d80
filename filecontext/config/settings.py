from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    rasterizer_engine: str = "pymupdf"
    render_scale: float = 2.0

    ocr_engine: str = "tesseract"
    ocr_language: str = "eng"
    tesseract_cmd: str = ""

    max_context_tokens: int = 200000
    reserved_tokens: int = 10000
    max_file_tokens: int = 150000
    max_history_tokens: int = 40000

    supports_native_documents: bool = False
