from filecontext.config.settings import Settings
from filecontext.logging.logger import Log
from filecontext.ocr.pdfplumber_rasterizer import PdfPlumberRasterizer
from filecontext.ocr.pymupdf_rasterizer import PyMuPdfRasterizer
from filecontext.ocr.rasterizer_base import BaseRasterizer

# A letter page at scale 8 is already ~4900x6300 pixels per page.
MAX_RENDER_SCALE = 8.0


def validate_render_scale(scale: float) -> float:
    """Return ``scale`` if pages can be rendered at it, else raise ValueError."""
    if not 0 < scale <= MAX_RENDER_SCALE:
        raise ValueError(
            f"render_scale must be in (0, {MAX_RENDER_SCALE}], got {scale}"
        )
    return scale


class RasterizerFactory:
    """Creates the configured PDF rasterizer after checking its render settings."""

    RASTERIZERS: dict[str, type[BaseRasterizer]] = {
        "pymupdf": PyMuPdfRasterizer,
        "pdfplumber": PdfPlumberRasterizer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseRasterizer:
        name = settings.rasterizer_engine.strip().lower()
        rasterizer_cls = cls.RASTERIZERS.get(name)
        if rasterizer_cls is None:
            raise ValueError(
                f"Unknown rasterizer engine '{name}'. Choose from: {sorted(cls.RASTERIZERS)}"
            )
        scale = validate_render_scale(settings.render_scale)
        Log.debug(f"Rasterizing PDF pages with {name} at scale {scale}")
        return rasterizer_cls()
