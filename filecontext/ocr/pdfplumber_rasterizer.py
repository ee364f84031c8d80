import io

import pdfplumber

from filecontext.extraction.exceptions import RasterizationError
from filecontext.ocr.rasterizer_base import BaseRasterizer, PageCallback

_POINTS_PER_INCH = 72


class PdfPlumberRasterizer(BaseRasterizer):
    """Renders PDF pages to PNG using pdfplumber's page images."""

    def rasterize(
        self,
        pdf_bytes: bytes,
        scale: float,
        on_page: PageCallback | None = None,
    ) -> list[bytes]:
        try:
            images: list[bytes] = []
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                total = len(pdf.pages)
                for index, page in enumerate(pdf.pages, start=1):
                    page_image = page.to_image(resolution=_POINTS_PER_INCH * scale)
                    buffer = io.BytesIO()
                    page_image.original.save(buffer, format="PNG")
                    images.append(buffer.getvalue())
                    if on_page is not None:
                        on_page(index, total)
            return images
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"pdfplumber rasterization failed: {exc}") from exc
