import pymupdf

from filecontext.extraction.exceptions import RasterizationError
from filecontext.ocr.rasterizer_base import BaseRasterizer, PageCallback


class PyMuPdfRasterizer(BaseRasterizer):
    """Renders PDF pages to PNG using PyMuPDF."""

    def rasterize(
        self,
        pdf_bytes: bytes,
        scale: float,
        on_page: PageCallback | None = None,
    ) -> list[bytes]:
        try:
            images: list[bytes] = []
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                total = doc.page_count
                matrix = pymupdf.Matrix(scale, scale)
                for index, page in enumerate(doc, start=1):
                    pixmap = page.get_pixmap(matrix=matrix)
                    images.append(pixmap.tobytes("png"))
                    if on_page is not None:
                        on_page(index, total)
            return images
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"pymupdf rasterization failed: {exc}") from exc
