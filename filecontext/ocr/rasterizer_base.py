from abc import ABC, abstractmethod
from collections.abc import Callable

PageCallback = Callable[[int, int], None]


class BaseRasterizer(ABC):
    """Contract for PDF-to-image rendering adapters."""

    @abstractmethod
    def rasterize(
        self,
        pdf_bytes: bytes,
        scale: float,
        on_page: PageCallback | None = None,
    ) -> list[bytes]:
        """Render every page of a PDF to an independent PNG image.

        Args:
            pdf_bytes: Raw PDF file content.
            scale: Upscaling factor relative to the native page size.
            on_page: Called as ``on_page(pages_done, page_count)`` after
                     each page is rendered.

        Returns:
            PNG bytes per page, in page order.

        Raises:
            RasterizationError: if the document cannot be opened or rendered.
        """
