from abc import ABC, abstractmethod

from filecontext.pipeline.models import InputFile


class BaseExtractor(ABC):
    """Contract for synchronous, bounded-time text extractors."""

    @abstractmethod
    def extract(self, file: InputFile) -> str:
        """Extract a textual representation of the file.

        Args:
            file: The uploaded file; its bytes are read through the handle.

        Returns:
            The extracted text. May be empty.

        Raises:
            DecodeError: if the content cannot be decoded or parsed.
        """
