from abc import ABC, abstractmethod
from src.domain.models import SelectedFile


class AttachmentReadError(Exception):
    """Raised by a FileReader when a selected file cannot be turned into content."""


class FileReader(ABC):
    @abstractmethod
    async def read_as_data_url(self, file: SelectedFile) -> str:
        pass


class Clock(ABC):
    @abstractmethod
    def now_display(self) -> str:
        pass
