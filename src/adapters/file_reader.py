import asyncio
import base64
import mimetypes

from src.domain.models import SelectedFile
from src.domain.ports import AttachmentReadError, FileReader
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)


class DataUrlFileReader(FileReader):
    """Turns a selected image into a ``data:`` URL, off the event loop for disk reads."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes

    def _read_path(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    async def read_as_data_url(self, file: SelectedFile) -> str:
        if file.content is not None:
            data = file.content
        elif file.path:
            try:
                data = await asyncio.to_thread(self._read_path, file.path)
            except OSError as e:
                raise AttachmentReadError(f"Cannot read {file.name}: {e}") from e
        else:
            raise AttachmentReadError(f"No content for {file.name}")

        if len(data) > self.max_bytes:
            raise AttachmentReadError(
                f"{file.name} is {len(data)} bytes, limit is {self.max_bytes}"
            )

        mime = file.mime_type or mimetypes.guess_type(file.name)[0] or "application/octet-stream"
        encoded = base64.b64encode(data).decode("ascii")
        logger.debug("file_read_as_data_url", file_name=file.name, size=len(data))
        return f"data:{mime};base64,{encoded}"
