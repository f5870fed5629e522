from typing import Dict, Optional

from src.domain.models import Attachment, AttachmentKind, DraftBuffer, SelectedFile
from src.domain.ports import AttachmentReadError, FileReader
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)


def format_file_size(size: int) -> str:
    return f"{size / 1024:.0f} KB"


class ComposerComponent:
    """Draft buffers, one per thread key.

    Image reads are bound to the buffer instance they were started against.
    Sending replaces the thread's buffer with a fresh one, so a read that
    finishes after the send finds its buffer gone and is dropped.
    """

    def __init__(self, file_reader: FileReader):
        self.file_reader = file_reader
        self._drafts: Dict[Optional[str], DraftBuffer] = {}

    def draft_for(self, thread_key: Optional[str]) -> DraftBuffer:
        draft = self._drafts.get(thread_key)
        if draft is None:
            draft = DraftBuffer()
            self._drafts[thread_key] = draft
        return draft

    def set_text(self, thread_key: Optional[str], text: str):
        self.draft_for(thread_key).text = text

    async def compose_attachment(
        self, thread_key: Optional[str], file: SelectedFile, kind: AttachmentKind
    ) -> Optional[Attachment]:
        draft = self.draft_for(thread_key)

        if kind == AttachmentKind.FILE:
            # Appended before any await, so selection order is kept
            attachment = Attachment(
                kind=AttachmentKind.FILE,
                file_name=file.name,
                file_size=format_file_size(file.size),
            )
            draft.attachments.append(attachment)
            return attachment

        try:
            content_ref = await self.file_reader.read_as_data_url(file)
        except AttachmentReadError as e:
            logger.error(
                "attachment_read_failed",
                thread_key=thread_key,
                file_name=file.name,
                error=str(e),
            )
            return None

        if self._drafts.get(thread_key) is not draft:
            logger.warning(
                "late_attachment_discarded", thread_key=thread_key, file_name=file.name
            )
            return None

        attachment = Attachment(kind=AttachmentKind.IMAGE, content_ref=content_ref)
        draft.attachments.append(attachment)
        return attachment

    def remove_attachment(self, thread_key: Optional[str], index: int) -> bool:
        draft = self.draft_for(thread_key)
        if index < 0 or index >= len(draft.attachments):
            logger.warning(
                "remove_attachment_out_of_range",
                thread_key=thread_key,
                index=index,
                size=len(draft.attachments),
            )
            return False
        draft.attachments.pop(index)
        return True

    def take(self, thread_key: Optional[str]) -> Optional[DraftBuffer]:
        """Hands out the thread's draft for sending, leaving an empty one behind.

        Returns None and leaves the draft in place when there is nothing to send.
        """
        draft = self.draft_for(thread_key)
        if draft.is_empty():
            return None
        self._drafts[thread_key] = DraftBuffer()
        return draft

    def reset(self):
        self._drafts.clear()
