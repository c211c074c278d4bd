"""
Contract input step.

Two sub-modes feed the same ``contract_text``: pasting, and uploading a PDF
whose extracted text then lands in the paste box where it stays editable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from ..models.schemas import ContractSubmission
from ..services.api_client import AnalysisBackend, BackendError
from ..utils.validation import MIN_CONTRACT_LENGTH, contract_text_error, upload_error

logger = structlog.get_logger()

UPLOAD_FAILED_MESSAGE = "Failed to parse PDF. Please try pasting the text directly."


class InputMode(str, Enum):
    PASTE = "paste"
    UPLOAD = "upload"


@dataclass(frozen=True)
class PdfUpload:
    """A file picked or dropped by the user."""
    filename: str
    content: bytes
    content_type: Optional[str]

    @property
    def size(self) -> int:
        return len(self.content)


class ContractInputForm:
    """State and actions of the contract input step."""

    def __init__(self):
        self.mode = InputMode.PASTE
        self.contract_text = ""
        self.file_name: Optional[str] = None
        self.is_processing = False
        self.error: Optional[str] = None

    @property
    def char_count(self) -> int:
        return len(self.contract_text)

    @property
    def is_valid_length(self) -> bool:
        """Whether the continue button is enabled (untrimmed length)."""
        return self.char_count >= MIN_CONTRACT_LENGTH

    @property
    def length_hint(self) -> Optional[str]:
        if 0 < self.char_count < MIN_CONTRACT_LENGTH:
            return f"(minimum {MIN_CONTRACT_LENGTH})"
        return None

    def set_mode(self, mode: InputMode) -> None:
        self.mode = InputMode(mode)

    def set_text(self, text: str) -> None:
        self.contract_text = text
        self.error = None

    def clear_file(self) -> None:
        """Drop the uploaded file and the text extracted from it."""
        self.file_name = None
        self.contract_text = ""
        self.error = None

    def _upload_failed(self) -> bool:
        self.error = UPLOAD_FAILED_MESSAGE
        self.file_name = None
        return False

    async def upload(self, upload: PdfUpload, backend: AnalysisBackend) -> bool:
        """
        Upload a PDF and replace the contract text with its extracted text.

        Type and size are checked before anything is sent.

        Returns:
            True when text was extracted, False otherwise (see ``error``)
        """
        self.error = None

        rejection = upload_error(upload.content_type, upload.size)
        if rejection:
            self.error = rejection
            logger.info("upload_rejected", filename=upload.filename, reason=rejection)
            return False

        self.is_processing = True
        self.file_name = upload.filename

        try:
            text = await backend.parse_pdf(
                upload.filename, upload.content, upload.content_type
            )
        except BackendError as e:
            logger.warning("upload_failed", filename=upload.filename, error=str(e))
            return self._upload_failed()
        except Exception:
            logger.exception("upload_crashed", filename=upload.filename)
            return self._upload_failed()
        finally:
            self.is_processing = False

        self.contract_text = text
        self.mode = InputMode.PASTE
        return True

    def submit(self) -> Optional[ContractSubmission]:
        """
        Accept the current text when long enough.

        Returns:
            ContractSubmission, or None with ``error`` set
        """
        message = contract_text_error(self.contract_text)
        if message:
            self.error = message
            return None

        return ContractSubmission(text=self.contract_text, source_file_name=self.file_name)
