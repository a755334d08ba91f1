"""
CV Text Extraction
"""
import pdfplumber

from core.exceptions import ValidationException
from core.logging_config import logger


PDF_MIME_TYPE = "application/pdf"
WORD_MIME_TYPES = (
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


class CVParser:
    """Extracts plain text from uploaded CV documents"""

    def extract_text_from_pdf(self, file_path: str) -> str:
        text_content = ""
        try:
            with pdfplumber.open(file_path) as pdf:
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text_content += page_text + "\n"
        except Exception as e:
            logger.error(f"PDF parsing error for {file_path}: {e}")
            raise ValidationException("file", "Failed to extract text from PDF") from e

        return text_content

    def extract_text(self, file_path: str, mime_type: str) -> str:
        """Dispatch on MIME type

        Only PDF is supported; DOC and DOCX uploads are rejected with a
        ValidationException until a Word reader is available.
        """
        if mime_type == PDF_MIME_TYPE:
            return self.extract_text_from_pdf(file_path)
        if mime_type in WORD_MIME_TYPES:
            logger.info(f"Word document text extraction not supported yet: {file_path}")
            raise ValidationException("file", "Unsupported file type: Word documents are not supported yet")
        raise ValidationException("file", "Unsupported file type")
