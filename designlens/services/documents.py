# designlens/services/documents.py

import base64
from io import BytesIO

from docx import Document
from loguru import logger
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

IMAGE_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/webp", "image/gif")


def is_image(content_type: str) -> bool:
    return (content_type or "").lower().split(";")[0].strip() in IMAGE_TYPES


def to_data_url(file_bytes: bytes, content_type: str) -> str:
    """Encode uploaded image bytes as a base64 data URL for the vision model."""
    media_type = (content_type or "image/png").split(";")[0].strip() or "image/png"
    encoded = base64.b64encode(file_bytes).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def extract_text_from_bytes(file_bytes: bytes, file_type: str) -> str:
    """
    Extract a flow description from uploaded file bytes.
    Supports: PDF, DOCX, and plain text.
    Unreadable documents yield an empty string rather than an error.
    """
    if not file_bytes:
        return ""

    file_type = (file_type or "").lower()

    # ----- PDF -----
    if "pdf" in file_type:
        try:
            reader = PdfReader(BytesIO(file_bytes))
            return "\n".join(page.extract_text() or "" for page in reader.pages)
        except (PdfReadError, ValueError) as e:
            logger.warning("Could not read PDF upload: {}", e)
            return ""

    # ----- DOCX (Word) -----
    if "word" in file_type or "docx" in file_type:
        try:
            doc = Document(BytesIO(file_bytes))
            return "\n".join(p.text for p in doc.paragraphs)
        except Exception as e:
            logger.warning("Could not read DOCX upload: {}", e)
            return ""

    # ----- Fallback: Treat as plain text -----
    return file_bytes.decode("utf-8", errors="ignore")
