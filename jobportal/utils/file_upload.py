"""
File Upload Utility - Extract text from resume uploads for analysis.

Supported formats:
- Images (.png, .jpg/.jpeg) using Tesseract OCR
- PDF (.pdf) using PyPDF2 (text layer)

Max file size: settings.max_resume_image_mb
"""

import io
import logging

import pytesseract
from PIL import Image, UnidentifiedImageError
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from jobportal.core.errors import BadRequest

logger = logging.getLogger(__name__)

IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png"}
PDF_TYPE = "application/pdf"
ANALYZABLE_TYPES = IMAGE_TYPES | {PDF_TYPE}


class OCRError(Exception):
    """Raised when no text could be pulled out of a readable-looking file."""


def validate_upload(content: bytes, content_type: str, max_size_mb: int) -> None:
    """Type and size checks before any extraction work."""
    if content_type not in ANALYZABLE_TYPES:
        raise BadRequest("Please upload a résumé image (JPG/PNG) or PDF.")
    if not content:
        raise BadRequest("Please upload a résumé image (JPG/PNG) or PDF.")
    if len(content) > max_size_mb * 1024 * 1024:
        raise BadRequest(f"File too large. Maximum size: {max_size_mb}MB")


def extract_text(content: bytes, content_type: str) -> str:
    """Extract text by file type. Raises OCRError on extraction failure."""
    if content_type == PDF_TYPE:
        return extract_from_pdf(content)
    return extract_from_image(content)


def extract_from_image(content: bytes) -> str:
    """OCR an image (English)."""
    try:
        with Image.open(io.BytesIO(content)) as image:
            return pytesseract.image_to_string(image, lang="eng").strip()
    except (UnidentifiedImageError, pytesseract.TesseractError, OSError) as e:
        logger.error("OCR error: %s", e)
        raise OCRError(str(e)) from e


def extract_from_pdf(content: bytes) -> str:
    """Extract text from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        return '\n'.join(text_parts).strip()
    except (PdfReadError, ValueError) as e:
        logger.error("PDF read error: %s", e)
        raise OCRError(str(e)) from e
