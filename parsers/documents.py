import io
import logging
import unicodedata
from pathlib import Path
from typing import Callable
import docx
import fitz  # PyMuPDF
from pypdf import PdfReader

from errors import ExtractionError

logger = logging.getLogger(__name__)

TEXT_ENCODINGS = ("utf-8", "cp1252")
# Control characters allowed in plain text; anything else means a binary file
ALLOWED_CONTROLS = set("\t\n\r\f\v")
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt", ".md")

# Any callable with this shape can stand in for extract_text in the pipeline
Extractor = Callable[[bytes, str], str]


def read_pdf(data: bytes) -> str:
    """Extract text from PDF bytes using PyMuPDF primarily, fallback to pypdf."""
    text = ""

    # ---------- Attempt 1: PyMuPDF ----------
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            text = "\n".join(page.get_text("text") or "" for page in doc)
        if text.strip():
            logger.info("Extracted %d characters via PyMuPDF", len(text))
            return text
    except Exception as e:
        logger.warning("PyMuPDF extraction failed: %s", e)

    # ---------- Attempt 2: pypdf (fallback) ----------
    try:
        reader = PdfReader(io.BytesIO(data))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
    except Exception as e:
        raise ExtractionError(f"PDF could not be read: {e}") from e
    logger.info("Extracted %d characters via pypdf fallback", len(text))
    return text


def read_docx(data: bytes) -> str:
    """Extract paragraph and table text from a DOCX document."""
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        raise ExtractionError(f"DOCX could not be read: {e}") from e

    lines = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append(" ".join(cell.text for cell in row.cells))
    return "\n".join(lines)


def read_txt(data: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        if any(unicodedata.category(c) == "Cc" and c not in ALLOWED_CONTROLS for c in text):
            raise ExtractionError("Text file contains binary data")
        return text
    raise ExtractionError("Unable to decode text file with supported encodings")


def extract_text(data: bytes, filename: str) -> str:
    """
    Turn an uploaded resume into plain text.

    Dispatches on the file extension. Raises ExtractionError when the format is
    unsupported, the upload is empty, the document is corrupt, or no text can
    be recovered from it (e.g. a scanned PDF without a text layer).
    """
    name = filename or "document"
    extension = Path(name).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise ExtractionError(
            f"Unsupported file format for {name!r}; expected one of {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not data:
        raise ExtractionError(f"{name!r} is empty")

    try:
        if extension == ".pdf":
            text = read_pdf(data)
        elif extension == ".docx":
            text = read_docx(data)
        else:
            text = read_txt(data)
    except ExtractionError as e:
        raise ExtractionError(f"Failed to extract text from {name!r}: {e}") from e

    text = text.strip()
    if not text:
        raise ExtractionError(f"No text could be extracted from {name!r}")
    logger.info("Extracted %d characters from %s", len(text), name)
    return text
