import io

import pdfplumber

from constructia.classification.exceptions import ClassificationError


def extract_text(data: bytes, mime_type: str) -> str:
    """Extract plain text to feed the classifier.

    PDFs go through pdfplumber, text/* is decoded as UTF-8, anything else
    (images, office files) yields an empty string.

    Raises:
        ClassificationError: if a PDF cannot be parsed.
    """
    if mime_type == "application/pdf":
        return _extract_pdf(data)
    if mime_type.startswith("text/"):
        return data.decode("utf-8", errors="replace").strip()
    return ""


def _extract_pdf(data: bytes) -> str:
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:
        raise ClassificationError(f"pdfplumber extraction failed: {exc}") from exc
    return "\n".join(pages).strip()
