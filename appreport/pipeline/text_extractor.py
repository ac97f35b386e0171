#!/usr/bin/env python3
"""
Raw text extraction from PDF bytes.

Uses pdfplumber; each page's text is terminated by a newline and pages are
concatenated in order.  Bytes that are not a readable PDF give an empty
string so callers can fall back to a default report.
"""
from __future__ import annotations

import logging
from io import BytesIO

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

LOGGER = logging.getLogger(__name__)


def extract_text(pdf_bytes: bytes) -> str:
    """
    Text of every page, each followed by ``"\\n"``.

    The byte stream and the document handle are closed on every path.

    Example:
        >>> extract_text(b"not a pdf")
        ''
    """
    if not pdf_bytes:
        return ""

    try:
        with BytesIO(pdf_bytes) as stream, pdfplumber.open(stream) as pdf:
            pages = [(page.extract_text() or "") + "\n" for page in pdf.pages]
    except (PdfminerException, PSException, ValueError, KeyError) as exc:
        LOGGER.warning("Could not read PDF (%d bytes): %s", len(pdf_bytes), exc)
        return ""

    LOGGER.debug("Extracted %d pages of text", len(pages))
    return "".join(pages)
