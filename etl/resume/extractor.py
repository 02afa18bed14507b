"""
Document Extractor - Pull plain text out of uploaded resume files.

Supports:
- PDF (.pdf): pypdf, then pypdf in relaxed layout mode, then a printable-run scan
- Word Documents (.docx): python-docx, then the raw document.xml with tags stripped
- Legacy Word (.doc): printable-byte scan only (low confidence)
- Plain Text (.txt)

"No text found" is never an error: every extractor returns None instead.
Only I/O errors reading the file propagate. Nothing is ever invented.
"""
import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup
from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

_HORIZONTAL_WS_RE = re.compile(r"[ \t\f\v\u00a0]+")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E\n\r]+")
# printable segments holding at least two consecutive letters
_PRINTABLE_RUN_RE = re.compile(r"[\x20-\x7E]*[A-Za-z]{2}[\x20-\x7E]*")
_PDF_SYNTAX_RE = re.compile(
    r"^(?:\d+\s+\d+\s+obj|endobj|stream|endstream|xref|trailer|startxref|%%EOF|%PDF-[\d.]+)\b|<<|>>|/[A-Z][A-Za-z]+"
)


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse runs of blanks inside lines and drop empty lines."""
    if not text:
        return ""
    lines = (_HORIZONTAL_WS_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


@dataclass
class ExtractedDocument:
    """Result of extracting a resume file.

    Attributes:
        text: Whitespace-normalized text
        format: File format ('pdf', 'docx', 'doc', 'txt')
        method: Which extractor produced the text
        source_path: Resolved file path
        low_confidence: True for byte-scan results
    """
    text: str
    format: str
    method: str
    source_path: str
    low_confidence: bool = False


class DocumentExtractor:
    """Resolve a stored resume file and extract its text."""

    SUPPORTED_FORMATS = {'.pdf', '.docx', '.doc', '.txt'}

    def __init__(
        self,
        search_dirs: Optional[Iterable[str]] = None,
        min_scan_chars: int = 100,
        doc_scan_limit_bytes: int = 100_000,
    ):
        self.search_dirs: List[Path] = [Path(d) for d in (search_dirs or [])]
        self.min_scan_chars = min_scan_chars
        self.doc_scan_limit_bytes = doc_scan_limit_bytes

    def resolve_path(self, path_hint: Optional[str]) -> Optional[Path]:
        """Find the file: the exact path first, then each upload dir by basename."""
        if not path_hint:
            return None

        path = Path(path_hint)
        if path.is_file():
            return path

        name = path.name
        for directory in self.search_dirs:
            candidate = directory / name
            if candidate.is_file():
                logger.info(f"Resolved {path_hint} to {candidate}")
                return candidate

        logger.warning(f"Resume file not found: {path_hint} (searched {len(self.search_dirs)} upload dirs)")
        return None

    def extract(self, path_hint: Optional[str]) -> Optional[str]:
        """Return the normalized text of the file, or None."""
        document = self.extract_document(path_hint)
        return document.text if document else None

    def extract_document(self, path_hint: Optional[str]) -> Optional[ExtractedDocument]:
        """Extract text with provenance.

        Args:
            path_hint: Stored path, URL path or bare filename

        Returns:
            ExtractedDocument, or None when the file is missing, unsupported or empty

        Raises:
            OSError: The file exists but could not be read
        """
        path = self.resolve_path(path_hint)
        if path is None:
            return None

        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_FORMATS:
            logger.warning(f"Unsupported resume format: {ext} ({path})")
            return None

        data = path.read_bytes()
        logger.info(f"Extracting text from {path} ({len(data)} bytes)")

        if ext == '.pdf':
            result = self._extract_pdf(data)
        elif ext == '.docx':
            result = self._extract_docx(data)
        elif ext == '.doc':
            result = self._extract_doc(data)
        else:
            result = self._extract_txt(data)

        if result is None:
            logger.warning(f"No text could be extracted from {path}")
            return None

        text, method, low_confidence = result
        logger.info(f"Extracted {len(text)} chars from {path} via {method}")
        return ExtractedDocument(
            text=text,
            format=ext.lstrip('.'),
            method=method,
            source_path=str(path),
            low_confidence=low_confidence,
        )

    # ------------------------------------------------------------------
    # PDF
    # ------------------------------------------------------------------

    def _extract_pdf(self, data: bytes):
        text = self._pdf_text(data, strict=True)
        if text:
            return text, 'pypdf', False

        text = self._pdf_text(data, strict=False, extraction_mode='layout')
        if text:
            return text, 'pypdf_relaxed', False

        text = self._scan_pdf_runs(data)
        if text:
            return text, 'byte_scan', True
        return None

    def _pdf_text(self, data: bytes, strict: bool, extraction_mode: Optional[str] = None) -> str:
        try:
            reader = PdfReader(io.BytesIO(data), strict=strict)
            pages = list(reader.pages)
        except Exception as e:
            logger.warning(f"PDF parse failed (strict={strict}): {e}")
            return ""

        pages_text = []
        for i, page in enumerate(pages):
            try:
                if extraction_mode:
                    page_text = page.extract_text(extraction_mode=extraction_mode)
                else:
                    page_text = page.extract_text()
            except Exception as e:
                logger.warning(f"Failed to extract text from page {i + 1}: {e}")
                continue
            if page_text and page_text.strip():
                pages_text.append(page_text)

        return normalize_whitespace("\n".join(pages_text))

    def _scan_pdf_runs(self, data: bytes) -> Optional[str]:
        raw = data.decode('latin-1')
        runs = []
        for line in raw.splitlines():
            for run in _PRINTABLE_RUN_RE.findall(line):
                run = run.strip()
                if len(run) >= 4 and not _PDF_SYNTAX_RE.search(run):
                    runs.append(run)
        text = normalize_whitespace("\n".join(runs))
        return text if len(text) > self.min_scan_chars else None

    # ------------------------------------------------------------------
    # Word
    # ------------------------------------------------------------------

    def _extract_docx(self, data: bytes):
        text = self._docx_paragraphs(data)
        if text:
            return text, 'python-docx', False

        text = self._docx_markup(data)
        if text:
            return text, 'docx_markup', False
        return None

    def _docx_paragraphs(self, data: bytes) -> str:
        try:
            doc = Document(io.BytesIO(data))
        except Exception as e:
            logger.warning(f"python-docx could not open document: {e}")
            return ""

        paragraphs = [para.text.strip() for para in doc.paragraphs if para.text.strip()]

        # Also extract from tables (common in resumes)
        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    paragraphs.append(' '.join(row_texts))

        return normalize_whitespace('\n'.join(paragraphs))

    def _docx_markup(self, data: bytes) -> str:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                markup = archive.read('word/document.xml')
        except (zipfile.BadZipFile, KeyError) as e:
            logger.warning(f"DOCX package unreadable: {e}")
            return ""

        soup = BeautifulSoup(markup, 'html.parser')
        paragraphs = soup.find_all('w:p')
        if paragraphs:
            text = '\n'.join(p.get_text('') for p in paragraphs)
        else:
            text = soup.get_text(' ')
        return normalize_whitespace(text)

    def _extract_doc(self, data: bytes):
        raw = data[:self.doc_scan_limit_bytes].decode('latin-1')
        text = normalize_whitespace(_NON_PRINTABLE_RE.sub(' ', raw))
        if len(text) > self.min_scan_chars:
            logger.warning("Legacy .doc text comes from a byte scan and may be incomplete")
            return text, 'byte_scan', True
        return None

    def _extract_txt(self, data: bytes):
        text = normalize_whitespace(data.decode('utf-8', errors='replace'))
        if text:
            return text, 'text', False
        return None
