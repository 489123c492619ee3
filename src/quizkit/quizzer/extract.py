"""Turn uploaded document bytes into plain text."""

from __future__ import annotations

import importlib
import io
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Optional

from .errors import DependencyError, ExtractionFailure

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "SourceDocument",
    "ExtractorDependencies",
    "Extractor",
    "build_extractor",
    "decode_plain_text",
]

_DOCX_EXTENSIONS: frozenset[str] = frozenset({"docx"})
_PDF_EXTENSIONS: frozenset[str] = frozenset({"pdf"})
_TEXT_EXTENSIONS: frozenset[str] = frozenset({"txt", "md", "text"})

SUPPORTED_EXTENSIONS: frozenset[str] = (
    _DOCX_EXTENSIONS | _PDF_EXTENSIONS | _TEXT_EXTENSIONS
)

Backend = Callable[[bytes], str]
Extractor = Callable[["SourceDocument"], str]


@dataclass(frozen=True)
class SourceDocument:
    """Raw bytes of a user supplied document and its original file name."""

    name: str
    data: bytes

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class ExtractorDependencies:
    """Callable seams for format-specific text extraction."""

    docx: Backend
    pdf: Backend
    text: Backend


def build_extractor(
    dependencies: Optional[ExtractorDependencies] = None,
) -> Extractor:
    """Return a callable extracting text from a :class:`SourceDocument`.

    Backends are resolved lazily so a missing optional library only fails
    when a document of that format is actually used.
    """
    deps = dependencies or ExtractorDependencies(
        docx=_extract_docx,
        pdf=_extract_pdf,
        text=decode_plain_text,
    )

    def extract(document: SourceDocument) -> str:
        extension = document.extension
        if extension in _DOCX_EXTENSIONS:
            backend = deps.docx
        elif extension in _PDF_EXTENSIONS:
            backend = deps.pdf
        elif extension in _TEXT_EXTENSIONS:
            backend = deps.text
        else:
            raise ExtractionFailure(
                f"Unsupported document type '{document.name}'. Expected one "
                f"of: {', '.join(sorted(SUPPORTED_EXTENSIONS))}."
            )
        try:
            return backend(document.data)
        except ExtractionFailure:
            raise
        except Exception as exc:
            raise ExtractionFailure(
                f"Could not read '{document.name}': {exc}"
            ) from exc

    return extract


def decode_plain_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ExtractionFailure(f"Document is not valid UTF-8: {exc}") from exc


def _extract_docx(data: bytes) -> str:
    docx = _import_module("docx", "Document", package="python-docx")
    document = docx.Document(io.BytesIO(data))
    lines = [paragraph.text for paragraph in document.paragraphs]
    # Tables come after body paragraphs; cell order is row-major.
    for table in document.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(lines)


def _extract_pdf(data: bytes) -> str:
    pypdf = _import_module("pypdf", "PdfReader")
    reader = pypdf.PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def _import_module(
    module: str, required_attribute: str, *, package: Optional[str] = None
):
    try:
        imported = importlib.import_module(module)
    except ImportError as exc:
        raise DependencyError(
            f"Optional dependency '{module}' is required to read this "
            f"document. Install it with `pip install {package or module}`."
        ) from exc
    if not hasattr(imported, required_attribute):
        raise DependencyError(
            f"Dependency '{module}' is installed but missing the "
            f"'{required_attribute}' attribute. Upgrade or reinstall the "
            "package."
        )
    return imported
