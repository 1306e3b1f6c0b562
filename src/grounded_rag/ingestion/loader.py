"""Document sources — page-level text for the ingestion pipeline."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import TextLoader
from pypdf import PdfReader

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = frozenset({".txt", ".md"})
PDF_SUFFIXES = frozenset({".pdf"})


class SourceDocument:
    """A named document made of ordered pages.

    Pages are numbered from 1.  Subclasses may extract page text lazily,
    so :meth:`page_text` is where per-page extraction errors surface.

    Parameters
    ----------
    doc_id:
        Identifier recorded on every chunk (usually the filename).
    pages:
        Page texts, in order.
    """

    def __init__(self, doc_id: str, pages: Sequence[str] = ()) -> None:
        self.doc_id = doc_id
        self._pages = list(pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def page_text(self, page_number: int) -> str:
        """Return the plain text of 1-based *page_number*."""
        self._check_page(page_number)
        return self._pages[page_number - 1]

    def _check_page(self, page_number: int) -> None:
        if not 1 <= page_number <= self.page_count:
            raise IndexError(f"{self.doc_id} has no page {page_number} (pages: {self.page_count})")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(doc_id={self.doc_id!r}, pages={self.page_count})"


class PdfDocument(SourceDocument):
    """A PDF whose page text is extracted on demand with ``pypdf``.

    Opening an unreadable file raises immediately; a page whose text
    cannot be extracted only fails the :meth:`page_text` call for it.
    """

    def __init__(self, path: str | Path) -> None:
        path = Path(path)
        super().__init__(path.name)
        self.path = path
        self._reader = PdfReader(str(path))

    @property
    def page_count(self) -> int:
        return len(self._reader.pages)

    def page_text(self, page_number: int) -> str:
        self._check_page(page_number)
        return self._reader.pages[page_number - 1].extract_text() or ""


def load_text(path: str | Path) -> SourceDocument:
    """Load a plain-text or Markdown file as a single-page document."""
    path = Path(path)
    docs = TextLoader(str(path), encoding="utf-8").load()
    return SourceDocument(path.name, [doc.page_content for doc in docs])


class DocumentSource(ABC):
    """An enumerable collection of :class:`SourceDocument` objects."""

    @abstractmethod
    def __iter__(self) -> Iterator[SourceDocument]:
        ...


class DirectorySource(DocumentSource):
    """Every supported file under a local directory, in sorted path order.

    Parameters
    ----------
    path:
        Root directory containing source documents.
    glob:
        File-matching pattern relative to *path*.
    """

    def __init__(self, path: str | Path, glob: str = "**/*") -> None:
        self.root = Path(path)
        self.glob = glob

    def __iter__(self) -> Iterator[SourceDocument]:
        if not self.root.is_dir():
            raise FileNotFoundError(f"Document directory not found: {self.root}")

        for file in sorted(self.root.glob(self.glob)):
            if not file.is_file():
                continue
            suffix = file.suffix.lower()
            if suffix in PDF_SUFFIXES:
                yield PdfDocument(file)
            elif suffix in TEXT_SUFFIXES:
                yield load_text(file)
            else:
                logger.debug("Skipping unsupported file %s", file)
