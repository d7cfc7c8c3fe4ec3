from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from preprocess import extract_article, read_document, sanitize
from fingerprint.errors import EmptyDocument, MissingCandidate

logger = logging.getLogger(__name__)

NO_DOCUMENT_MSG = "Document content must be set. Use from_text() or from_file() to set document content"


@dataclass(frozen=True)
class Document:
    raw: str
    sanitized: str

    @classmethod
    def from_text(cls, text: str) -> "Document":
        doc = cls(raw=text, sanitized=sanitize(text))
        logger.debug("document loaded: raw=%d sanitized=%d chars", len(doc.raw), len(doc.sanitized))
        return doc


class Fingerprint(ABC):
    """
    Capability shared by every fingerprinting strategy: load a document, then
    generate a string fingerprint for it or verify a candidate against it.
    Loading replaces the document; nothing else is kept between calls.

    from_html is an extra loader on top of from_file/from_text: it feeds the
    article text trafilatura extracts through from_text.
    """

    def __init__(self):
        self.document: Optional[Document] = None

    def from_file(self, path: str) -> "Fingerprint":
        return self.from_text(read_document(path))

    def from_text(self, text: str) -> "Fingerprint":
        self.document = Document.from_text(text)
        return self

    def from_html(self, html_str: str) -> "Fingerprint":
        return self.from_text(extract_article(html_str))

    @abstractmethod
    def generate(self, config: Any = None) -> str:
        ...

    @abstractmethod
    def verify(self, candidate: str, config: Any = None) -> bool:
        ...

    def _require_document(self) -> Document:
        if self.document is None or not self.document.raw:
            raise EmptyDocument(NO_DOCUMENT_MSG)
        return self.document

    @staticmethod
    def _require_candidate(candidate: Optional[str]) -> str:
        if not candidate:
            raise MissingCandidate("Fingerprint must be provided")
        return candidate
