"""Immutable workspace: documents grouped into named destinations.

A Workspace is a snapshot. Adding or replacing a document returns a new
Workspace that shares every untouched Destination and Document with the old
one; nothing is mutated in place, so concurrent fix requests over the same
snapshot cannot interfere with each other.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterator

from .logging_config import get_logger
from .syntax.models import SourceUnit, TypeDeclaration
from .syntax.normalizer import TreeSitterNormalizer

logger = get_logger(__name__)


def _new_document_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Symbol:
    """A resolved class declaration.

    Attributes:
        name: Class name
        qualified_name: Module-qualified dotted name, or the in-module
            qualified name when the module name is unknown
        path: Document path
    """

    name: str
    qualified_name: str
    path: str


class SemanticModel:
    """Declaration lookups over one parsed document."""

    def __init__(self, unit: SourceUnit) -> None:
        self.unit = unit

    def get_declared_symbol(self, decl: TypeDeclaration) -> Symbol | None:
        """Resolve a declaration to its symbol.

        Returns None when the declaration is not a class of this document
        (matched by span and name) or when its subtree has syntax errors.
        """
        for candidate in self.unit.declarations:
            if candidate.span == decl.span and candidate.name == decl.name:
                if candidate.has_error or not candidate.name:
                    return None
                qualified = candidate.qualified_name
                if self.unit.module_name:
                    qualified = f"{self.unit.module_name}.{qualified}"
                return Symbol(name=candidate.name, qualified_name=qualified, path=self.unit.path)
        return None


@dataclass(frozen=True)
class Document:
    """A named source text.

    Attributes:
        name: Document path within its destination (also used as finding path)
        text: Python source
        module_name: Dotted module name, when known
        id: Unique identity; two documents may share a name
    """

    name: str
    text: str
    module_name: str | None = None
    id: str = field(default_factory=_new_document_id)

    def parse(self) -> SourceUnit:
        """Parse the document synchronously."""
        return TreeSitterNormalizer().parse_source(self.text, self.name, self.module_name)

    async def get_semantic_model(self) -> SemanticModel:
        """Parse in a worker thread and wrap the result.

        Cancelling the awaiting task abandons the result.
        """
        unit = await asyncio.get_running_loop().run_in_executor(None, self.parse)
        return SemanticModel(unit)

    def with_text(self, text: str) -> Document:
        return replace(self, text=text)


@dataclass(frozen=True)
class Destination:
    """A named group of documents that can receive generated artifacts."""

    name: str
    documents: tuple[Document, ...] = ()

    def find_document(self, name: str) -> Document | None:
        for document in self.documents:
            if document.name == name:
                return document
        return None

    def add_document(self, name: str, text: str, module_name: str | None = None) -> Destination:
        document = Document(name=name, text=text, module_name=module_name)
        return replace(self, documents=(*self.documents, document))

    def replace_document(self, old: Document, new: Document) -> Destination:
        return replace(
            self, documents=tuple(new if doc.id == old.id else doc for doc in self.documents)
        )


@dataclass(frozen=True)
class Workspace:
    """The full set of destinations a fix can see."""

    destinations: tuple[Destination, ...] = ()

    def documents(self) -> Iterator[Document]:
        for destination in self.destinations:
            yield from destination.documents

    def find_document(self, name: str) -> Document | None:
        """First document with the given name across all destinations."""
        for document in self.documents():
            if document.name == name:
                return document
        return None

    def get_document(self, document_id: str) -> Document | None:
        for document in self.documents():
            if document.id == document_id:
                return document
        return None

    def replace_destination(self, old: Destination, new: Destination) -> Workspace:
        """New workspace with `old` (matched by identity) swapped for `new`."""
        return Workspace(
            destinations=tuple(new if dest is old else dest for dest in self.destinations)
        )
