"""Shared test fixtures for entity-to-model tests."""

import pytest

from entity_to_model.syntax import TreeSitterNormalizer
from entity_to_model.workspace import Destination, Document, Workspace

SIMPLE_CUSTOMER = '''\
@Table("Customers")
class Customer:
    id: int
    name: str
'''

RICH_CUSTOMER = '''\
"""Customer persistence entity."""

from datetime import datetime
from typing import Annotated, ClassVar, Optional

from sqlalchemy import Column, Integer, String

from orm import Index, Table


@Table("customers")
@Index("ix_customer_email")
class Customer:
    """A customer row."""

    __tablename__ = "customers"

    id: Annotated[int, Column(Integer, primary_key=True)]
    name: str = Column(String(100))
    email: Optional[str] = None
    created_at: datetime
    _secret: str
    registry: ClassVar[list[str]] = []

    def display_name(self) -> str:
        return self.name


class Helper:
    pass
'''


@pytest.fixture
def normalizer():
    """A tree-sitter normalizer."""
    return TreeSitterNormalizer()


@pytest.fixture
def parse(normalizer):
    """Parse source text into a SourceUnit."""

    def _parse(source, path="app/entities.py", module_name="app.entities"):
        return normalizer.parse_source(source, path, module_name)

    return _parse


@pytest.fixture
def simple_customer():
    """Scenario entity: Customer with id and name."""
    return SIMPLE_CUSTOMER


@pytest.fixture
def rich_customer():
    """Entity with Annotated metadata, ORM defaults, private and class-level members."""
    return RICH_CUSTOMER


@pytest.fixture
def make_workspace():
    """Workspace with one entity document and, optionally, a Logic.Models destination."""

    def _make(source, with_models=True, name="app/entities.py", module_name="app.entities"):
        entities = Destination(
            name="App.Entities",
            documents=(Document(name=name, text=source, module_name=module_name),),
        )
        destinations = [entities]
        if with_models:
            destinations.append(Destination(name="Logic.Models"))
        return Workspace(destinations=tuple(destinations))

    return _make
