"""
entity-to-model - model classes for ORM entities

Finds Python classes decorated with @Table and generates a companion
`<Name>Model` class holding the entity's public data attributes without
ORM markers, placed in the "Logic.Models" destination.
"""

__version__ = "0.1.0"

from .analysis import DIAGNOSTIC_ID, EntityToModelAnalyzer, Finding, Severity, is_entity
from .codefix import EntityToModelCodeFixProvider, project_members, render, synthesize
from .config import AnalyzerConfig, load_config
from .host import Host, create_host
from .workspace import Destination, Document, Workspace

__all__ = [
    "create_host",  # Main entry point
    "Host",
    "AnalyzerConfig",
    "load_config",
    "EntityToModelAnalyzer",
    "EntityToModelCodeFixProvider",
    "DIAGNOSTIC_ID",
    "Finding",
    "Severity",
    "is_entity",
    "project_members",
    "synthesize",
    "render",
    "Document",
    "Destination",
    "Workspace",
]
