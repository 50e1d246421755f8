"""Entity detection and finding reporting."""

from .analyzer import CATEGORY, DIAGNOSTIC_ID, RULE, EntityToModelAnalyzer
from .diagnostics import DiagnosticDescriptor, Finding, Location, Severity
from .markers import TABLE_MARKER, is_entity

__all__ = [
    "CATEGORY",
    "DIAGNOSTIC_ID",
    "RULE",
    "TABLE_MARKER",
    "DiagnosticDescriptor",
    "EntityToModelAnalyzer",
    "Finding",
    "Location",
    "Severity",
    "is_entity",
]
