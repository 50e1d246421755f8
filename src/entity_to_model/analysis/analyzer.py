"""ENTITY_TO_MODEL - classes decorated with @Table should get a model class.

Scope: CLASS
Severity: configurable (hidden | warning)

The analyzer is pure: it reads declarations and produces findings. It keeps
no state between calls, so hosts may run it on many declarations and many
documents at the same time.
"""

from __future__ import annotations

from typing import Callable

from ..config import AnalyzerConfig
from ..logging_config import get_logger
from ..syntax.models import SourceUnit, TypeDeclaration
from .diagnostics import DiagnosticDescriptor, Finding, Location, Severity
from .markers import is_entity

logger = get_logger(__name__)

DIAGNOSTIC_ID = "EntityToModel"
CATEGORY = "CodeGeneration"

RULE = DiagnosticDescriptor(
    id=DIAGNOSTIC_ID,
    title="Entity class detected",
    message_format="Entity class '{0}' should have a corresponding model class",
    category=CATEGORY,
    default_severity=Severity.WARNING,
    enabled_by_default=True,
    description=(
        "This class appears to be an ORM entity. "
        "Consider generating a model class without ORM markers."
    ),
)


class EntityToModelAnalyzer:
    """Reports classes that carry the Table marker."""

    supports_concurrent_execution = True
    analyze_generated_code = False

    def __init__(self, severity: Severity = Severity.WARNING) -> None:
        self.rule = RULE.with_severity(severity)

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> EntityToModelAnalyzer:
        return cls(Severity(config.severity))

    @property
    def supported_diagnostics(self) -> tuple[DiagnosticDescriptor, ...]:
        return (self.rule,)

    @property
    def severity(self) -> Severity:
        return self.rule.default_severity

    def report(self, decl: TypeDeclaration, document_id: str | None = None) -> Finding | None:
        """Finding for an entity declaration, None for anything else."""
        if not is_entity(decl):
            return None
        return Finding.create(self.rule, Location(decl.path, decl.span, document_id), decl.name)

    def analyze_class_attributes(
        self,
        decl: TypeDeclaration,
        report: Callable[[Finding], None],
        document_id: str | None = None,
    ) -> None:
        """Per-declaration callback for a host traversal."""
        finding = self.report(decl, document_id)
        if finding is not None:
            report(finding)

    def analyze(self, unit: SourceUnit, document_id: str | None = None) -> list[Finding]:
        """Visit every class of a module and collect findings in source order.

        `document_id` is recorded on every finding's location so a fix
        request can be routed back to the analyzed document.
        """
        if unit.is_generated and not self.analyze_generated_code:
            logger.debug(f"Skipping generated module {unit.path}")
            return []

        findings: list[Finding] = []
        for decl in unit.declarations:
            self.analyze_class_attributes(decl, findings.append, document_id)
        return findings
