"""Finding and rule descriptor models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..syntax.models import SourceSpan


class Severity(Enum):
    """How prominently a host should surface a finding.

    HIDDEN findings get no visual marker but still offer their code fix.
    """

    HIDDEN = "hidden"
    WARNING = "warning"


@dataclass(frozen=True)
class Location:
    """Where a finding applies.

    Attributes:
        path: Document name, as shown to users
        span: Source span of the declaration
        document_id: Id of the analyzed document; names are only unique
            within a destination, so hosts look documents up by id
    """

    path: str
    span: SourceSpan
    document_id: str | None = None

    def __str__(self) -> str:
        return f"{self.path}:{self.span.start_line}:{self.span.start_column + 1}"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description of a rule.

    Attributes:
        id: Stable identifier, shared by findings and the fixes that handle them
        title: Short rule title
        message_format: str.format template; arguments come from the finding
        category: Rule category
        default_severity: Severity findings are reported with
        enabled_by_default: Whether hosts run the rule without opt-in
        description: Longer rule explanation
    """

    id: str
    title: str
    message_format: str
    category: str
    default_severity: Severity
    enabled_by_default: bool = True
    description: str = ""

    def with_severity(self, severity: Severity) -> DiagnosticDescriptor:
        return replace(self, default_severity=severity)


@dataclass(frozen=True)
class Finding:
    """A reported observation about a declaration.

    Attributes:
        id: Rule identifier
        severity: Severity the finding was reported with
        location: Full span of the declaration
        message: Formatted message
        arguments: Values substituted into the descriptor's message format
    """

    id: str
    severity: Severity
    location: Location
    message: str
    arguments: tuple[str, ...] = ()

    @classmethod
    def create(
        cls, descriptor: DiagnosticDescriptor, location: Location, *arguments: str
    ) -> Finding:
        return cls(
            id=descriptor.id,
            severity=descriptor.default_severity,
            location=location,
            message=descriptor.message_format.format(*arguments),
            arguments=tuple(arguments),
        )
