"""Code fix: generate a model class for a reported entity.

Applying the fix never raises for expected conditions. When there is no
class at the finding, no destination to put the model in, or the class
cannot be resolved, the fix declines: no action is offered, or the action
returns the workspace it was given. The reason is logged at DEBUG.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Awaitable, Callable, Iterable

from ..analysis.analyzer import DIAGNOSTIC_ID
from ..analysis.diagnostics import Finding, Location
from ..config import DEFAULT_CONFIG, AnalyzerConfig
from ..logging_config import get_logger
from ..syntax.models import TypeDeclaration
from ..workspace import Document, Workspace
from .placement import resolve_destination
from .projector import project_members
from .synthesizer import render, synthesize

logger = get_logger(__name__)


class DeclineReason(Enum):
    """Why a fix request produced no change."""

    NO_APPLICABLE_DECLARATION = "no class declaration at the finding location"
    UNRESOLVED_SYMBOL = "class declaration could not be resolved"
    NO_DESTINATION = "no destination for generated models"
    UP_TO_DATE = "model already matches the entity"


@dataclass(frozen=True)
class CodeAction:
    """A fix offered to the user; `apply()` computes the changed workspace."""

    title: str
    equivalence_key: str
    create_changed_workspace: Callable[[], Awaitable[Workspace]] = field(repr=False, compare=False)

    async def apply(self) -> Workspace:
        return await self.create_changed_workspace()


@dataclass(frozen=True)
class CodeFixContext:
    """A fix request: the findings in one document plus the current workspace."""

    document: Document
    workspace: Workspace
    findings: tuple[Finding, ...]


class EntityToModelCodeFixProvider:
    """Offers "Generate model class" for EntityToModel findings."""

    fixable_diagnostic_ids: tuple[str, ...] = (DIAGNOSTIC_ID,)

    TITLE = "Generate model class"
    EQUIVALENCE_KEY = "GenerateModel"

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def can_fix(self, finding: Finding) -> bool:
        return finding.id in self.fixable_diagnostic_ids

    def register_code_fixes(self, context: CodeFixContext) -> list[CodeAction]:
        """Code actions for the first fixable finding in the context."""
        applicable = [f for f in context.findings if self.can_fix(f)]
        if not applicable:
            return []
        finding = applicable[0]

        unit = context.document.parse()
        declaration = unit.declaration_at(finding.location.span.start)
        if declaration is None:
            self._decline(finding.location, DeclineReason.NO_APPLICABLE_DECLARATION)
            return []

        return [
            CodeAction(
                title=self.TITLE,
                equivalence_key=self.EQUIVALENCE_KEY,
                create_changed_workspace=partial(
                    self.generate_model, context.document, declaration, context.workspace
                ),
            )
        ]

    async def generate_model(
        self, document: Document, declaration: TypeDeclaration, workspace: Workspace
    ) -> Workspace:
        """Build the model module and add it to the target destination.

        Returns the input workspace object itself when the fix declines.
        """
        target = resolve_destination(workspace.destinations, self.config.target_namespace)
        if target is None:
            self._decline(document.name, DeclineReason.NO_DESTINATION)
            return workspace

        semantic_model = await document.get_semantic_model()
        symbol = semantic_model.get_declared_symbol(declaration)
        if symbol is None:
            self._decline(document.name, DeclineReason.UNRESOLVED_SYMBOL)
            return workspace

        model = synthesize(
            symbol.name,
            project_members(declaration),
            source=semantic_model.unit,
            namespace=target.name,
            suffix=self.config.model_suffix,
        )
        text = render(model)
        module_name = f"{target.name}.{model.name}"

        existing = target.find_document(model.file_name)
        if self.config.replace_existing_model and existing is not None:
            if existing.text == text:
                self._decline(document.name, DeclineReason.UP_TO_DATE)
                return workspace
            updated = target.replace_document(existing, existing.with_text(text))
            logger.info(f"Updated {model.file_name} in {target.name} from {symbol.qualified_name}")
        else:
            updated = target.add_document(model.file_name, text, module_name)
            logger.info(f"Generated {model.file_name} in {target.name} from {symbol.qualified_name}")

        return workspace.replace_destination(target, updated)

    def fix_findings(
        self, document: Document, workspace: Workspace, findings: Iterable[Finding]
    ) -> list[CodeAction]:
        return self.register_code_fixes(CodeFixContext(document, workspace, tuple(findings)))

    def _decline(self, where: Location | str, reason: DeclineReason) -> None:
        logger.debug(f"Generate model declined for {where}: {reason.value}")
