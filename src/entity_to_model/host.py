"""Explicit host wiring for analyzers and code fix providers.

A hosting tool creates a Host at startup and registers the entry points it
wants; nothing is discovered implicitly.

Usage:
    host = create_host(load_config())
    findings = host.analyze(workspace.documents())
    for finding in findings:
        workspace = await host.apply_fix(finding, workspace)
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from .analysis.analyzer import EntityToModelAnalyzer
from .analysis.diagnostics import Finding
from .codefix.provider import CodeAction, EntityToModelCodeFixProvider
from .config import DEFAULT_CONFIG, AnalyzerConfig
from .exceptions import ParsingError
from .logging_config import get_logger
from .workspace import Document, Workspace

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


class Host:
    """Runs registered analyzers over documents and applies registered fixes."""

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._analyzers: list[EntityToModelAnalyzer] = []
        self._providers: list[EntityToModelCodeFixProvider] = []
        self._max_workers = max_workers or _DEFAULT_WORKERS

    @property
    def analyzers(self) -> tuple[EntityToModelAnalyzer, ...]:
        return tuple(self._analyzers)

    @property
    def providers(self) -> tuple[EntityToModelCodeFixProvider, ...]:
        return tuple(self._providers)

    def register_analyzer(self, analyzer: EntityToModelAnalyzer) -> None:
        self._analyzers.append(analyzer)

    def register_code_fix_provider(self, provider: EntityToModelCodeFixProvider) -> None:
        self._providers.append(provider)

    def analyze_document(self, document: Document) -> list[Finding]:
        """Findings for one document, from every registered analyzer."""
        try:
            unit = document.parse()
        except ParsingError as e:
            logger.warning(f"Skipping {document.name}: {e}")
            return []

        findings: list[Finding] = []
        for analyzer in self._analyzers:
            findings.extend(analyzer.analyze(unit, document.id))
        return findings

    def analyze(self, documents: Iterable[Document], parallel: bool = True) -> list[Finding]:
        """Findings for all documents, in document order.

        Documents are analyzed in a thread pool when every registered
        analyzer supports concurrent execution.
        """
        docs = list(documents)
        concurrent = parallel and all(a.supports_concurrent_execution for a in self._analyzers)

        if not concurrent or len(docs) < 2:
            per_document = [self.analyze_document(doc) for doc in docs]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                per_document = list(executor.map(self.analyze_document, docs))

        findings = [finding for batch in per_document for finding in batch]
        logger.debug(f"Analyzed {len(docs)} documents, {len(findings)} findings")
        return findings

    def code_actions_for(self, finding: Finding, workspace: Workspace) -> list[CodeAction]:
        """Actions every provider offers for a finding.

        The finding's document is looked up by id when the finding carries
        one, and by name otherwise.
        """
        location = finding.location
        if location.document_id is not None:
            document = workspace.get_document(location.document_id)
        else:
            document = workspace.find_document(location.path)
        if document is None:
            logger.debug(f"No document for {location} in workspace")
            return []

        actions: list[CodeAction] = []
        for provider in self._providers:
            if provider.can_fix(finding):
                actions.extend(provider.fix_findings(document, workspace, (finding,)))
        return actions

    async def apply_fix(self, finding: Finding, workspace: Workspace) -> Workspace:
        """Apply the first offered action; the workspace is returned unchanged if none."""
        actions = self.code_actions_for(finding, workspace)
        if not actions:
            return workspace
        return await actions[0].apply()


def create_host(config: AnalyzerConfig = DEFAULT_CONFIG) -> Host:
    """Host with the EntityToModel analyzer and code fix registered."""
    host = Host(max_workers=config.max_workers)
    host.register_analyzer(EntityToModelAnalyzer.from_config(config))
    host.register_code_fix_provider(EntityToModelCodeFixProvider(config))
    return host
