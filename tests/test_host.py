"""Tests for Host wiring and end-to-end runs."""

import asyncio

from entity_to_model import create_host
from entity_to_model.analysis import EntityToModelAnalyzer, Severity
from entity_to_model.codefix import EntityToModelCodeFixProvider
from entity_to_model.config import AnalyzerConfig
from entity_to_model.host import Host
from entity_to_model.workspace import Destination, Document, Workspace


class _NonReentrantAnalyzer(EntityToModelAnalyzer):
    supports_concurrent_execution = False


class TestRegistration:
    def test_create_host_registers_both(self):
        host = create_host()
        assert len(host.analyzers) == 1
        assert len(host.providers) == 1
        assert isinstance(host.providers[0], EntityToModelCodeFixProvider)

    def test_create_host_applies_config(self):
        host = create_host(AnalyzerConfig(severity="hidden"))
        assert host.analyzers[0].severity is Severity.HIDDEN

    def test_empty_host(self):
        host = Host()
        assert host.analyzers == ()
        assert host.analyze([Document("a.py", "@Table('x')\nclass A:\n    pass\n")]) == []


class TestAnalyze:
    """Analysis over many documents."""

    def _documents(self):
        return [
            Document(f"app/e{i}.py", f"@Table('t{i}')\nclass E{i}:\n    id: int\n", f"app.e{i}")
            for i in range(6)
        ]

    def test_findings_in_document_order(self):
        findings = create_host().analyze(self._documents())
        assert [f.arguments[0] for f in findings] == [f"E{i}" for i in range(6)]

    def test_parallel_matches_sequential(self):
        host = create_host(AnalyzerConfig(max_workers=3))
        documents = self._documents()
        assert host.analyze(documents) == host.analyze(documents, parallel=False)

    def test_non_reentrant_analyzer_runs_sequentially(self):
        host = Host(max_workers=4)
        host.register_analyzer(_NonReentrantAnalyzer())
        findings = host.analyze(self._documents())
        assert len(findings) == 6

    def test_unparseable_document_is_skipped(self, simple_customer):
        host = create_host()
        documents = [Document("bad.py", "x = '\ud800'\n"), Document("app/entities.py", simple_customer)]
        findings = host.analyze(documents, parallel=False)
        assert [f.location.path for f in findings] == ["app/entities.py"]


class TestApplyFix:
    """Analyze, then fix, through the host."""

    def test_end_to_end(self, make_workspace, rich_customer):
        host = create_host()
        workspace = make_workspace(rich_customer)
        findings = host.analyze(workspace.documents())
        assert len(findings) == 1

        changed = asyncio.run(host.apply_fix(findings[0], workspace))
        model = changed.find_document("CustomerModel.py")
        assert model is not None
        assert model.text.splitlines()[-4:] == [
            "    id: int",
            "    name: str",
            "    email: Optional[str] = None",
            "    created_at: datetime",
        ]

    def test_generated_model_is_not_reported(self, make_workspace, simple_customer):
        """The generated module carries @generated and is skipped."""
        host = create_host()
        workspace = make_workspace(simple_customer)
        finding = host.analyze(workspace.documents())[0]
        changed = asyncio.run(host.apply_fix(finding, workspace))

        findings = host.analyze(changed.documents())
        assert [f.location.path for f in findings] == ["app/entities.py"]

    def test_unknown_document(self, make_workspace, simple_customer):
        host = create_host()
        workspace = make_workspace(simple_customer)
        finding = host.analyze(workspace.documents())[0]
        other = make_workspace(simple_customer, name="other.py")

        assert host.code_actions_for(finding, other) == []
        assert asyncio.run(host.apply_fix(finding, other)) is other

    def test_hidden_severity_still_offers_fix(self, make_workspace, simple_customer):
        host = create_host(AnalyzerConfig(severity="hidden"))
        workspace = make_workspace(simple_customer)
        finding = host.analyze(workspace.documents())[0]
        assert finding.severity is Severity.HIDDEN
        assert len(host.code_actions_for(finding, workspace)) == 1


class TestDocumentRouting:
    """Fix requests go back to the document that was analyzed."""

    def _workspace(self):
        customers = Document(
            "entities.py", "@Table('customers')\nclass Customer:\n    id: int\n", "a.entities"
        )
        orders = Document(
            "entities.py", "@Table('orders')\nclass Order:\n    number: str\n", "b.entities"
        )
        return Workspace(
            (
                Destination("A", (customers,)),
                Destination("B", (orders,)),
                Destination("Logic.Models"),
            )
        )

    def test_findings_carry_document_id(self):
        workspace = self._workspace()
        findings = create_host().analyze(workspace.documents())
        ids = [d.id for d in workspace.documents()]
        assert [f.location.document_id for f in findings] == ids

    def test_same_name_in_two_destinations(self):
        """The second entities.py generates its own model."""
        host = create_host()
        workspace = self._workspace()
        order_finding = host.analyze(workspace.documents())[1]
        assert order_finding.arguments == ("Order",)

        changed = asyncio.run(host.apply_fix(order_finding, workspace))
        models = changed.destinations[2].documents
        assert [d.name for d in models] == ["OrderModel.py"]
        assert "    number: str\n" in models[0].text

    def test_finding_without_id_uses_name(self, make_workspace, simple_customer):
        host = create_host()
        workspace = make_workspace(simple_customer)
        document = workspace.find_document("app/entities.py")
        finding = EntityToModelAnalyzer().analyze(document.parse())[0]
        assert finding.location.document_id is None
        assert len(host.code_actions_for(finding, workspace)) == 1
