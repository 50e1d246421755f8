"""Model generation: projection, synthesis, placement and the code fix."""

from .imports import canonical_imports, required_imports, resolve_relative
from .placement import resolve_destination
from .projector import is_projectable, project_members, strip_markers
from .provider import CodeAction, CodeFixContext, DeclineReason, EntityToModelCodeFixProvider
from .synthesizer import (
    MODEL_SUFFIX,
    TARGET_NAMESPACE,
    UNIT_EXTENSION,
    CompilationUnitText,
    SynthesizedDeclaration,
    model_name,
    render,
    synthesize,
    synthesize_unit,
)

__all__ = [
    "MODEL_SUFFIX",
    "TARGET_NAMESPACE",
    "UNIT_EXTENSION",
    "CodeAction",
    "CodeFixContext",
    "CompilationUnitText",
    "DeclineReason",
    "EntityToModelCodeFixProvider",
    "SynthesizedDeclaration",
    "canonical_imports",
    "is_projectable",
    "model_name",
    "project_members",
    "render",
    "required_imports",
    "resolve_destination",
    "resolve_relative",
    "strip_markers",
    "synthesize",
    "synthesize_unit",
]
