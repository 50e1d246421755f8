"""Placement: which destination receives the generated model."""

from __future__ import annotations

from typing import Iterable

from ..workspace import Destination
from .synthesizer import TARGET_NAMESPACE


def resolve_destination(
    destinations: Iterable[Destination], name: str = TARGET_NAMESPACE
) -> Destination | None:
    """First destination whose name equals `name` exactly, else None."""
    for destination in destinations:
        if destination.name == name:
            return destination
    return None
