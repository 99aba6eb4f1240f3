"""Visibility polarisation metadata."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VisibilityPol:
    """A visibility polarisation such as "XX" or "XY"."""

    polarisation: str

    def __repr__(self) -> str:
        return f"pol={self.polarisation}"


def populate_visibility_pols() -> list[VisibilityPol]:
    """Return the visibility polarisations of the MWA, in order."""
    return [VisibilityPol(p) for p in ("XX", "XY", "YX", "YY")]