"""Four-vectors in (px, py, pz, E) form and a simple lepton record."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

# Pseudorapidity reported for a vector with no transverse momentum.
_ETA_AT_ZERO_PT = 10e10


def _phi_mpi_pi(angle: float) -> float:
    """Map an angle onto the interval [-pi, pi)."""
    if math.isnan(angle) or math.isinf(angle):
        return angle
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped < 0.0:
        wrapped += 2.0 * math.pi
    result = wrapped - math.pi
    return -math.pi if result >= math.pi else result


@dataclass(frozen=True)
class LorentzVector:
    """An immutable Lorentz four-vector."""

    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    e: float = 0.0

    def pt(self) -> float:
        """Transverse momentum."""
        return math.hypot(self.px, self.py)

    def p(self) -> float:
        """Magnitude of the three-momentum."""
        return math.sqrt(self.px**2 + self.py**2 + self.pz**2)

    def eta(self) -> float:
        """Pseudorapidity."""
        pt = self.pt()
        if pt > 0.0:
            return math.asinh(self.pz / pt)
        if self.pz == 0.0:
            return 0.0
        return _ETA_AT_ZERO_PT if self.pz > 0.0 else -_ETA_AT_ZERO_PT

    def phi(self) -> float:
        """Azimuthal angle in (-pi, pi]; zero for a vector along the beam."""
        if self.px == 0.0 and self.py == 0.0:
            return 0.0
        return math.atan2(self.py, self.px)

    def m(self) -> float:
        """Invariant mass; negative when the vector is space-like."""
        mass2 = self.e**2 - (self.px**2 + self.py**2 + self.pz**2)
        return math.sqrt(mass2) if mass2 >= 0.0 else -math.sqrt(-mass2)

    def rotate_z(self, angle: float) -> LorentzVector:
        """Return this vector rotated about the z axis by ``angle``."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        return LorentzVector(
            self.px * cos_a - self.py * sin_a,
            self.px * sin_a + self.py * cos_a,
            self.pz,
            self.e,
        )

    def delta_phi(self, other: LorentzVector) -> float:
        """Azimuthal separation from ``other`` in [-pi, pi)."""
        return _phi_mpi_pi(self.phi() - other.phi())

    def __add__(self, other: object) -> LorentzVector:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        return LorentzVector(
            self.px + other.px,
            self.py + other.py,
            self.pz + other.pz,
            self.e + other.e,
        )


def _momentum(pt: float, eta: float, phi: float) -> tuple[float, float, float]:
    pt = abs(pt)
    return pt * math.cos(phi), pt * math.sin(phi), pt * math.sinh(eta)


def from_pt_eta_phi_m(pt: float, eta: float, phi: float, m: float) -> LorentzVector:
    """Build a vector from transverse momentum, pseudorapidity, azimuth and mass."""
    px, py, pz = _momentum(pt, eta, phi)
    p2 = px**2 + py**2 + pz**2
    energy = math.sqrt(p2 + m**2) if m >= 0.0 else math.sqrt(max(p2 - m**2, 0.0))
    return LorentzVector(px, py, pz, energy)


def from_pt_eta_phi_e(pt: float, eta: float, phi: float, e: float) -> LorentzVector:
    """Build a vector from transverse momentum, pseudorapidity, azimuth and energy."""
    px, py, pz = _momentum(pt, eta, phi)
    return LorentzVector(px, py, pz, e)


@dataclass
class Lepton:
    """A reconstructed lepton with its charge derived from the PDG id."""

    bacon_obj: Any = None
    pdg_id: int = 0
    q: int = field(init=False)
    iso: float = field(init=False, default=-1.0)
    p4: LorentzVector = field(init=False, default_factory=LorentzVector)
    fsrp4: LorentzVector = field(init=False, default_factory=LorentzVector)

    def __post_init__(self) -> None:
        if self.bacon_obj is None:
            self.q = 0
        else:
            self.q = -1 if self.pdg_id > 0 else 1