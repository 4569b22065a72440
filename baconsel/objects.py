"""Reconstructed physics objects and events read by the selection loaders."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import IntFlag
from typing import Any


class MuonType(IntFlag):
    """Muon reconstruction type bits."""

    GLOBAL = 1
    TRACKER = 2
    STANDALONE = 4
    PF_MUON = 8


class MuonSelector(IntFlag):
    """Muon selector bits."""

    ALL_ARBITRATED = 1


class ElectronType(IntFlag):
    """Electron seeding type bits."""

    ECAL_DRIVEN = 1
    TRACKER_DRIVEN = 2


class TauDiscriminator(IntFlag):
    """Hadronic tau discriminator bits."""

    DECAY_MODE_FINDING = 1
    LOOSE_MUON_REJECTION = 2
    MVA3_LOOSE_ELECTRON_REJECTION = 4
    MVA3_MEDIUM_ELECTRON_REJECTION = 8


@dataclass
class Electron:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    sc_eta: float = 0.0
    type_bits: ElectronType = ElectronType(0)
    d0: float = 0.0
    dz: float = 0.0
    sip3d: float = 0.0
    n_missing_hits: int = 0
    is_conv: bool = False
    ch_had_iso03: float = 0.0
    neu_had_iso03: float = 0.0
    gamma_iso03: float = 0.0
    ch_had_iso04: float = 0.0
    neu_had_iso04: float = 0.0
    gamma_iso04: float = 0.0
    sieie: float = 0.0
    d_phi_in: float = 0.0
    d_eta_in: float = 0.0
    hovere: float = 0.0
    eoverp: float = 0.0
    ecal_energy: float = 0.0
    pt_hzz4l: float = 0.0
    mva: float = 0.0

    def __post_init__(self) -> None:
        self.type_bits = ElectronType(self.type_bits)


@dataclass
class Muon:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    type_bits: MuonType = MuonType(0)
    selector_bits: MuonSelector = MuonSelector(0)
    d0: float = 0.0
    dz: float = 0.0
    mu_nchi2: float = 0.0
    n_valid_hits: int = 0
    n_match_stn: int = 0
    n_pix_hits: int = 0
    n_tk_layers: int = 0
    ch_had_iso04: float = 0.0
    gamma_iso04: float = 0.0
    neu_had_iso04: float = 0.0
    pu_iso04: float = 0.0

    def __post_init__(self) -> None:
        self.type_bits = MuonType(self.type_bits)
        self.selector_bits = MuonSelector(self.selector_bits)


@dataclass
class Tau:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    hps_disc: TauDiscriminator = TauDiscriminator(0)
    raw_iso3hits: float = 0.0

    def __post_init__(self) -> None:
        self.hps_disc = TauDiscriminator(self.hps_disc)


@dataclass
class Photon:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    hovere: float = 0.0
    sieie: float = 0.0
    ch_had_iso03: float = 0.0
    gamma_iso03: float = 0.0
    neu_had_iso03: float = 0.0


@dataclass
class Jet:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    mass: float = 0.0
    neu_em_frac: float = 0.0
    neu_had_frac: float = 0.0
    ch_had_frac: float = 0.0
    ch_em_frac: float = 0.0
    n_particles: int = 0
    n_charged: int = 0


@dataclass
class GenParticle:
    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    mass: float = 0.0
    pdg_id: int = 0
    status: int = 0
    parent: int = -1


@dataclass
class EventInfo:
    """Event-level quantities: identifiers, missing energy, pile-up density, triggers."""

    run_num: int = 0
    lumi_sec: int = 0
    evt_num: int = 0
    pf_met: float = 0.0
    pf_met_phi: float = 0.0
    trk_met: float = 0.0
    trk_met_phi: float = 0.0
    mva_met: float = 0.0
    mva_met_phi: float = 0.0
    mva_met_u: float = 0.0
    mva_met_u_phi: float = 0.0
    rho_jet: float = 0.0
    triggers: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        self.triggers = frozenset(self.triggers)


@dataclass
class Event:
    """One event with all of its object collections."""

    info: EventInfo = field(default_factory=EventInfo)
    electrons: list[Electron] = field(default_factory=list)
    muons: list[Muon] = field(default_factory=list)
    taus: list[Tau] = field(default_factory=list)
    photons: list[Photon] = field(default_factory=list)
    jets: list[Jet] = field(default_factory=list)
    gen_particles: list[GenParticle] = field(default_factory=list)


_COLLECTIONS: dict[str, type] = {
    "electrons": Electron,
    "muons": Muon,
    "taus": Tau,
    "photons": Photon,
    "jets": Jet,
    "gen_particles": GenParticle,
}


def _build(cls: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise TypeError(f"{cls.__name__} data must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"unknown {cls.__name__} fields: {', '.join(sorted(unknown))}")
    return cls(**data)


def event_from_dict(data: Mapping[str, Any]) -> Event:
    """Build an :class:`Event` from plain mappings and lists, e.g. decoded JSON."""
    if not isinstance(data, Mapping):
        raise TypeError(f"event data must be a mapping, got {type(data).__name__}")
    unknown = set(data) - {"info", *_COLLECTIONS}
    if unknown:
        raise ValueError(f"unknown event keys: {', '.join(sorted(unknown))}")
    collections = {
        name: [_build(cls, item) for item in data.get(name, ())]
        for name, cls in _COLLECTIONS.items()
    }
    info = _build(EventInfo, data.get("info", {}))
    return Event(info=info, **collections)