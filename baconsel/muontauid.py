"""Cut-based muon and hadronic-tau identification and related helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntFlag


class MuonTypeBit(IntFlag):
    """Muon reconstruction type bits used by the identification cuts."""

    GLOBAL = 1
    TRACKER = 2
    STANDALONE = 4


class TauHpsBit(IntFlag):
    """HPS tau discriminator bits."""

    DECAY_MODE = 1
    LOOSE_ELE = 2
    MEDIUM_ELE = 4
    TIGHT_ELE = 8
    LOOSE_MU = 16
    TIGHT_MU = 32


@dataclass
class IdMuon:
    """Muon quantities read by the identification and isolation cuts."""

    pt: float = 0.0
    pt_err: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    type_bits: MuonTypeBit = MuonTypeBit(0)
    d0: float = 0.0
    dz: float = 0.0
    n_tk_hits: int = 0
    n_pix_hits: int = 0
    n_tk_layers_hit: int = 0
    mu_nchi2: float = 0.0
    n_match: int = 0
    n_seg: int = 0
    n_valid_hits: int = 0
    matches_pf_cand: bool = False
    matched_pf_type: int = 0
    pf_iso_charged: float = 0.0
    pf_iso_neutral: float = 0.0
    pf_iso_gamma: float = 0.0
    pu_iso: float = 0.0
    pu_iso03: float = 0.0
    trk_iso03: float = 0.0
    em_iso03: float = 0.0
    had_iso03: float = 0.0

    def __post_init__(self) -> None:
        self.type_bits = MuonTypeBit(self.type_bits)


@dataclass
class PFTau:
    """Particle-flow tau quantities read by the tau identification cuts."""

    pt: float = 0.0
    eta: float = 0.0
    phi: float = 0.0
    hps_discriminators: TauHpsBit = TauHpsBit(0)
    n_signal_pf_gamma_cands: int = 0
    n_signal_pf_charged_hadr_cands: int = 0
    has_gsf: bool = False
    gamma_d_eta: float = 0.0
    gamma_d_phi: float = 0.0
    pass_anti_ele_mva2: int = 0

    def __post_init__(self) -> None:
        self.hps_discriminators = TauHpsBit(self.hps_discriminators)


_PF_MUON_TYPE = 3


def delta_phi(phi1: float, phi2: float) -> float:
    """Absolute azimuthal separation in [0, pi]."""
    dphi = math.fmod(abs(phi1 - phi2), 2.0 * math.pi)
    if dphi > math.pi:
        dphi = 2.0 * math.pi - dphi
    return dphi


def _has(bits: IntFlag, flag: IntFlag) -> bool:
    return bool(bits & flag)


def _matches_pf_muon(muon: IdMuon) -> bool:
    return muon.matches_pf_cand and muon.matched_pf_type == _PF_MUON_TYPE


def pass_muon_id(muon: IdMuon) -> bool:
    """Standard global-and-tracker muon identification."""
    if abs(muon.eta) > 2.1:
        return False
    if muon.n_tk_hits < 11 or muon.n_pix_hits < 1:
        return False
    if muon.mu_nchi2 > 10:
        return False
    if muon.n_match < 2 or muon.n_valid_hits < 1:
        return False
    if muon.pt_err / muon.pt > 0.1:
        return False
    if abs(muon.dz) > 0.1:
        return False
    if not _has(muon.type_bits, MuonTypeBit.GLOBAL):
        return False
    if not _has(muon.type_bits, MuonTypeBit.TRACKER):
        return False
    return abs(muon.d0) <= 0.02


def pass_pf_muon_id(muon: IdMuon) -> bool:
    """Particle-flow muon identification."""
    if not _has(muon.type_bits, MuonTypeBit.GLOBAL | MuonTypeBit.TRACKER):
        return False
    if not _matches_pf_muon(muon):
        return False
    return abs(muon.dz) <= 0.2


def pass_tight_pf_muon_id(muon: IdMuon, mutau: bool) -> bool:
    """Tight particle-flow muon identification; ``mutau`` loosens impact cuts."""
    if not _has(muon.type_bits, MuonTypeBit.GLOBAL):
        return False
    max_dz, max_d0 = (0.2, 0.045) if mutau else (0.1, 0.02)
    if abs(muon.dz) > max_dz or abs(muon.d0) > max_d0:
        return False
    if muon.mu_nchi2 > 10:
        return False
    if muon.n_valid_hits < 1 or muon.n_seg < 2:
        return False
    if muon.n_pix_hits < 1 or muon.n_tk_layers_hit < 6:
        return False
    return _matches_pf_muon(muon)


def _pf_iso(muon: IdMuon, pileup: float) -> float:
    neutral = max(muon.pf_iso_neutral + muon.pf_iso_gamma - 0.5 * pileup, 0.0)
    return muon.pf_iso_charged + neutral


def pass_muon_iso_pu(muon: IdMuon, xtau: int) -> bool:
    """Pile-up corrected isolation; ``xtau`` selects the channel's threshold."""
    total = _pf_iso(muon, muon.pu_iso03)
    if xtau == 2:
        return total < 0.5 * muon.pt
    if xtau == 3:
        return total < 0.3 * muon.pt
    if abs(muon.eta) < 1.5 and not xtau:
        return total < 0.15 * muon.pt
    return total < 0.10 * muon.pt


def pass_muon_iso_pu_tau_had(muon: IdMuon) -> bool:
    """Pile-up corrected isolation for the hadronic-tau channel."""
    return _pf_iso(muon, muon.pu_iso) < 0.10 * muon.pt


def muon_iso_pu(muon: IdMuon) -> float:
    """Pile-up corrected isolation relative to the muon pt."""
    return _pf_iso(muon, muon.pu_iso) / muon.pt


def is_soft_muon(muon: IdMuon) -> bool:
    """Soft global muon with loose impact parameter cuts."""
    if abs(muon.eta) > 2.1:
        return False
    if abs(muon.d0) > 0.2 or abs(muon.dz) > 0.1:
        return False
    return _has(muon.type_bits, MuonTypeBit.GLOBAL)


def is_muon_fo(muon: IdMuon, ver: int = 1) -> bool:
    """Fakeable-object muon definition, versions 1 to 5; others fail."""
    if ver < 3 and (muon.n_tk_hits < 11 or muon.n_pix_hits < 1):
        return False
    if ver < 4:
        if muon.mu_nchi2 > 10 or muon.n_match < 2 or muon.n_valid_hits < 1:
            return False
        if muon.pt_err / muon.pt > 0.1:
            return False
    if ver < 5 and abs(muon.dz) > 0.1:
        return False
    if abs(muon.d0) > 0.2:
        return False
    if not _has(muon.type_bits, MuonTypeBit.GLOBAL):
        return False
    if ver < 3 and not _has(muon.type_bits, MuonTypeBit.TRACKER):
        return False

    isos = (muon.trk_iso03, muon.em_iso03, muon.had_iso03)
    if ver == 1:
        return sum(isos) / muon.pt < 1.0
    if ver == 2:
        return sum(isos) / muon.pt < 0.4
    if ver == 3:
        return all(iso / muon.pt < 0.2 for iso in isos)
    if ver == 4:
        return all(iso / muon.pt < 0.4 for iso in isos)
    if ver == 5:
        if muon.pt > 20:
            return all(iso / muon.pt < 0.4 for iso in isos)
        return all(iso < 8.0 for iso in isos)
    return False


def projected_met(met: float, met_phi: float, lep_phi: float) -> float:
    """Missing energy projected transverse to the lepton when within 90 degrees."""
    dphi = delta_phi(lep_phi, met_phi)
    if dphi > 0.5 * math.pi:
        return met
    return met * math.sin(dphi)


def _has_all(tau: PFTau, bits: TauHpsBit) -> bool:
    return (tau.hps_discriminators & bits) == bits


def pass_tau_id_mu(tau: PFTau) -> bool:
    """Loose electron and tight muon rejection with decay mode finding."""
    return _has_all(tau, TauHpsBit.LOOSE_ELE | TauHpsBit.TIGHT_MU | TauHpsBit.DECAY_MODE)


def pass_tau_id(tau: PFTau) -> bool:
    """Loose electron and loose muon rejection with decay mode finding."""
    return _has_all(tau, TauHpsBit.LOOSE_ELE | TauHpsBit.LOOSE_MU | TauHpsBit.DECAY_MODE)


def tau_id_electron(tau: PFTau) -> bool:
    """Medium electron and loose muon rejection with decay mode finding."""
    return _has_all(tau, TauHpsBit.MEDIUM_ELE | TauHpsBit.LOOSE_MU | TauHpsBit.DECAY_MODE)


def tau_id_electron_mva(tau: PFTau, mva_value: float) -> bool:
    """Anti-electron MVA decision binned in |eta|, photon candidates and GSF track."""
    if tau.gamma_d_eta < -50 or tau.gamma_d_phi < -50:
        return False
    abs_eta = abs(tau.eta)
    gammas = tau.n_signal_pf_gamma_cands
    gsf = tau.has_gsf
    passed = (
        tau.n_signal_pf_charged_hadr_cands == 3
        or (abs_eta < 1.5 and gammas == 0 and mva_value > 0.054)
        or (abs_eta < 1.5 and gammas > 0 and gsf and mva_value > 0.060)
        or (abs_eta < 1.5 and gammas > 0 and not gsf and mva_value > 0.054)
        or (abs_eta > 1.5 and gammas == 0 and mva_value > 0.060)
        or (abs_eta > 1.5 and gammas > 0 and gsf and mva_value > 0.053)
        or (abs_eta > 1.5 and gammas > 0 and not gsf and mva_value > 0.049)
    )
    return passed and tau.pass_anti_ele_mva2 > 2