import math

import pytest

from baconsel.muons import MUON_MASS, Z_MASS, MuonLoader
from baconsel.objects import Event, Muon, MuonSelector, MuonType


def loose_muon(**kw):
    base = dict(
        pt=25.0,
        eta=0.5,
        phi=0.3,
        type_bits=MuonType.GLOBAL | MuonType.PF_MUON,
        selector_bits=MuonSelector.ALL_ARBITRATED,
    )
    base.update(kw)
    return Muon(**base)


def tight_muon(**kw):
    base = dict(
        pt=60.0,
        eta=0.0,
        phi=0.0,
        type_bits=MuonType.GLOBAL | MuonType.PF_MUON,
        selector_bits=MuonSelector.ALL_ARBITRATED,
        mu_nchi2=1.0,
        n_valid_hits=5,
        n_match_stn=3,
        n_pix_hits=2,
        n_tk_layers=8,
    )
    base.update(kw)
    return Muon(**base)


def loaded(*muons):
    loader = MuonLoader()
    loader.load(Event(muons=list(muons)))
    return loader


def test_pass_loose_basic():
    assert MuonLoader().pass_loose(loose_muon()) is True


def test_pass_loose_tracker_only_ok():
    mu = loose_muon(type_bits=MuonType.TRACKER | MuonType.PF_MUON)
    assert MuonLoader().pass_loose(mu) is True


@pytest.mark.parametrize(
    "changes",
    [
        {"type_bits": MuonType.PF_MUON},
        {"type_bits": MuonType.GLOBAL},
        {"selector_bits": MuonSelector(0)},
        {"dz": 1.5},
        {"ch_had_iso04": 20.0},
    ],
)
def test_pass_loose_failures(changes):
    assert MuonLoader().pass_loose(loose_muon(**changes)) is False


def test_loose_neutral_iso_clamped_by_pileup():
    mu = loose_muon(pt=10.0, gamma_iso04=3.0, neu_had_iso04=3.0, pu_iso04=100.0)
    assert MuonLoader().pass_loose(mu) is True


def test_pass_tight_basic():
    assert MuonLoader().pass_tight(tight_muon()) is True


@pytest.mark.parametrize(
    "changes",
    [
        {"type_bits": MuonType.TRACKER | MuonType.PF_MUON},
        {"dz": 0.3},
        {"d0": 0.05},
        {"mu_nchi2": 11.0},
        {"n_valid_hits": 0},
        {"n_match_stn": 1},
        {"n_pix_hits": 0},
        {"n_tk_layers": 5},
        {"type_bits": MuonType.GLOBAL},
        {"ch_had_iso04": 30.0},
    ],
)
def test_pass_tight_failures(changes):
    assert MuonLoader().pass_tight(tight_muon(**changes)) is False


def test_select_single_one_muon():
    loader = loaded(loose_muon(pt=33.0, eta=1.1, phi=-0.4))
    assert loader.select_single() is True
    assert loader.columns() == {"pt_1": 33.0, "eta_1": 1.1, "phi_1": -0.4}


def test_select_single_two_muons_fails_and_resets():
    loader = loaded(loose_muon(), loose_muon())
    loader.pt = 5.0
    assert loader.select_single() is False
    assert loader.pt == 0.0


def test_select_single_ignores_failing():
    loader = loaded(loose_muon(dz=5.0), loose_muon(pt=40.0))
    assert loader.select_single() is True
    assert loader.pt == 40.0


def test_veto():
    assert loaded(loose_muon(dz=5.0), loose_muon()).veto() is True
    assert loaded(loose_muon(dz=5.0)).veto() is False
    assert loaded().veto() is False


def test_select_dimuon_z_candidate():
    loader = loaded(tight_muon(phi=0.0), tight_muon(phi=1.72))
    assert loader.select_dimuon() is True
    assert loader.pt >= 30
    assert abs(loader.m - Z_MASS) <= 20
    pair = loader.dimuon()
    assert pair.pt() == pytest.approx(loader.pt)
    assert pair.m() == pytest.approx(loader.m)


def test_select_dimuon_back_to_back_low_pt_fails():
    loader = loaded(tight_muon(phi=0.0), tight_muon(phi=math.pi))
    assert loader.select_dimuon() is False
    assert loader.m == 0.0


def test_select_dimuon_mass_outside_window():
    loader = loaded(tight_muon(phi=0.0), tight_muon(phi=0.5))
    assert loader.select_dimuon() is False


def test_select_dimuon_wrong_count():
    assert loaded(tight_muon()).select_dimuon() is False
    three = loaded(tight_muon(), tight_muon(phi=1.72), tight_muon(phi=-1.72))
    assert three.select_dimuon() is False


def test_muon_vector_uses_muon_mass():
    loader = loaded(loose_muon(pt=30.0, eta=0.2, phi=0.7))
    loader.select_single()
    vec = loader.muon()
    assert vec.pt() == pytest.approx(30.0)
    assert vec.eta() == pytest.approx(0.2)
    assert vec.phi() == pytest.approx(0.7)
    assert vec.m() == pytest.approx(MUON_MASS, abs=1e-6)