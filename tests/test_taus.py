import pytest

from baconsel.objects import Event, Tau, TauDiscriminator
from baconsel.taus import TauLoader, pass_anti_e_mva3

ALL_LOOSE = (
    TauDiscriminator.MVA3_LOOSE_ELECTRON_REJECTION
    | TauDiscriminator.LOOSE_MUON_REJECTION
    | TauDiscriminator.DECAY_MODE_FINDING
)
ALL_TIGHT = (
    TauDiscriminator.MVA3_MEDIUM_ELECTRON_REJECTION
    | TauDiscriminator.LOOSE_MUON_REJECTION
    | TauDiscriminator.DECAY_MODE_FINDING
)


def tau(**kw):
    base = dict(pt=30.0, eta=0.3, phi=-1.0, hps_disc=ALL_LOOSE | ALL_TIGHT, raw_iso3hits=1.0)
    base.update(kw)
    return Tau(**base)


def loaded(*taus):
    loader = TauLoader()
    loader.load(Event(taus=list(taus)))
    return loader


def test_anti_e_negative_category_fails():
    assert pass_anti_e_mva3(-1, 1.0, "Loose") is False


def test_anti_e_overflow_category_passes():
    assert pass_anti_e_mva3(16, -1.0, "Loose") is True


@pytest.mark.parametrize(
    "wp, cut",
    [("Loose", 0.835), ("Medium", 0.933), ("Tight", 0.96), ("VeryTight", 0.978)],
)
def test_anti_e_category_zero_thresholds(wp, cut):
    assert pass_anti_e_mva3(0, cut + 0.001, wp) is True
    assert pass_anti_e_mva3(0, cut, wp) is False


def test_anti_e_last_category():
    assert pass_anti_e_mva3(15, 0.852, "Loose") is True
    assert pass_anti_e_mva3(15, 0.85, "Loose") is False


def test_anti_e_unknown_working_point_uses_zero():
    assert pass_anti_e_mva3(3, 0.01, "Bogus") is True
    assert pass_anti_e_mva3(3, 0.0, "Bogus") is False


def test_anti_e_tighter_points_are_stricter():
    for category in range(16):
        for raw in (0.8, 0.9, 0.95, 0.975, 0.99):
            if pass_anti_e_mva3(category, raw, "VeryTight"):
                assert pass_anti_e_mva3(category, raw, "Tight")


def test_pass_loose():
    loader = TauLoader()
    assert loader.pass_loose(tau(hps_disc=ALL_LOOSE, raw_iso3hits=3.0)) is True
    assert loader.pass_loose(tau(hps_disc=ALL_LOOSE, raw_iso3hits=3.5)) is False
    missing = ALL_LOOSE & ~TauDiscriminator.LOOSE_MUON_REJECTION
    assert loader.pass_loose(tau(hps_disc=missing)) is False


def test_pass_tight():
    loader = TauLoader()
    assert loader.pass_tight(tau(hps_disc=ALL_TIGHT, raw_iso3hits=1.5)) is True
    assert loader.pass_tight(tau(hps_disc=ALL_TIGHT, raw_iso3hits=2.0)) is False
    assert loader.pass_tight(tau(hps_disc=ALL_LOOSE)) is False


def test_pass_veto_needs_only_decay_mode():
    loader = TauLoader()
    assert loader.pass_veto(tau(hps_disc=TauDiscriminator.DECAY_MODE_FINDING, raw_iso3hits=5.0)) is True
    assert loader.pass_veto(tau(hps_disc=TauDiscriminator.DECAY_MODE_FINDING, raw_iso3hits=5.5)) is False
    assert loader.pass_veto(tau(hps_disc=TauDiscriminator.LOOSE_MUON_REJECTION)) is False


def test_select_single():
    loader = loaded(tau(pt=45.0, eta=-0.7, phi=2.0), tau(raw_iso3hits=4.0))
    assert loader.select_single() is True
    assert loader.columns() == {"pt_1": 45.0, "eta_1": -0.7, "phi_1": 2.0}


def test_select_single_two_taus_fails():
    loader = loaded(tau(), tau())
    assert loader.select_single() is False
    assert loader.pt == 0.0


def test_veto():
    assert loaded(tau(raw_iso3hits=4.0)).veto() is True
    assert loaded(tau(raw_iso3hits=6.0)).veto() is False
    assert loaded().veto() is False