from __future__ import annotations

import pytest

from feecurve.core.errors import FeeConfigError
from feecurve.core.fixed_point import UNIT
from feecurve.state.params import PARAM_NAMES, FeeConfig, FeeParameters, FeeSetup


def test_defaults() -> None:
    p = FeeParameters()
    assert p.to_dict() == {
        "deposit_fee_scale": 18 * 10**16,
        "single_asset_deposit_relative_fee": 10**17,
        "redemption_fee_scale": 3 * 10**17,
        "redemption_fee_shift": 10**17,
        "single_asset_redemption_relative_fee": 10**17,
        "dust_asset_redemption_relative_fee": 3 * 10**17,
        "deposit_fee_ratio_scale": 99 * 10**16,
    }
    assert set(p.to_dict()) == set(PARAM_NAMES)


@pytest.mark.parametrize("name", [n for n in PARAM_NAMES if n != "deposit_fee_ratio_scale"])
def test_unit_bounded_parameters(name: str) -> None:
    FeeParameters(**{name: 0})
    FeeParameters(**{name: UNIT})
    with pytest.raises(FeeConfigError) as excinfo:
        FeeParameters(**{name: UNIT + 1})
    assert excinfo.value.code == f"param_out_of_range:{name}"
    with pytest.raises(FeeConfigError):
        FeeParameters(**{name: -1})


def test_ratio_scale_only_needs_to_be_non_negative() -> None:
    assert FeeParameters(deposit_fee_ratio_scale=5 * UNIT).deposit_fee_ratio_scale == 5 * UNIT
    with pytest.raises(FeeConfigError):
        FeeParameters(deposit_fee_ratio_scale=-1)


def test_non_int_parameter_rejected() -> None:
    with pytest.raises(FeeConfigError) as excinfo:
        FeeParameters(deposit_fee_scale=0.18)  # type: ignore[arg-type]
    assert excinfo.value.code == "invalid_param:deposit_fee_scale"


def test_with_param_returns_new_instance() -> None:
    p = FeeParameters()
    q = p.with_param("redemption_fee_shift", 2 * 10**17)
    assert p.redemption_fee_shift == 10**17
    assert q.redemption_fee_shift == 2 * 10**17
    with pytest.raises(FeeConfigError) as excinfo:
        p.with_param("bogus", 1)
    assert excinfo.value.code == "invalid_param:bogus"


def test_fee_setup_normalizes_lists() -> None:
    setup = FeeSetup(recipients=["a", "b"], shares=[70, 30])  # type: ignore[arg-type]
    assert setup.recipients == ("a", "b")
    assert setup.shares == (70, 30)
    assert hash(setup) == hash(FeeSetup.from_pairs([("a", 70), ("b", 30)]))


def test_fee_setup_rejects_bool_share() -> None:
    with pytest.raises(FeeConfigError):
        FeeSetup(recipients=("a", "b"), shares=(True, 99))


def test_config_versioning() -> None:
    c0 = FeeConfig()
    assert c0.setup is None and c0.version == 0
    c1 = c0.with_setup(FeeSetup(recipients=("a",), shares=(100,)))
    c2 = c1.with_parameters(FeeParameters(redemption_fee_scale=0))
    assert (c1.version, c2.version) == (1, 2)
    assert c2.setup == c1.setup
    assert c0.setup is None


def test_config_type_checks() -> None:
    with pytest.raises(TypeError):
        FeeConfig(parameters={})  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        FeeConfig(version=-1)
