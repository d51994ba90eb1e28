from __future__ import annotations

import pytest

from options_analytics.core import templates
from options_analytics.core.breakevens import calculate_breakevens
from options_analytics.core.models import OptionType, PositionSide
from options_analytics.tests.utils import expiry_in

EXPIRY = expiry_in(45)


def _shape(position):
    return [(leg.position, leg.option_type, leg.strike) for leg in position]


def test_single_leg_templates() -> None:
    assert _shape(templates.long_call(100.0, 3.0, EXPIRY)) == [
        (PositionSide.LONG, OptionType.CALL, 100.0)
    ]
    assert _shape(templates.long_put(100.0, 3.0, EXPIRY)) == [
        (PositionSide.LONG, OptionType.PUT, 100.0)
    ]
    assert _shape(templates.covered_call(110.0, 1.0, EXPIRY)) == [
        (PositionSide.SHORT, OptionType.CALL, 110.0)
    ]


def test_vertical_spreads() -> None:
    bull = templates.bull_call_spread(95.0, 6.0, 105.0, 2.0, EXPIRY, quantity=2)
    bear = templates.bear_put_spread(105.0, 6.0, 95.0, 2.0, EXPIRY)

    assert _shape(bull) == [
        (PositionSide.LONG, OptionType.CALL, 95.0),
        (PositionSide.SHORT, OptionType.CALL, 105.0),
    ]
    assert all(leg.quantity == 2 for leg in bull)
    assert _shape(bear) == [
        (PositionSide.LONG, OptionType.PUT, 105.0),
        (PositionSide.SHORT, OptionType.PUT, 95.0),
    ]
    assert calculate_breakevens(bear) == (101.0,)


def test_volatility_templates() -> None:
    straddle = templates.long_straddle(100.0, 3.0, 2.0, EXPIRY)
    strangle = templates.long_strangle(95.0, 1.5, 105.0, 2.0, EXPIRY)

    assert [leg.option_type for leg in straddle] == [OptionType.CALL, OptionType.PUT]
    assert _shape(strangle) == [
        (PositionSide.LONG, OptionType.CALL, 105.0),
        (PositionSide.LONG, OptionType.PUT, 95.0),
    ]
    assert calculate_breakevens(strangle) == (91.5, 108.5)


def test_iron_condor_leg_order() -> None:
    condor = templates.iron_condor((90.0, 95.0, 105.0, 110.0), (1.0, 2.0, 2.0, 1.0), EXPIRY)

    assert _shape(condor) == [
        (PositionSide.LONG, OptionType.PUT, 90.0),
        (PositionSide.SHORT, OptionType.PUT, 95.0),
        (PositionSide.SHORT, OptionType.CALL, 105.0),
        (PositionSide.LONG, OptionType.CALL, 110.0),
    ]


@pytest.mark.parametrize(
    "build",
    [
        lambda: templates.bull_call_spread(105.0, 2.0, 95.0, 6.0, EXPIRY),
        lambda: templates.bear_put_spread(95.0, 2.0, 105.0, 6.0, EXPIRY),
        lambda: templates.long_strangle(110.0, 1.0, 100.0, 1.0, EXPIRY),
        lambda: templates.iron_condor((95.0, 90.0, 105.0, 110.0), (1.0, 2.0, 2.0, 1.0), EXPIRY),
    ],
)
def test_misordered_strikes_are_rejected(build) -> None:
    with pytest.raises(ValueError):
        build()


def test_registry_names() -> None:
    assert set(templates.STRATEGY_TEMPLATES) == {
        "long_call",
        "long_put",
        "covered_call",
        "bull_call_spread",
        "bear_put_spread",
        "straddle",
        "strangle",
        "iron_condor",
    }
