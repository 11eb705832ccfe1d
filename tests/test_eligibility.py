from datetime import date

import numpy as np
import pytest

from app.services.eligibility import (
    age_in_range,
    age_tier_label,
    benefit_tier_for_age,
    calendar_year_for,
    cash_amount_for_age,
    eligibility,
    exact_age_eligibility,
    reference_year,
)


def test_calendar_year_before_cutoff_is_hundredth_birthday():
    for birth_year in range(1900, 1929):
        assert calendar_year_for(birth_year) - birth_year == 100


def test_calendar_year_after_cutoff_lands_in_window_on_a_five_year_step():
    for birth_year in range(1929, 2029):
        year = calendar_year_for(birth_year)
        assert 2024 <= year <= 2028
        assert (year - birth_year) % 5 == 0


def test_calendar_year_lookup_pairs():
    assert calendar_year_for(1944) == 2024
    assert calendar_year_for(1929) == 2024
    assert calendar_year_for(1940) == 2025
    assert calendar_year_for(1935) == 2025
    assert calendar_year_for(1931) == 2026
    assert calendar_year_for(1946) == 2026
    assert calendar_year_for(1942) == 2027
    assert calendar_year_for(1937) == 2027
    assert calendar_year_for(1943) == 2028
    assert calendar_year_for(1938) == 2028
    assert calendar_year_for(1928) == 2028


def test_cohorts_born_1928_to_1948_reach_a_milestone_in_their_year():
    for birth_year in range(1928, 1949):
        assert calendar_year_for(birth_year) - birth_year in {80, 85, 90, 95, 100}


def test_calendar_year_is_pure():
    assert calendar_year_for(date(1944, 6, 15)) == calendar_year_for(date(1944, 6, 15))
    assert calendar_year_for(date(1944, 1, 1)) == calendar_year_for(1944)


def test_calendar_year_accepts_numpy_integers():
    assert calendar_year_for(np.int64(1939)) == 2024


def test_max_year_crediting_pays_once():
    result = eligibility(date(1944, 6, 15), [2024, 2028])
    assert result.qualifying_age == 84
    assert result.cash_amount == 10000
    assert result.tier == "80"
    assert result.eligible is True


def test_centenarian_cash_gift():
    result = eligibility(1924, [2024])
    assert result.qualifying_age == 100
    assert result.cash_amount == 100000
    assert result.tier == "100+"


def test_under_eighty_is_not_eligible():
    result = eligibility(1950, [2024, 2025])
    assert result.qualifying_age == 75
    assert result.cash_amount == 0
    assert result.tier is None
    assert result.eligible is False


def test_empty_target_years_rejected():
    with pytest.raises(ValueError):
        eligibility(1944, [])


@pytest.mark.parametrize("age,tier", [
    (79, None),
    (80, "80"),
    (84, "80"),
    (85, "85"),
    (89, "85"),
    (90, "90"),
    (94, "90"),
    (95, "95"),
    (99, "95"),
    (100, "100+"),
    (107, "100+"),
])
def test_age_tier_boundaries(age, tier):
    assert age_tier_label(age) == tier


@pytest.mark.parametrize("age,amount", [(79, 0), (80, 10000), (99, 10000), (100, 100000), (104, 100000)])
def test_cash_amount_for_age(age, amount):
    assert cash_amount_for_age(age) == amount


def test_exact_age_matches_any_target_year():
    assert exact_age_eligibility(1944, [2024, 2025], 80)
    assert exact_age_eligibility(1944, [2024, 2025], 81)
    assert not exact_age_eligibility(1944, [2024, 2025], 85)


def test_exact_age_without_years_uses_current_year():
    this_year = date.today().year
    assert exact_age_eligibility(this_year - 90, [], 90)


def test_reference_year_is_first_selected_year():
    assert reference_year([2026, 2024]) == 2026
    assert reference_year([]) == date.today().year


def test_age_in_range_any_year():
    assert age_in_range(1944, [2024, 2028], 83, 84)
    assert not age_in_range(1944, [2024, 2028], 81, 83)
    assert age_in_range(1944, [2024], 80, None)
    assert age_in_range(1944, [2024], None, 80)
    assert not age_in_range(1944, [2024], None, 79)


@pytest.mark.parametrize("age,tier", [(79, None), (80, 80), (84, 80), (85, 85), (99, 95), (100, 100), (112, 100)])
def test_benefit_tier_for_age(age, tier):
    assert benefit_tier_for_age(age) == tier
