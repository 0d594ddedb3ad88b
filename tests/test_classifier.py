"""
Tests for the advisory classifier rule tables.
"""

import pytest

from agents.advisory.classifier import (
    FROST_RULES, HEAT_STRESS_RULES, IRRIGATION_RULES, SPRAY_RULES, Rule,
    classify_frost, classify_heat_stress, classify_irrigation, classify_spraying,
    first_match, format_number, is_good_spray_sample
)
from agents.advisory.models import FrostRisk, HeatStressRisk, IrrigationRecommendation
from conftest import measurement


def series(count, **kwargs):
    return [measurement(hour=(i * 3) % 24, **kwargs) for i in range(count)]


class TestRuleTables:

    def test_first_match_wins(self):
        rules = [Rule(lambda x: x > 5, "big"), Rule(lambda x: x > 0, "positive")]
        assert first_match(rules, 10) == "big"
        assert first_match(rules, 3) == "positive"

    def test_no_match_raises(self):
        with pytest.raises(LookupError):
            first_match([Rule(lambda x: False, "never")], 1)

    @pytest.mark.parametrize("rules,args", [
        (FROST_RULES, (100.0,)),
        (IRRIGATION_RULES, (0.0, 100.0, 0.0)),
        (SPRAY_RULES, (None,)),
        (HEAT_STRESS_RULES, (0.0, 0.0)),
    ])
    def test_tables_end_with_catch_all(self, rules, args):
        assert rules[-1].matches(*args)

    def test_format_number(self):
        assert format_number(38.0) == "38"
        assert format_number(38.5) == "38.5"
        assert format_number(45) == "45"


class TestFrost:

    @pytest.mark.parametrize("lowest,expected", [
        (-5.0, FrostRisk.CRITICAL),
        (-2.0, FrostRisk.CRITICAL),
        (-1.9, FrostRisk.HIGH),
        (0.0, FrostRisk.HIGH),
        (0.5, FrostRisk.MODERATE),
        (2.0, FrostRisk.MODERATE),
        (2.1, FrostRisk.LOW),
        (5.0, FrostRisk.LOW),
        (5.1, FrostRisk.NONE),
    ])
    def test_tiers(self, lowest, expected):
        forecast = series(7, temperature=12.0) + [measurement(temperature=lowest)]

        alert = classify_frost(measurement(temperature=15.0), forecast)

        assert alert.risk == expected
        assert alert.temperature == lowest

    def test_only_next_eight_samples(self):
        forecast = series(8, temperature=12.0) + [measurement(temperature=-10.0)]

        alert = classify_frost(measurement(), forecast)
        assert alert.risk == FrostRisk.NONE
        assert alert.temperature == 12.0

    def test_empty_forecast_uses_current_temperature(self):
        alert = classify_frost(measurement(temperature=1.0), [])

        assert alert.risk == FrostRisk.MODERATE
        assert alert.temperature == 1.0

    def test_critical_texts(self):
        alert = classify_frost(measurement(), [measurement(temperature=-3.0)])

        assert alert.message == "Severe frost expected - immediate action required"
        assert alert.timeframe == "Within next 6-12 hours"
        assert alert.action.startswith("Cover all sensitive crops")


class TestIrrigation:

    @pytest.mark.parametrize("temperature,humidity,expected", [
        (36.0, 30.0, IrrigationRecommendation.IMMEDIATE),
        (36.0, 36.0, IrrigationRecommendation.WITHIN_24H),
        (31.0, 39.0, IrrigationRecommendation.WITHIN_24H),
        (31.0, 45.0, IrrigationRecommendation.WITHIN_48H),
        (26.0, 49.0, IrrigationRecommendation.WITHIN_48H),
        (25.0, 30.0, IrrigationRecommendation.MONITOR),
        (38.0, 75.0, IrrigationRecommendation.MONITOR),
    ])
    def test_tiers_without_rain(self, temperature, humidity, expected):
        advice = classify_irrigation(measurement(temperature=temperature, humidity=humidity), series(16))
        assert advice.recommendation == expected

    def test_rain_overrides_heat(self):
        forecast = series(16, precipitation=0.5)

        advice = classify_irrigation(measurement(temperature=40.0, humidity=10.0), forecast)

        assert advice.recommendation == IrrigationRecommendation.SKIP
        assert advice.reason == "8.0mm rain forecast in next 48 hours"
        assert advice.rainfall == 8.0
        assert advice.nextCheck == "Check again after rainfall"

    def test_exactly_five_millimetres_does_not_skip(self):
        forecast = series(10, precipitation=0.5) + series(6)

        advice = classify_irrigation(measurement(temperature=36.0, humidity=30.0), forecast)
        assert advice.recommendation == IrrigationRecommendation.IMMEDIATE

    def test_rain_beyond_window_ignored(self):
        forecast = series(16) + [measurement(precipitation=50.0)]

        advice = classify_irrigation(measurement(), forecast)
        assert advice.recommendation == IrrigationRecommendation.MONITOR
        assert advice.rainfall == 0.0

    def test_reason_includes_readings(self):
        advice = classify_irrigation(measurement(temperature=36.0, humidity=30.0), [])

        assert advice.reason == "Very high temperature (36°C) with low humidity (30%)"
        assert advice.waterAmount == "Deep watering recommended - 25-30mm equivalent"
        assert advice.nextCheck == "Monitor every 6 hours"


class TestSpraying:

    def test_good_sample(self):
        assert is_good_spray_sample(measurement(temperature=20.0, wind_speed=5.0))
        assert not is_good_spray_sample(measurement(wind_speed=15.0))
        assert not is_good_spray_sample(measurement(precipitation=0.1))
        assert not is_good_spray_sample(measurement(temperature=10.0))
        assert not is_good_spray_sample(measurement(temperature=30.0))

    def test_too_windy_with_later_opportunity(self):
        forecast = series(2, wind_speed=16.0) + series(6)

        window = classify_spraying(measurement(wind_speed=25.0), forecast, current_hour=12)

        assert window.suitable is False
        assert window.message == "Spraying not recommended - wind too strong"
        assert window.reason == "Current wind speed: 25 km/h (safe limit: <15 km/h)"
        assert window.nextOpportunity == "Next opportunity in 6 hours"
        assert window.goodWindows == 6

    def test_too_windy_without_opportunity(self):
        window = classify_spraying(measurement(wind_speed=25.0), series(8, wind_speed=18.0), current_hour=12)

        assert window.nextOpportunity == "Check forecast tomorrow"
        assert window.goodWindows == 0

    def test_too_hot(self):
        window = classify_spraying(measurement(temperature=32.0), series(8), current_hour=12)

        assert window.suitable is False
        assert window.message == "Spraying not recommended - temperature too high"
        assert window.reason == "Current temperature: 32°C (avoid spraying above 30°C)"

    def test_wind_checked_before_heat(self):
        window = classify_spraying(measurement(temperature=32.0, wind_speed=21.0), [], current_hour=12)
        assert window.message == "Spraying not recommended - wind too strong"

    def test_suitable_early_morning(self):
        window = classify_spraying(measurement(), series(8), current_hour=0)

        assert window.suitable is True
        assert window.bestTime == "Early morning (6-10 AM) recommended for optimal results"
        assert window.goodWindows == 8
        assert window.reason == "Low wind (5 km/h), suitable temperature (20°C)"

    def test_suitable_any_time(self):
        forecast = series(1) + series(7, precipitation=1.0)

        window = classify_spraying(measurement(), forecast, current_hour=12)

        assert window.suitable is True
        assert window.bestTime == "Current conditions suitable - spray when convenient"
        assert window.goodWindows == 1

    def test_morning_hour_wraps_past_midnight(self):
        # offset 4 from 21:00 lands on 09:00
        forecast = series(4, precipitation=1.0) + series(1) + series(3, precipitation=1.0)

        window = classify_spraying(measurement(), forecast, current_hour=21)
        assert window.bestTime == "Early morning (6-10 AM) recommended for optimal results"

    def test_poor_conditions(self):
        window = classify_spraying(measurement(), series(8, precipitation=1.0), current_hour=12)

        assert window.suitable is False
        assert window.message == "Poor spraying conditions - wait for better weather"
        assert window.nextOpportunity == "Check forecast again in 12 hours"
        assert window.goodWindows == 0


class TestHeatStress:

    @pytest.mark.parametrize("temperature,humidity,expected", [
        (41.0, 10.0, HeatStressRisk.EXTREME),
        (38.0, 75.0, HeatStressRisk.EXTREME),
        (36.0, 50.0, HeatStressRisk.HIGH),
        (31.0, 81.0, HeatStressRisk.HIGH),
        (31.0, 50.0, HeatStressRisk.MODERATE),
        (26.0, 86.0, HeatStressRisk.MODERATE),
        (26.0, 50.0, HeatStressRisk.LOW),
        (25.0, 50.0, HeatStressRisk.NONE),
    ])
    def test_tiers(self, temperature, humidity, expected):
        alert = classify_heat_stress(measurement(temperature=temperature, humidity=humidity), [])
        assert alert.risk == expected

    def test_every_reading_gets_one_tier(self):
        for temperature in range(-10, 46, 3):
            for humidity in range(0, 101, 10):
                current = measurement(temperature=float(temperature), humidity=float(humidity))
                assert classify_heat_stress(current, []).risk in HeatStressRisk
                assert classify_irrigation(current, []).recommendation in IrrigationRecommendation

    def test_duration_counts_all_hot_samples(self):
        forecast = series(10, temperature=31.0) + series(20, temperature=20.0) + series(2, temperature=33.0)

        alert = classify_heat_stress(measurement(temperature=38.0), forecast)

        assert alert.duration == "36 hours of elevated temperatures expected"
        assert alert.temperature == 38.0
