import math

import pytest

from firewatch.models import BrightnessCategory
from firewatch.services.geo_utils import (
    FlareThresholds,
    bbox_around,
    brightness_category,
    confidence_to_percent,
    distance_miles,
    is_likely_flare,
    is_predictable,
)

POINTS = [
    (34.0, -117.5),
    (47.61, -122.33),
    (-33.86, 151.21),
    (0.0, 0.0),
    (89.9, 179.9),
    (-45.0, -179.0),
]


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_distance_is_symmetric(a, b):
    assert distance_miles(*a, *b) == pytest.approx(distance_miles(*b, *a))


@pytest.mark.parametrize("p", POINTS)
def test_distance_to_self_is_zero(p):
    assert distance_miles(*p, *p) == 0


def test_distance_known_value():
    # LA -> San Francisco, roughly 347 miles great-circle
    d = distance_miles(34.0522, -118.2437, 37.7749, -122.4194)
    assert 340 < d < 355


def test_one_degree_latitude_is_about_69_miles():
    assert distance_miles(10.0, 20.0, 11.0, 20.0) == pytest.approx(69.09, abs=0.1)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_distance_non_finite_input(bad):
    assert math.isnan(distance_miles(bad, 0.0, 1.0, 1.0))
    assert math.isnan(distance_miles(0.0, 0.0, 1.0, bad))


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("80", 80.0),
        (55, 55.0),
        ("150", 100.0),
        ("-3", 0.0),
        ("l", 30.0),
        ("n", 60.0),
        ("h", 90.0),
        ("Nominal", 60.0),
        (" HIGH ", 90.0),
        ("low", 30.0),
        ("bogus", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("nan", 0.0),
    ],
)
def test_confidence_to_percent(raw, expected):
    assert confidence_to_percent(raw) == expected


@pytest.mark.parametrize(
    "brightness,expected",
    [
        (295.0, BrightnessCategory.CALM),
        (319.99, BrightnessCategory.CALM),
        (320.0, BrightnessCategory.MODERATE),
        (330.0, BrightnessCategory.MODERATE),
        (345.0, BrightnessCategory.HIGH),
        (360.0, BrightnessCategory.SEVERE),
        (410.0, BrightnessCategory.SEVERE),
        (math.nan, BrightnessCategory.UNKNOWN),
        (None, BrightnessCategory.UNKNOWN),
    ],
)
def test_brightness_category(brightness, expected):
    assert brightness_category(brightness) is expected


def test_is_predictable():
    assert is_predictable(330.0, 80.0)
    assert is_predictable(325.0, 50.0)
    assert not is_predictable(324.9, 90.0)
    assert not is_predictable(340.0, 30.0)
    assert not is_predictable(math.nan, 90.0)


class TestFlareHeuristic:
    def test_small_night_hotspot_is_flare(self):
        assert is_likely_flare("N", 1.2, 305.0, 30.0)

    def test_daytime_is_never_flare(self):
        assert not is_likely_flare("D", 1.2, 305.0, 30.0)

    @pytest.mark.parametrize(
        "frp,brightness,confidence",
        [
            (5.0, 305.0, 30.0),  # frp at limit
            (1.2, 330.0, 30.0),  # brightness at limit
            (1.2, 305.0, 60.0),  # confidence at limit
        ],
    )
    def test_limits_are_exclusive(self, frp, brightness, confidence):
        assert not is_likely_flare("N", frp, brightness, confidence)

    def test_missing_values_are_not_flares(self):
        assert not is_likely_flare("N", math.nan, 305.0, 30.0)
        assert not is_likely_flare("N", 1.2, math.nan, 30.0)

    def test_lowercase_and_padded_flag(self):
        assert is_likely_flare(" n ", 1.2, 305.0, 30.0)

    def test_custom_thresholds(self):
        strict = FlareThresholds(max_frp=1.0, max_brightness=300.0, max_confidence=20.0)
        assert not is_likely_flare("N", 1.2, 305.0, 30.0, strict)
        loose = FlareThresholds(max_frp=20.0, max_brightness=400.0, max_confidence=100.0)
        assert is_likely_flare("N", 15.0, 350.0, 90.0, loose)

    def test_deterministic(self):
        results = {is_likely_flare("N", 2.0, 310.0, 40.0) for _ in range(10)}
        assert results == {True}


def test_bbox_around():
    bbox = bbox_around(34.0, -117.5, 69.0)
    assert (bbox.west, bbox.south, bbox.east, bbox.north) == (-118.5, 33.0, -116.5, 35.0)
    assert bbox.to_firms() == "-118.5,33,-116.5,35"


def test_bbox_around_is_clamped():
    bbox = bbox_around(89.5, 179.8, 100.0)
    assert bbox.north == 90.0
    assert bbox.east == 180.0
