"""Unit tests for the solder paste mass calculator."""

import math

import pytest

from pasteusage.pcbnew.paste_calculator import (
    ComputationError,
    PasteConfig,
    calculate_from_config,
    calculate_paste_mass,
    normalize_metal_fraction,
    paste_density,
)


# ─── Metal fraction ───


def test_percentage_and_fraction_are_equivalent():
    assert normalize_metal_fraction(88) == normalize_metal_fraction(0.88)
    assert paste_density(88, 8.74, 1.0) == paste_density(0.88, 8.74, 1.0)


@pytest.mark.parametrize("value, expected", [
    (150, 1.0),
    (100, 1.0),
    (1, 1.0),
    (0, 0.0),
    (-5, 0.0),
    (-0.2, 0.0),
    (87.75, 0.8775),
])
def test_metal_fraction_clamped(value, expected):
    assert normalize_metal_fraction(value) == pytest.approx(expected)


# ─── Density ───


def test_mixture_density():
    assert paste_density(0.8775, 7.4, 1.0) == pytest.approx(7.4 / (0.8775 + 0.1225 * 7.4))
    assert paste_density(0.8775, 7.4, 1.0) == pytest.approx(4.148, abs=1e-3)


def test_density_bounds():
    assert paste_density(1.0, 8.74, 1.0) == pytest.approx(8.74)
    assert paste_density(0.0, 8.74, 1.0) == pytest.approx(1.0)


def test_zero_denominator():
    with pytest.raises(ComputationError):
        paste_density(0.5, 0.0, 0.0)


def test_negative_density():
    with pytest.raises(ComputationError):
        paste_density(0.0, 8.74, -1.0)


# ─── Mass ───


def test_front_mass_example():
    mass = calculate_paste_mass(100.0, 0.0, 0.12, 0.8775, 7.4, 1.0)
    density = 7.4 / (0.8775 + 0.1225 * 7.4)
    assert mass.paste_density == pytest.approx(density)
    assert mass.front_mass == pytest.approx(100 * 0.12 / 1000 * density)
    assert mass.front_mass == pytest.approx(0.0498, abs=1e-4)
    assert mass.back_mass == 0.0
    assert mass.total_mass == mass.front_mass


def test_total_is_sum():
    mass = calculate_paste_mass(10.0, 5.0, 0.1, 88, 8.74, 1.0)
    assert mass.total_mass == pytest.approx(mass.front_mass + mass.back_mass)
    assert mass.back_mass == pytest.approx(mass.front_mass / 2)
    assert mass.metal_fraction == pytest.approx(0.88)


def test_zero_area_gives_zero_mass():
    mass = calculate_from_config(0.0, 0.0, PasteConfig())
    assert mass.front_mass == 0
    assert mass.back_mass == 0
    assert mass.total_mass == 0


def test_default_config():
    config = PasteConfig()
    assert config.metal_fraction == pytest.approx(0.8775)
    assert config.stencil_thickness == pytest.approx(0.12)
    assert config.alloy_density == pytest.approx(8.74)
    assert config.flux_density == pytest.approx(1.0)


@pytest.mark.parametrize("area", [math.inf, math.nan])
def test_non_finite_mass(area):
    with pytest.raises(ComputationError):
        calculate_paste_mass(area, 0.0, 0.12, 0.8775, 8.74, 1.0)
