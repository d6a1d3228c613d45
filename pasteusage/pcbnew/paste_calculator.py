#
# This program source code file is part of Paste Usage, a solder paste estimator for KiCad boards.
#
# Copyright (C) 2025-2026 Paste Usage Developers Team
# Copyright The Paste Usage Developers, see AUTHORS.txt for contributors.
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# This program is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Solder Paste Calculator

Turns printable pad areas into solder paste mass. All lengths in mm.

Paste density follows a volume-additive mixture of alloy and flux, see
https://www.indium.com/blog/calculating-solder-paste-usage.php
"""

import logging
import math
from dataclasses import dataclass

from ..errors import PasteUsageError

logger = logging.getLogger(__name__)


DEFAULT_METAL_FRACTION = 0.8775     # 87.75 %
DEFAULT_STENCIL_THICKNESS = 0.12    # mm
DEFAULT_ALLOY_DENSITY = 8.74        # g/cm3
DEFAULT_FLUX_DENSITY = 1.00         # g/cm3

MM3_PER_CM3 = 1000.0


class ComputationError(PasteUsageError):
    """Raised when a paste mass formula yields a non-finite or non-physical result."""


@dataclass(frozen=True)
class PasteConfig:
    """Stencil and paste parameters for one run."""
    metal_fraction: float = DEFAULT_METAL_FRACTION   # fraction or percentage
    stencil_thickness: float = DEFAULT_STENCIL_THICKNESS
    alloy_density: float = DEFAULT_ALLOY_DENSITY
    flux_density: float = DEFAULT_FLUX_DENSITY


@dataclass(frozen=True)
class PasteMass:
    front_mass: float      # g
    back_mass: float       # g
    total_mass: float      # g
    paste_density: float   # g/cm3
    metal_fraction: float  # normalized, 0..1


def normalize_metal_fraction(value: float) -> float:
    """Interpret values above 1 as a percentage and clamp to [0, 1]."""
    if value > 1:
        value = value / 100.0
    return min(max(value, 0.0), 1.0)


def _check_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise ComputationError(f"{name} is not finite ({value})")
    return value


def paste_density(metal_fraction: float, alloy_density: float, flux_density: float) -> float:
    """Density of the paste mixture in g/cm3."""
    metal = normalize_metal_fraction(metal_fraction)
    denominator = metal * flux_density + (1.0 - metal) * alloy_density
    if denominator == 0:
        raise ComputationError(
            f"Paste density undefined for metal fraction {metal}, "
            f"alloy density {alloy_density}, flux density {flux_density}"
        )

    density = _check_finite("Paste density", (alloy_density * flux_density) / denominator)
    if density <= 0:
        raise ComputationError(f"Paste density must be positive, got {density}")
    return density


def calculate_paste_mass(front_area: float, back_area: float, stencil_thickness: float,
                         metal_fraction: float, alloy_density: float,
                         flux_density: float) -> PasteMass:
    """
    Compute paste mass for the front and back of a board.

    Args:
        front_area: Printable pad area on the front paste layer (mm2)
        back_area: Printable pad area on the back paste layer (mm2)
        stencil_thickness: Stencil thickness (mm)
        metal_fraction: Metal content, as fraction (0.8775) or percentage (87.75)
        alloy_density: Alloy density (g/cm3)
        flux_density: Flux density (g/cm3)

    Returns:
        PasteMass with masses in grams

    Raises:
        ComputationError: if any result is not finite or the density is not positive
    """
    density = paste_density(metal_fraction, alloy_density, flux_density)

    front_volume = front_area * stencil_thickness   # mm3
    back_volume = back_area * stencil_thickness     # mm3

    front_mass = _check_finite("Front paste mass", (front_volume / MM3_PER_CM3) * density)
    back_mass = _check_finite("Back paste mass", (back_volume / MM3_PER_CM3) * density)

    logger.debug("Paste density %.4f g/cm3, front %.4f g, back %.4f g",
                 density, front_mass, back_mass)

    return PasteMass(
        front_mass=front_mass,
        back_mass=back_mass,
        total_mass=front_mass + back_mass,
        paste_density=density,
        metal_fraction=normalize_metal_fraction(metal_fraction),
    )


def calculate_from_config(front_area: float, back_area: float, config: PasteConfig) -> PasteMass:
    return calculate_paste_mass(
        front_area, back_area,
        config.stencil_thickness, config.metal_fraction,
        config.alloy_density, config.flux_density,
    )
