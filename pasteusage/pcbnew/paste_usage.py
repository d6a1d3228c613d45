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
Solder Paste Usage

Computes the amount of solder paste needed to stencil-print every surface
mount pad of a KiCad .kicad_pcb file.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..common.sexp_parser import ParseError, parse_sexp
from ..errors import PasteUsageError
from .pad_extractor import extract_pad_totals
from .paste_calculator import PasteConfig, calculate_from_config

logger = logging.getLogger(__name__)


@dataclass
class PasteUsage:
    """Result of a paste usage calculation."""
    pad_count: int
    front_area: float       # mm2
    back_area: float        # mm2
    paste_density: float    # g/cm3
    front_mass: float       # g
    back_mass: float        # g
    total_mass: float       # g
    metal_fraction: float   # 0..1
    stencil_thickness: float  # mm
    ignored_pads: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_paste_usage(content: str, config: Optional[PasteConfig] = None) -> PasteUsage:
    """
    Calculate solder paste usage for a board.

    Args:
        content: The .kicad_pcb file content as a string
        config: Stencil and paste parameters, defaults if omitted

    Returns:
        PasteUsage

    Raises:
        ParseError: if the content is not a well-formed S-expression
        ExtractionError: if the content is not a board
        ComputationError: if the paste mass cannot be computed
    """
    if config is None:
        config = PasteConfig()

    board = parse_sexp(content)
    totals = extract_pad_totals(board)
    mass = calculate_from_config(totals.front_area, totals.back_area, config)

    return PasteUsage(
        pad_count=totals.pad_count,
        front_area=totals.front_area,
        back_area=totals.back_area,
        paste_density=mass.paste_density,
        front_mass=mass.front_mass,
        back_mass=mass.back_mass,
        total_mass=mass.total_mass,
        metal_fraction=mass.metal_fraction,
        stencil_thickness=config.stencil_thickness,
        ignored_pads=totals.ignored_pads,
    )


def calculate_paste_usage_file(path: str, config: Optional[PasteConfig] = None) -> PasteUsage:
    """
    Read a .kicad_pcb file and calculate its solder paste usage.

    Raises:
        OSError: if the file cannot be read
        ParseError: if the file is not UTF-8 text or not a well-formed S-expression
        ExtractionError: if the content is not a board
        ComputationError: if the paste mass cannot be computed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"File is not UTF-8 text: {e.reason} at byte {e.start}") from e
    logger.debug("Read %d characters from %s", len(content), path)
    return calculate_paste_usage(content, config)


RULE = "------------------------------------"


def format_report(usage: PasteUsage) -> str:
    """Render a PasteUsage as the plain text console report."""
    lines = [
        f"Metal Amount: \t\t\t{usage.metal_fraction * 100:.2f} %",
        f"Stencil Thickness: \t\t{usage.stencil_thickness:.2f} mm",
        f"Solder Paste Gravity: \t{usage.paste_density:.2f} g/cm3",
        RULE,
        f"Total Number of Pads: \t{usage.pad_count}",
        f"Pad Area - Front: \t\t{usage.front_area:.2f} mm2",
        f"Pad Area - Back: \t\t{usage.back_area:.2f} mm2",
        RULE,
        f"Solder Paste - Front: \t{usage.front_mass:.2f} g",
        f"Solder Paste - Back: \t{usage.back_mass:.2f} g",
        f"Solder Paste - Total: \t{usage.total_mass:.2f} g",
        RULE,
    ]
    return "\n".join(lines)


# =============================================================================
# Command-line interface
# =============================================================================

def build_arg_parser() -> argparse.ArgumentParser:
    defaults = PasteConfig()
    parser = argparse.ArgumentParser(
        prog="paste-usage",
        description="Extracts the amount of solder paste used for the input board",
    )
    parser.add_argument(
        "-f", "--file",
        dest="file",
        metavar="FILE",
        required=True,
        help="KiCad PCB file"
    )
    parser.add_argument(
        "-s", "--stencil",
        dest="stencil_thickness",
        metavar="THICKNESS",
        type=float,
        default=defaults.stencil_thickness,
        help="Stencil thickness (mm)"
    )
    parser.add_argument(
        "-m", "--metal",
        dest="metal_fraction",
        metavar="AMOUNT",
        type=float,
        default=defaults.metal_fraction,
        help="Amount of metal in solder paste (%% or fraction)"
    )
    parser.add_argument(
        "--alloy-density",
        dest="alloy_density",
        type=float,
        default=defaults.alloy_density,
        help="Alloy density (g/cm3)"
    )
    parser.add_argument(
        "--flux-density",
        dest="flux_density",
        type=float,
        default=defaults.flux_density,
        help="Flux density (g/cm3)"
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )

    if not os.path.isfile(args.file):
        print(f"KiCad PCB file not found - {os.path.abspath(args.file)}", file=sys.stderr)
        return 1

    config = PasteConfig(
        metal_fraction=args.metal_fraction,
        stencil_thickness=args.stencil_thickness,
        alloy_density=args.alloy_density,
        flux_density=args.flux_density,
    )

    try:
        usage = calculate_paste_usage_file(args.file, config)
    except (PasteUsageError, OSError) as e:
        print("Unable to calculate solder paste amount", file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(usage.to_dict(), indent=2))
    else:
        for pad in usage.ignored_pads:
            print(f"Ignored Pad: {pad}")
        print(format_report(usage))

    return 0


if __name__ == "__main__":
    sys.exit(main())
