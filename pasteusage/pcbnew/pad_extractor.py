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
Pad Geometry Extractor

Walks a parsed .kicad_pcb tree and recovers the printable area of every
surface-mount pad on the front and back paste layers.

Pads are found by filtering on tag at two fixed depths: footprints are
direct children of the board, pads are direct children of a footprint.
Pad fields are read at fixed positional offsets of the board file format:

    (pad "1" smd roundrect (at 0 0) (size 1.2 0.9) (layers "F.Cu" "F.Paste" ...) ...)
     0   1   2   3         4        5               6

The preceding tags are not checked. A pad whose fields cannot be read is
not an error, it is simply not counted.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Tuple

from ..common.sexp_helpers import find_elements, get_atom, get_atom_list, get_float_list
from ..common.sexp_parser import Node, dump_sexp
from ..errors import PasteUsageError

logger = logging.getLogger(__name__)


# KiCad 6+ writes "footprint", KiCad 5 and older wrote "module"
COMPONENT_TAGS = ("footprint", "module")
PAD_TAG = "pad"
SMD_PAD_TYPE = "smd"

FRONT_PASTE = "F.Paste"
BACK_PASTE = "B.Paste"

PAD_TYPE_INDEX = 2
PAD_SHAPE_INDEX = 3
PAD_SIZE_INDEX = 5
PAD_LAYERS_INDEX = 6

RECT_SHAPES = frozenset(("rect", "roundrect"))
ELLIPSE_SHAPES = frozenset(("circle", "oval"))


class ExtractionError(PasteUsageError):
    """Raised when the parsed tree cannot be a board at all."""


@dataclass(frozen=True)
class PadRecord:
    """Typed view of one qualifying pad."""
    kind: str
    shape: str
    size: Tuple[float, float]
    layers: FrozenSet[str]
    source: Optional[list] = field(default=None, compare=False, repr=False)

    def on_layer(self, layer: str) -> bool:
        return layer in self.layers


@dataclass
class PadTotals:
    """Aggregated pad areas for a board."""
    pad_count: int = 0
    front_area: float = 0.0   # mm2
    back_area: float = 0.0    # mm2
    ignored_pads: List[str] = field(default_factory=list)


def _check_root(root: Node):
    if not isinstance(root, list):
        raise ExtractionError(f"Board root must be a list, got atom {dump_sexp(root)}")


def iter_components(root: Node) -> Iterator[list]:
    """Yield footprint records of the board in document order."""
    _check_root(root)
    for item in root:
        if isinstance(item, list) and len(item) > 0 and item[0] in COMPONENT_TAGS:
            yield item


def iter_pads(root: Node) -> Iterator[list]:
    """Yield every pad list of every footprint in document order."""
    for component in iter_components(root):
        yield from find_elements(component, PAD_TAG)


def decode_pad(pad: Node) -> Optional[PadRecord]:
    """Decode a pad list into a PadRecord.

    Returns None if any field is missing or malformed, or if the pad is not
    an smd pad.
    """
    if get_atom(pad, 0) != PAD_TAG:
        return None

    kind = get_atom(pad, PAD_TYPE_INDEX)
    shape = get_atom(pad, PAD_SHAPE_INDEX)
    size = get_float_list(pad, PAD_SIZE_INDEX)
    layers = get_atom_list(pad, PAD_LAYERS_INDEX)

    if kind != SMD_PAD_TYPE or shape is None or layers is None:
        return None
    if size is None or len(size) < 2:
        return None

    return PadRecord(
        kind=kind,
        shape=shape,
        size=(size[0], size[1]),
        layers=frozenset(layers),
        source=pad,
    )


def pad_area(pad: PadRecord) -> Optional[float]:
    """Printable area of a pad in mm2, or None if its shape is unknown."""
    width, height = pad.size
    if pad.shape in RECT_SHAPES:
        return width * height
    if pad.shape in ELLIPSE_SHAPES:
        return (width / 2) * (height / 2) * math.pi
    return None


def iter_pad_records(root: Node) -> Iterator[PadRecord]:
    """Yield a PadRecord for every qualifying smd pad in document order."""
    for pad in iter_pads(root):
        record = decode_pad(pad)
        if record is not None:
            yield record


def layer_area(root: Node, layer: str) -> float:
    """Total qualifying pad area (mm2) exposed on ``layer``."""
    return sum(
        pad_area(record) or 0.0
        for record in iter_pad_records(root)
        if record.on_layer(layer)
    )


def count_pads(root: Node) -> int:
    """Number of qualifying smd pads, regardless of layer."""
    return sum(1 for _ in iter_pad_records(root))


def extract_pad_totals(root: Node, front_layer: str = FRONT_PASTE,
                       back_layer: str = BACK_PASTE) -> PadTotals:
    """
    Compute pad count, front/back paste area and ignored pads in one pass.

    Args:
        root: Parsed board tree
        front_layer: Layer name summed into ``front_area``
        back_layer: Layer name summed into ``back_area``

    Returns:
        PadTotals; ``ignored_pads`` holds the serialized source of every
        qualifying pad with an unknown shape, in document order.

    Raises:
        ExtractionError: if ``root`` is not a list
    """
    totals = PadTotals()

    for record in iter_pad_records(root):
        totals.pad_count += 1
        area = pad_area(record)

        if area is None:
            text = dump_sexp(record.source)
            logger.info("Ignored pad with unknown shape %r: %s", record.shape, text)
            totals.ignored_pads.append(text)
            continue

        if record.on_layer(front_layer):
            totals.front_area += area
        if record.on_layer(back_layer):
            totals.back_area += area

    logger.debug(
        "Found %d smd pads: front %.4f mm2, back %.4f mm2, %d ignored",
        totals.pad_count, totals.front_area, totals.back_area, len(totals.ignored_pads),
    )
    return totals
