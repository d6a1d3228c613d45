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
Pcbnew paste usage module.

Pad extraction and solder paste calculation for .kicad_pcb files.
"""

from .pad_extractor import ExtractionError, PadRecord, PadTotals, extract_pad_totals
from .paste_calculator import ComputationError, PasteConfig, PasteMass, calculate_paste_mass
from .paste_usage import PasteUsage, calculate_paste_usage, calculate_paste_usage_file

__all__ = [
    'ComputationError', 'ExtractionError', 'PadRecord', 'PadTotals', 'PasteConfig',
    'PasteMass', 'PasteUsage', 'calculate_paste_mass', 'calculate_paste_usage',
    'calculate_paste_usage_file', 'extract_pad_totals',
]
