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
Paste Usage

Estimates the solder paste needed to stencil-print a KiCad board.
"""

from .common.sexp_parser import ParseError, dump_sexp, parse_sexp
from .errors import PasteUsageError
from .pcbnew import (
    ComputationError, ExtractionError, PasteConfig, PasteUsage,
    calculate_paste_usage, calculate_paste_usage_file,
)

__all__ = [
    'ComputationError', 'ExtractionError', 'ParseError', 'PasteConfig', 'PasteUsage',
    'PasteUsageError', 'calculate_paste_usage', 'calculate_paste_usage_file',
    'dump_sexp', 'parse_sexp',
]
