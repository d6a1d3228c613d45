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
Common utilities for paste usage calculation.

This package contains the S-expression parser and the permissive helper
functions used to pull typed values out of parsed KiCad files.
"""
