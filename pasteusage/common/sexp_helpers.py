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
S-Expression Helper Functions

Permissive helpers for extracting data from parsed S-expressions. None of
them raise: a lookup that is out of range, hits the wrong node type, or
fails numeric parsing returns None.
"""

from typing import List, Optional


def find_elements(sexp_list: List, name: str) -> List[List]:
    """Find all elements with given name in S-expression list."""
    if not isinstance(sexp_list, list):
        return []
    return [
        item for item in sexp_list
        if isinstance(item, list) and len(item) > 0 and item[0] == name
    ]


def get_atom(sexp_list: List, index: int) -> Optional[str]:
    """Get the atom at ``index``, or None if there is no atom there."""
    if not isinstance(sexp_list, list) or not 0 <= index < len(sexp_list):
        return None
    value = sexp_list[index]
    if isinstance(value, str):
        return value
    return None


def get_atom_list(sexp_list: List, index: int) -> Optional[List[str]]:
    """Get the atoms following the tag of the child list at ``index``.

    ``(pad "1" smd rect (at 1 2) (size 1.2 0.9) (layers "F.Cu" "F.Paste"))``
    with index 6 yields ``["F.Cu", "F.Paste"]``. Nested lists are skipped.
    """
    if not isinstance(sexp_list, list) or not 0 <= index < len(sexp_list):
        return None
    child = sexp_list[index]
    if not isinstance(child, list):
        return None
    return [item for item in child[1:] if isinstance(item, str)]


def get_float_list(sexp_list: List, index: int) -> Optional[List[float]]:
    """Like get_atom_list, parsed as floats. None if any value is not numeric."""
    atoms = get_atom_list(sexp_list, index)
    if atoms is None:
        return None
    try:
        return [float(atom) for atom in atoms]
    except (ValueError, TypeError):
        return None
