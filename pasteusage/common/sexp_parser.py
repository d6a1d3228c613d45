#!/usr/bin/env python3
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
S-Expression Parser

Single-pass parser for KiCad S-expression files.

The parsed tree uses plain Python values: an atom is a ``str`` holding the
token text (quotes removed, escapes decoded, never converted to a number)
and a list is a ``list`` of child nodes.
"""

from typing import Iterator, List, Optional, Union

from ..errors import PasteUsageError


Node = Union[str, List["Node"]]

_END = object()

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
}

_UNESCAPES = {value: '\\' + key for key, value in _ESCAPES.items()}


class ParseError(PasteUsageError):
    """Raised when the input is not well-formed S-expression text."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Parse error at line {line}, column {column}: {message}")


class SexpParser:
    """S-expression parser; open lists are tracked on an explicit stack."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def error(self, message: str, pos: Optional[int] = None) -> ParseError:
        """Build a ParseError pointing at ``pos`` (default: current position)."""
        if pos is None:
            pos = self.pos
        line = self.text.count('\n', 0, pos) + 1
        column = pos - (self.text.rfind('\n', 0, pos) + 1) + 1
        return ParseError(message, line, column)

    def skip_whitespace(self):
        """Skip whitespace characters."""
        while self.pos < self.length and self.text[self.pos].isspace():
            self.pos += 1

    def parse(self) -> Node:
        """Parse exactly one root node and make sure nothing follows it."""
        self.skip_whitespace()
        if self.pos >= self.length:
            raise self.error("Empty input")

        root = self.parse_node()

        self.skip_whitespace()
        if self.pos < self.length:
            if self.text[self.pos] == ')':
                raise self.error("Unbalanced closing parenthesis")
            raise self.error("Unexpected content after root expression")

        return root

    def parse_node(self) -> Node:
        """Parse the list or atom starting at the current position."""
        char = self.text[self.pos]
        if char == '(':
            return self.parse_list()
        if char == ')':
            raise self.error("Unbalanced closing parenthesis")
        if char == '"':
            return self.parse_quoted_string()
        return self.parse_atom()

    def parse_list(self) -> List[Node]:
        """Parse a list (parenthesized expression).

        Open lists are kept on an explicit stack of (start, children) so
        nesting depth is not bounded by the interpreter's recursion limit.
        """
        stack = [(self.pos, [])]
        self.pos += 1  # Skip '('

        while True:
            self.skip_whitespace()

            if self.pos >= self.length:
                start, _ = stack[-1]
                raise self.error("Unclosed parenthesis", start)

            char = self.text[self.pos]

            if char == '(':
                stack.append((self.pos, []))
                self.pos += 1
            elif char == ')':
                self.pos += 1
                _, finished = stack.pop()
                if not stack:
                    return finished
                stack[-1][1].append(finished)
            elif char == '"':
                stack[-1][1].append(self.parse_quoted_string())
            else:
                stack[-1][1].append(self.parse_atom())

    def parse_atom(self) -> str:
        """Parse an unquoted atom, read until whitespace or a delimiter."""
        start = self.pos

        while self.pos < self.length:
            char = self.text[self.pos]
            if char.isspace() or char in '()"':
                break
            self.pos += 1

        return self.text[start:self.pos]

    def parse_quoted_string(self) -> str:
        """Parse a quoted string with escape sequences."""
        start = self.pos
        self.pos += 1  # Skip opening quote
        result = []

        while self.pos < self.length:
            char = self.text[self.pos]

            if char == '"':
                self.pos += 1
                return ''.join(result)

            if char == '\\' and self.pos + 1 < self.length:
                next_char = self.text[self.pos + 1]
                result.append(_ESCAPES.get(next_char, next_char))
                self.pos += 2
                continue

            result.append(char)
            self.pos += 1

        raise self.error("Unterminated string", start)


def parse_sexp(string: str) -> Node:
    """
    Parse a S-expression string into Python objects.

    Raises:
        ParseError: if the text is empty, unbalanced, or has an
            unterminated string. No partial tree is returned.
    """
    return SexpParser(string).parse()


def _needs_quotes(atom: str) -> bool:
    if not atom:
        return True
    return any(c.isspace() or c in '()"\\' for c in atom)


def dump_atom(atom: str) -> str:
    if not _needs_quotes(atom):
        return atom
    escaped = ''.join(_UNESCAPES.get(c, c) for c in atom)
    return f'"{escaped}"'


def _iter_tokens(node: Node) -> Iterator[str]:
    if not isinstance(node, list):
        yield dump_atom(node)
        return

    yield '('
    stack = [iter(node)]
    while stack:
        child = next(stack[-1], _END)
        if child is _END:
            stack.pop()
            yield ')'
        elif isinstance(child, list):
            yield '('
            stack.append(iter(child))
        else:
            yield dump_atom(child)


def dump_sexp(node: Node) -> str:
    """Serialize a parsed node back to single-line S-expression text."""
    parts = []
    previous = None
    # Atoms that are '(' or ')' are always quoted, so bare parens are delimiters
    for token in _iter_tokens(node):
        if previous is not None and previous != '(' and token != ')':
            parts.append(' ')
        parts.append(token)
        previous = token
    return ''.join(parts)
