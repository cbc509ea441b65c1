"""Quill language package.

A lexer, recursive descent parser and tree-walk interpreter for Quill, a
small imperative scripting language with numbers, booleans and a single flat
variable namespace.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from quill.runner import run_source

__all__ = ["run_source"]
