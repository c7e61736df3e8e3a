#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/__init__.py
"""Parsers package initialization.

This package holds the register parser and the two table reconstruction
strategies it chooses between.
"""

from devapps.parsers.base import BaseParser, PageSource, PageSynthesizer
from devapps.parsers.register import RegisterParser, select_synthesizer

__all__ = ["BaseParser", "PageSource", "PageSynthesizer", "RegisterParser", "select_synthesizer"]
