#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for devapps parsing.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy.
"""

from __future__ import annotations

from devapps.options.base import BaseParserOptions, CloneFrozenMixin
from devapps.options.register import RegisterOptions

__all__ = ["BaseParserOptions", "CloneFrozenMixin", "RegisterOptions"]
