"""
Unified test infrastructure for jtpl.

This package contains common utilities and helpers
used across all tests to avoid code duplication.

Modules:
- file_utils: Utilities for creating files and directories
- rendering_utils: Utilities for compiling and rendering templates
- cli_utils: Utilities for running the CLI
"""

from .file_utils import write, write_template
from .rendering_utils import render_text, make_engine, render_file
from .cli_utils import run_cli, jload

__all__ = [
    # File utilities
    "write", "write_template",

    # Rendering utilities
    "render_text", "make_engine", "render_file",

    # CLI utilities
    "run_cli", "jload",
]
