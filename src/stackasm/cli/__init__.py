"""
stackasm Command-Line Interface
===============================

- **stkasm**: parse a source file, print its listing and diagnostics

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["stkasm"]
