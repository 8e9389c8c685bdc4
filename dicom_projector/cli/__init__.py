"""DICOM Projector CLI Package.

Public API:
- main: CLI entry point
"""

from dicom_projector.cli.main import main

__all__ = ["main"]
