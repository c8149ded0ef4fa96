"""Service entry points for hosts.

Where: src/tagprobe/application/services/__init__.py
What: Re-export descriptor and path extraction with default adapters wired in.
Why: Give hosts a stable import path.
"""

from .extract_service import build_assembler, extract_metadata, extract_metadata_from_path

__all__ = ["build_assembler", "extract_metadata", "extract_metadata_from_path"]
