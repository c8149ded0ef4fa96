"""Application layer.

Where: src/tagprobe/application/__init__.py
What: Expose the extraction services.
Why: Keep host code away from feature internals.
"""
