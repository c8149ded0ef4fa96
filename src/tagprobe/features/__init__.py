"""Feature packages.

Where: src/tagprobe/features/__init__.py
What: Group each feature's domain, use cases and adapters.
Why: Keep features independent of one another.
"""
