"""User interfaces for tagprobe.

Where: src/tagprobe/ui/__init__.py
What: Group host front ends.
Why: Keep presentation apart from extraction.
"""
