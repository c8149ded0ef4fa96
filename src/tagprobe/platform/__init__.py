"""Platform services.

Where: src/tagprobe/platform/__init__.py
What: Group logging and OS descriptor handling.
Why: Keep OS and process-wide concerns out of features.
"""
