"""
Bundled sequences.
"""

from animatic.story.old_fangled import old_fangled_future

__all__ = ["old_fangled_future"]
