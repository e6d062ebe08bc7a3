"""
Built-in style packs.

- STONE_KEEP_STYLE: castle interior demo style (with its mesh manifest)
"""

from .stone_keep import STONE_KEEP_STYLE, STONE_KEEP_MANIFEST

__all__ = ['STONE_KEEP_STYLE', 'STONE_KEEP_MANIFEST']
