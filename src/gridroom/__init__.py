"""
Grid Room Generator.

Procedurally fills a single grid-based room with floor tiles, props, walls,
doors, layered wall dressing, corner pieces and a ceiling, driven by one
integer seed, a set of style pools and designer overrides.
"""

__version__ = '1.0.0'
