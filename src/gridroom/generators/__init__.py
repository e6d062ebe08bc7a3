"""
Room content generators: occupancy grids, random streams, the room algorithms,
style packs and shape presets.
"""
