"""
Style pack system.

Style packs hold the designer-authored pools a room is generated from: floor
meshes, wall modules, doors and ceiling tiles.

Usage:
    from gridroom.generators.styles import STYLE_CATALOG

    packs = STYLE_CATALOG.get_style("Stone Keep")

    # Load a custom style and make it available by name
    from gridroom.generators.styles import load_style_packs
    STYLE_CATALOG.register(load_style_packs("my_style.json"))
"""

from .style_pack import (
    CeilingStyle,
    CeilingTile,
    FloorStyle,
    StyleCatalog,
    StylePacks,
    WallStyle,
)
from .style_storage import (
    dict_to_styles,
    get_styles_dir,
    load_all_saved_styles,
    load_style_packs,
    save_style_packs,
    styles_to_dict,
)

# Global catalog singleton
STYLE_CATALOG = StyleCatalog()

# Built-in style names (protected from reload)
BUILTIN_STYLE_NAMES = {"Stone Keep"}

from .builtin import STONE_KEEP_STYLE, STONE_KEEP_MANIFEST

STYLE_CATALOG.register(STONE_KEEP_STYLE)


def reload_custom_styles(styles_dir=None) -> int:
    """
    Reload saved styles into the catalog, replacing any previously loaded ones.

    Returns:
        Number of custom styles loaded
    """
    for name in list(STYLE_CATALOG.list_styles()):
        if name not in BUILTIN_STYLE_NAMES:
            STYLE_CATALOG.unregister(name)

    loaded = 0
    for packs in load_all_saved_styles(styles_dir):
        if packs.name in BUILTIN_STYLE_NAMES:
            continue
        STYLE_CATALOG.register(packs)
        loaded += 1
    return loaded


__all__ = [
    'CeilingStyle',
    'CeilingTile',
    'FloorStyle',
    'StyleCatalog',
    'StylePacks',
    'WallStyle',
    'STYLE_CATALOG',
    'BUILTIN_STYLE_NAMES',
    'STONE_KEEP_STYLE',
    'STONE_KEEP_MANIFEST',
    'dict_to_styles',
    'get_styles_dir',
    'load_all_saved_styles',
    'load_style_packs',
    'save_style_packs',
    'styles_to_dict',
    'reload_custom_styles',
]
