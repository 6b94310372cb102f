"""
Palette loader and color assignment for highlighted fields.

A palette is an ordered list of hex colors. It comes either from a named
preset in palettes.yaml or from an explicit comma-separated list given on the
command line. ColorAssignment fixes the color of every rule once per run.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..models.rules import RuleSet
from .log import LOG


PALETTES_FILE: Path = Path(__file__).parent.parent / "assets" / "palettes.yaml"

HEX_COLOR = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class PaletteError(Exception):
    """Raised when a palette cannot be loaded or a color list is invalid"""
    pass


def presets_load(palettes_file: Optional[Path] = None) -> Dict[str, List[str]]:
    """
    Load named palettes from a YAML file.

    Each top-level key is a palette name holding ``colors`` and optionally
    ``aliases``. Names are stored lowercase.

    Args:
        palettes_file: YAML file to read (default: packaged palettes.yaml)

    Returns:
        Dict mapping every name and alias to its color list
    """
    path = Path(palettes_file) if palettes_file else PALETTES_FILE
    try:
        with open(path, 'r') as f:
            config: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PaletteError(f"Failed to parse {path.name}: {e}")
    except OSError as e:
        raise PaletteError(f"Failed to load palettes from {path}: {e}")

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise PaletteError(f"{path.name} must map palette names to definitions")

    presets: Dict[str, List[str]] = {}
    for name, entry in config.items():
        if not isinstance(entry, dict) or not entry.get('colors'):
            raise PaletteError(f"Palette '{name}' has no colors")
        colors = colors_validate(colors_fromYaml(name, entry['colors']))
        aliases = entry.get('aliases') or []
        if not isinstance(aliases, list):
            raise PaletteError(f"Palette '{name}': aliases must be a list, e.g. [{aliases}]")
        for key in [name, *aliases]:
            presets[str(key).lower()] = colors

    return presets


def colors_fromYaml(name: Any, colors: Any) -> List[str]:
    """
    Check that every color of a YAML palette was read as a string.

    YAML reads unquoted values such as 001100 or 000000 as numbers, which
    would silently turn into different colors.
    """
    if not isinstance(colors, list):
        raise PaletteError(f"Palette '{name}': colors must be a list")
    for color in colors:
        if not isinstance(color, str):
            raise PaletteError(
                f"Palette '{name}': color {color!r} was not read as text; quote it in the YAML file"
            )
    return colors


def palettes_listAvailable(palettes_file: Optional[Path] = None) -> list[str]:
    """List all preset names and aliases, sorted"""
    return sorted(presets_load(palettes_file))


def colors_validate(colors: List[str]) -> List[str]:
    """
    Normalise a list of hex colors.

    Strips whitespace and any leading '#', lowercases the digits.

    Raises:
        PaletteError: if the list is empty or an entry is not 3 or 6 hex digits
    """
    if not colors:
        raise PaletteError("No colours have been specified so no output can be produced!")

    normalised: List[str] = []
    for color in colors:
        match = HEX_COLOR.match(color.strip())
        if not match:
            raise PaletteError(f"'{color}' is not a hex color (expected e.g. 'ccc' or 'a2ff88')")
        normalised.append(match.group(1).lower())
    return normalised


def palette_resolve(spec: str, palettes_file: Optional[Path] = None) -> List[str]:
    """
    Turn a --colors value into a palette.

    A value naming a preset (case-insensitive) selects it; anything else is
    read as a comma-separated list of hex colors.

    Example:
        >>> palette_resolve("Rainbow")[:2]
        ['fff', 'f88']
        >>> palette_resolve("#000, fff")
        ['000', 'fff']
    """
    presets = presets_load(palettes_file)
    key = spec.strip().lower()
    if key in presets:
        LOG(f"Using palette preset '{key}'", level=2)
        return list(presets[key])

    colors = [c for c in spec.split(',') if c.strip()]
    LOG(f"Using {len(colors)} explicit color(s)", level=2)
    return colors_validate(colors)


class ColorAssignment:
    """
    Stable mapping from rule position to palette color.

    Rule ``i`` takes palette entry ``i mod len(palette)``. The indices are
    computed once, when the assignment is built, and reused for every line.
    """

    def __init__(self, palette: List[str], rule_set: RuleSet):
        if not palette:
            raise PaletteError("No colours have been specified so no output can be produced!")
        self.palette = list(palette)
        self.indices: List[int] = [i % len(self.palette) for i in range(len(rule_set))]

    def index_for(self, rule_position: int) -> int:
        """Palette index of the rule at ``rule_position`` in the rule set"""
        return self.indices[rule_position]

    def color_for(self, color_index: int) -> str:
        """Hex color (without '#') for a palette index"""
        return self.palette[color_index]

    def __repr__(self) -> str:
        return f"ColorAssignment(palette={self.palette!r}, rules={len(self.indices)})"
