"""Configuration loader for gview color palettes and tunable settings.

Reads palette.yaml and settings.yaml from the package directory and exposes
module-level constants.

Examples:
    >>> palette = load_palette()
    >>> sorted(palette.keys()) == ['feature', 'nucleotide', 'operon', 'rendering']
    True
    >>> settings = load_settings()
    >>> sorted(settings.keys()) == ['gc', 'layout', 'navigation', 'operon']
    True
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

_PKG_DIR = Path(__file__).parent


@lru_cache(maxsize=1)
def load_palette() -> dict[str, Any]:
    """Load color definitions from palette.yaml.

    Returns:
        Parsed YAML dict with ``nucleotide``, ``feature``, ``rendering`` and
        ``operon`` keys.

    Examples:
        >>> palette = load_palette()
        >>> palette['feature']['CDS']
        '#8e44ad'
        >>> len(palette['operon']) > 1
        True
    """
    return yaml.safe_load((_PKG_DIR / "palette.yaml").read_text())


@lru_cache(maxsize=1)
def load_settings() -> dict[str, Any]:
    """Load layout, GC-window and operon tunables from settings.yaml.

    Returns:
        Parsed YAML dict with ``layout``, ``gc``, ``operon`` and
        ``navigation`` keys.

    Examples:
        >>> settings = load_settings()
        >>> settings['layout']['row_buffer']
        10
        >>> settings['gc']['target_windows'], settings['gc']['min_window']
        (50, 10)
    """
    return yaml.safe_load((_PKG_DIR / "settings.yaml").read_text())


def feature_type_color(feature_type: str) -> str:
    """Fill color for a feature type, falling back to the default feature color.

    Examples:
        >>> feature_type_color('tRNA')
        '#27ae60'
        >>> feature_type_color('repeat_region') == DEFAULT_FEATURE_COLOR
        True
    """
    return FEATURE_COLORS.get(feature_type, DEFAULT_FEATURE_COLOR)


# -- Module-level constants -------------------------------------------------
_palette = load_palette()
_settings = load_settings()

BASE_COLORS: dict[str, str] = _palette["nucleotide"]
FEATURE_COLORS: dict[str, str] = _palette["feature"]
OPERON_COLORS: list[str] = _palette["operon"]
DEFAULT_FEATURE_COLOR: str = _palette["rendering"]["default_feature"]
FALLBACK_BASE_COLOR: str = _palette["rendering"]["fallback_base_color"]

ROW_BUFFER: int = _settings["layout"]["row_buffer"]
GC_TARGET_WINDOWS: int = _settings["gc"]["target_windows"]
GC_MIN_WINDOW: int = _settings["gc"]["min_window"]
OPERON_MAX_GAP: int = _settings["operon"]["max_gap"]
OPERON_MIN_GENES: int = _settings["operon"]["min_genes"]
GOTO_WINDOW: int = _settings["navigation"]["goto_window"]
