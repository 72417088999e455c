"""
Display records for price tiers, crowdedness levels and cuisine tags
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .restaurant import CrowdednessLevel, PriceRange


@dataclass(frozen=True)
class DisplayRecord:
    """How one enumerated value is shown on the map, in the list and on the detail page"""
    label: str
    css_class: str
    color: Optional[str] = None


PRICE_DISPLAY: Dict[PriceRange, DisplayRecord] = {
    PriceRange.LOW: DisplayRecord('～1,000円', 'price-low'),
    PriceRange.MEDIUM: DisplayRecord('1,000～2,000円', 'price-medium'),
    PriceRange.HIGH: DisplayRecord('2,000円～', 'price-high'),
}

CROWDEDNESS_DISPLAY: Dict[CrowdednessLevel, DisplayRecord] = {
    CrowdednessLevel.EMPTY: DisplayRecord('空いている', 'bg-green-100 text-green-800', '#22c55e'),
    CrowdednessLevel.MODERATE: DisplayRecord('やや混雑', 'bg-yellow-100 text-yellow-800', '#f59e0b'),
    CrowdednessLevel.CROWDED: DisplayRecord('混雑', 'bg-red-100 text-red-800', '#ef4444'),
}

OPEN_DISPLAY: Dict[bool, DisplayRecord] = {
    True: DisplayRecord('営業中', 'open'),
    False: DisplayRecord('営業時間外', 'closed'),
}

# Cuisine is an open tag; unknown tags fall back to DEFAULT_CUISINE_GLYPH
CUISINE_GLYPHS: Dict[str, str] = {
    '和食': '🍣',
    '中華': '🍜',
    'イタリアン': '🍝',
    'フレンチ': '🥐',
    'カフェ': '☕',
    '洋食': '🍽️',
    'ファストフード': '🍔',
    'インド料理': '🍛',
    '韓国料理': '🥢',
    'タイ料理': '🌶️',
}
DEFAULT_CUISINE_GLYPH = '🍽️'

# Quick-filter chips offered in the sidebar
QUICK_CUISINES = ('和食', 'イタリアン', 'カフェ', '中華')


def price_display(price_range: Union[PriceRange, str]) -> DisplayRecord:
    return PRICE_DISPLAY[PriceRange(price_range)]


def crowdedness_display(level: Union[CrowdednessLevel, str, None]) -> DisplayRecord:
    return CROWDEDNESS_DISPLAY[CrowdednessLevel(level or CrowdednessLevel.MODERATE)]


def open_display(is_open: bool) -> DisplayRecord:
    return OPEN_DISPLAY[bool(is_open)]


def cuisine_glyph(cuisine_type: Optional[str]) -> str:
    return CUISINE_GLYPHS.get(cuisine_type or '', DEFAULT_CUISINE_GLYPH)
