"""Highlight colors for intruder result rows."""

from typing import Callable, Dict, List

from intruder.core.models import ColorOption


DEFAULT_COLOR = "default"

COLORS = [
    ColorOption(DEFAULT_COLOR, "#4f46e5", "modules.intruder.default_color"),
    ColorOption("red", "#ef4444", "modules.intruder.red"),
    ColorOption("green", "#10b981", "modules.intruder.green"),
    ColorOption("blue", "#3b82f6", "modules.intruder.blue"),
    ColorOption("yellow", "#f59e0b", "modules.intruder.yellow"),
    ColorOption("orange", "#f97316", "modules.intruder.orange"),
    ColorOption("teal", "#14b8a6", "modules.intruder.teal"),
]


def localized_color_options(translate: Callable[[str], str]) -> List[Dict[str, str]]:
    """Color options labelled through *translate* (the i18n ``t`` lookup)."""
    return [
        {"id": c.id, "value": c.value, "label": translate(c.label_key)}
        for c in COLORS
    ]


def color_value(color_id: str) -> str:
    for c in COLORS:
        if c.id == color_id:
            return c.value
    return COLORS[0].value
