# pcn_editor/core/layouts/__init__.py
from ..errors import UnknownLayout
from .base import RowLayout
from .delimited import DelimitedLayout
from .fixed_width import FixedWidthLayout

_LAYOUTS = {
    FixedWidthLayout.id: FixedWidthLayout,
    DelimitedLayout.id: DelimitedLayout,
}

LAYOUT_CHOICES = [(cls.id, cls.description) for cls in _LAYOUTS.values()]


def get_layout(layout) -> RowLayout:
    """Return a layout instance for an id ("fixed", "delimited") or pass one through."""
    if isinstance(layout, RowLayout):
        return layout
    try:
        return _LAYOUTS[layout]()
    except (KeyError, TypeError):
        raise UnknownLayout(f"Unknown layout: {layout!r}") from None


__all__ = [
    "LAYOUT_CHOICES",
    "DelimitedLayout",
    "FixedWidthLayout",
    "RowLayout",
    "get_layout",
]
