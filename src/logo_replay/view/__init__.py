"""
View Module
===========

Derived view values and HTML rendering.
"""

from logo_replay.view.derive import (
    ERROR_TEXT,
    LOADING_TEXT,
    PLACEHOLDER_IMAGE,
    ViewModel,
    derive_view,
    displayed_image,
    slider_bounds,
    status_text,
)
from logo_replay.view.render import render_page


__all__ = [
    "ERROR_TEXT",
    "LOADING_TEXT",
    "PLACEHOLDER_IMAGE",
    "ViewModel",
    "derive_view",
    "displayed_image",
    "slider_bounds",
    "status_text",
    "render_page",
]
