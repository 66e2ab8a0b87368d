"""Loading and validation of view matrices."""

from mvsc.data.view_loader import load_view, load_views, validate_views

__all__ = [
    "load_view",
    "load_views",
    "validate_views",
]
