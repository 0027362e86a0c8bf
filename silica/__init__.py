"""Reading Procreate documents: keyed archives, layer hierarchies, tile atlases and view geometry."""

__version__ = "0.2.1"

__all__ = [
    "bounds",
    "data",
    "document",
    "errors",
    "geometry",
    "hierarchy",
    "layers",
    "lzo",
    "ns_archive",
    "render_plan",
    "transform",
]