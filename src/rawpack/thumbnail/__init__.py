# src/rawpack/thumbnail/__init__.py
from rawpack.thumbnail.thumbnailer import decode_image, render_thumbnail

__all__ = [
    'decode_image',
    'render_thumbnail'
]
