"""
pngme hides messages in PNG files, in chunks that image viewers skip over.
"""

from .chunktype import ChunkType
from .png import Png, PngChunk, ChunksView, open, is_url, read_png_signature
from .pngexceptions import *

__version__ = "1.0.0"
