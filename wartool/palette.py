import numpy as np

from PIL import Image

PALETTE_SIZE = 768 # 256 * rgb

def convert_palette(pal):
    """Scale a 6 bit VGA palette to 8 bits in place and return it.

    Only the first 768 bytes are touched. `bytes` can't be changed in
    place, so a converted bytearray copy is returned for it and for
    read-only memoryviews instead.
    """
    if len(pal) < PALETTE_SIZE:
        raise ValueError("palette needs %d bytes, got %d" % (PALETTE_SIZE, len(pal)))
    if isinstance(pal, bytes) or (isinstance(pal, memoryview) and pal.readonly):
        pal = bytearray(pal)

    view = np.frombuffer(pal, dtype=np.uint8, count=PALETTE_SIZE)
    view <<= 2
    return pal

def palette_image(pal):
    """16x16 swatch of an already converted palette, one pixel per colour."""
    rgb = np.frombuffer(pal, dtype=np.uint8, count=PALETTE_SIZE).reshape([256, 3])
    return Image.frombytes('RGB', (16, 16), rgb.tobytes())

__all__ = ["convert_palette", "palette_image", "PALETTE_SIZE"]
