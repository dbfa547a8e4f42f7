import math
import struct
import numpy as np
from numba import njit
from PIL import Image

# BITMAPFILEHEADER (14 bytes) + BITMAPINFOHEADER (40 bytes)
_FILE_HEADER = struct.Struct("<2sIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
BMP_HEADER_SIZE = _FILE_HEADER.size + _INFO_HEADER.size
BI_RGB = 0


# =============================================================================
# Resampling kernels
# =============================================================================

@njit(cache=True)
def _box_downscale(source, step, out_height, out_width):
    """Average each step x step block of ``source`` into one pixel."""
    result = np.zeros((out_height, out_width, 3))
    weight = 1.0 / (step * step)
    for y in range(out_height):
        for x in range(out_width):
            for j in range(step):
                for i in range(step):
                    for c in range(3):
                        result[y, x, c] += source[y * step + j, x * step + i, c] * weight
    return result


@njit(cache=True)
def _nearest_upscale(source, factor, out_height, out_width):
    height = source.shape[0]
    width = source.shape[1]
    result = np.empty((out_height, out_width, 3))
    for y in range(out_height):
        sy = min(height - 1, y // factor)
        for x in range(out_width):
            sx = min(width - 1, x // factor)
            for c in range(3):
                result[y, x, c] = source[sy, sx, c]
    return result


def round_scale_factor(factor: float) -> float:
    """Snap a requested factor to 0.25, 0.5 or a whole number."""
    if factor > 1.0:
        return float(math.floor(factor + 0.5))
    if factor > 0.4:
        return 0.5
    return 0.25


def scale(image: np.ndarray, factor: float):
    """Resample an (H, W, 3) color buffer.

    Returns the resampled buffer together with the factor actually applied,
    which differs from ``factor`` whenever it had to be rounded.
    """
    rounded = round_scale_factor(factor)
    source = np.ascontiguousarray(image, dtype=np.float64)
    height, width = source.shape[:2]
    out_height = int(height * rounded)
    out_width = int(width * rounded)

    inverse = 1.0 / rounded
    if inverse > 1.0:
        step = int(round(inverse))
        result = _box_downscale(source, step, out_height, out_width)
    else:
        result = _nearest_upscale(source, int(rounded), out_height, out_width)
    return result, rounded


# =============================================================================
# Encoding
# =============================================================================

def to_argb_words(image: np.ndarray) -> np.ndarray:
    """Pack every pixel into an opaque ARGB uint32, channels clamped to [0, 1]."""
    channels = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint32)
    return (np.uint32(0xFF000000)
            | channels[..., 0] << np.uint32(16)
            | channels[..., 1] << np.uint32(8)
            | channels[..., 2])


def bitmap_header(width: int, height: int) -> bytes:
    pixel_bytes = 4 * width * height
    file_header = _FILE_HEADER.pack(b"BM", BMP_HEADER_SIZE + pixel_bytes, 0, 0, BMP_HEADER_SIZE)
    # negative height stores rows top to bottom
    info_header = _INFO_HEADER.pack(_INFO_HEADER.size, width, -height, 1, 32, BI_RGB,
                                    pixel_bytes, 0, 0, 0, 0)
    return file_header + info_header


def encode_bitmap(image: np.ndarray, path: str):
    """Write ``image`` as an uncompressed, top-down, 32 bits per pixel BMP."""
    height, width = image.shape[:2]
    words = to_argb_words(image)
    with open(path, "wb") as f:
        f.write(bitmap_header(width, height))
        f.write(words.astype("<u4").tobytes())


def to_pil_image(image: np.ndarray) -> Image.Image:
    pixels = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)
    return Image.fromarray(pixels)
