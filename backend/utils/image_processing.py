"""
Image processing utilities using OpenCV and Pillow.

Images travel through the pipeline either as encoded bytes (PNG/JPEG) or as
base64 data URLs; pixel work is done on RGBA numpy arrays.
"""

import base64
import io
import re
from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

from .coordinates import WallBounds, round_half_up


DATA_URL_PATTERN = re.compile(r'^data:image/[\w.+-]+;base64,', re.IGNORECASE)

# Square canvas side used for the mask-edit model
EDIT_CANVAS_SIZE = 1024


def decode_data_url(image_url: str) -> bytes:
    """Decode a base64 data URL (or bare base64 string) into raw bytes."""
    base64_data = DATA_URL_PATTERN.sub('', image_url.strip(), count=1)
    try:
        return base64.b64decode(base64_data, validate=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid base64 image data: {e}")


def encode_data_url(image_bytes: bytes, mime_type: str = "image/png") -> str:
    """Encode raw image bytes as a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('utf-8')}"


def get_image_size(image_bytes: bytes) -> Tuple[int, int]:
    """Return (width, height) without decoding the full image."""
    with Image.open(io.BytesIO(image_bytes)) as img:
        return img.size


def load_image_from_bytes(image_bytes: bytes) -> np.ndarray:
    """Load encoded image bytes into an RGBA uint8 array."""
    nparr = np.frombuffer(image_bytes, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError("Could not decode image data")

    if img.dtype != np.uint8:
        img = cv2.convertScaleAbs(img, alpha=255.0 / 65535.0)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)


def encode_png(image: np.ndarray) -> bytes:
    """Encode an RGBA (or RGB) array as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(image).save(buffer, format="PNG")
    return buffer.getvalue()


def resize_image(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize to exact dimensions, using INTER_AREA when shrinking."""
    h, w = image.shape[:2]
    if (w, h) == (width, height):
        return image
    shrinking = width * height < w * h
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_CUBIC
    return cv2.resize(image, (width, height), interpolation=interpolation)


# =============================================================================
# LETTERBOX (mask-edit pipeline)
# =============================================================================

@dataclass(frozen=True)
class LetterboxInfo:
    """Where the original image sits inside the square letterbox canvas."""
    original_width: int
    original_height: int
    canvas_size: int
    scale: float
    offset_x: int
    offset_y: int
    scaled_width: int
    scaled_height: int


def letterbox_image(
    image_bytes: bytes,
    canvas_size: int = EDIT_CANVAS_SIZE,
    fill: Tuple[int, int, int, int] = (255, 255, 255, 255),
) -> Tuple[bytes, LetterboxInfo]:
    """
    Fit an image into a square canvas, preserving aspect ratio.

    The image is scaled so its longer side equals canvas_size and centered;
    the remaining area is padded with fill.

    Returns:
        (PNG bytes of the square canvas, placement info for extraction)
    """
    image = load_image_from_bytes(image_bytes)
    h, w = image.shape[:2]

    scale = canvas_size / max(w, h)
    scaled_w = max(1, min(canvas_size, round_half_up(w * scale)))
    scaled_h = max(1, min(canvas_size, round_half_up(h * scale)))
    offset_x = (canvas_size - scaled_w) // 2
    offset_y = (canvas_size - scaled_h) // 2

    canvas = np.empty((canvas_size, canvas_size, 4), dtype=np.uint8)
    canvas[:, :] = fill
    canvas[offset_y:offset_y + scaled_h, offset_x:offset_x + scaled_w] = resize_image(
        image, scaled_w, scaled_h
    )

    info = LetterboxInfo(
        original_width=w,
        original_height=h,
        canvas_size=canvas_size,
        scale=scale,
        offset_x=offset_x,
        offset_y=offset_y,
        scaled_width=scaled_w,
        scaled_height=scaled_h,
    )
    return encode_png(canvas), info


def extract_from_letterbox(edited_bytes: bytes, info: LetterboxInfo) -> bytes:
    """
    Undo letterbox_image on an edited canvas.

    Models sometimes return a different resolution than requested, so the
    canvas is first brought back to the expected square size.
    """
    canvas = load_image_from_bytes(edited_bytes)
    canvas = resize_image(canvas, info.canvas_size, info.canvas_size)

    region = canvas[
        info.offset_y:info.offset_y + info.scaled_height,
        info.offset_x:info.offset_x + info.scaled_width,
    ]
    restored = resize_image(region, info.original_width, info.original_height)
    return encode_png(restored)


def create_wall_mask(info: LetterboxInfo, wall_bounds: WallBounds) -> bytes:
    """
    Build an edit mask for the letterboxed canvas.

    Opaque pixels are preserved by the model; the wall region is made fully
    transparent to mark it as editable.
    """
    mask = np.zeros((info.canvas_size, info.canvas_size, 4), dtype=np.uint8)
    mask[:, :, 3] = 255

    left = info.offset_x + round_half_up(wall_bounds.x / 100 * info.scaled_width)
    top = info.offset_y + round_half_up(wall_bounds.y / 100 * info.scaled_height)
    right = left + round_half_up(wall_bounds.width / 100 * info.scaled_width)
    bottom = top + round_half_up(wall_bounds.height / 100 * info.scaled_height)

    left = max(info.offset_x, left)
    top = max(info.offset_y, top)
    right = min(info.offset_x + info.scaled_width, right)
    bottom = min(info.offset_y + info.scaled_height, bottom)

    if right > left and bottom > top:
        mask[top:bottom, left:right, 3] = 0

    return encode_png(mask)
