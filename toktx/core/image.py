"""
In-memory image encoding for toktx input.

toktx only reads image files, so PIL images and numpy arrays are encoded to PNG bytes
before being written to a temporary file.
"""

import io

import numpy as np
from PIL import Image

# Modes toktx reads from PNG without a lossy conversion
_PNG_MODES = ("L", "LA", "RGB", "RGBA", "I;16")


def array_to_pil(array) -> Image.Image:
    """
    Converts a numpy array to a PIL Image.

    Float arrays are treated as [0, 1] and scaled to 8 bits. Leading singleton
    dimensions (a batch of one) are squeezed away.
    """
    data = np.asarray(array)
    if data.ndim > 3:
        data = data.squeeze()
    if np.issubdtype(data.dtype, np.floating):
        data = np.clip(255.0 * data, 0, 255).astype(np.uint8)
    elif data.dtype != np.uint8 and data.dtype != np.uint16:
        data = np.clip(data, 0, 255).astype(np.uint8)
    return Image.fromarray(data)


def encode_image(image, format: str = "PNG") -> bytes:
    """
    Encode a PIL Image or numpy array to image file bytes.

    Args:
        image: PIL Image, or a numpy array of shape (H, W), (H, W, C) or (1, H, W, C).
        format: PIL format name. PNG is the only format toktx reads that supports alpha.

    Returns:
        The encoded file contents.
    """
    if isinstance(image, np.ndarray):
        image = array_to_pil(image)

    if format.upper() == "PNG" and image.mode not in _PNG_MODES:
        image = image.convert("RGBA" if "A" in image.getbands() else "RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=format)
    return buffer.getvalue()


def is_image(value) -> bool:
    """True for values ``encode_image`` accepts."""
    return isinstance(value, (Image.Image, np.ndarray))
