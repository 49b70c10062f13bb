"""Image dimension lookup for background images."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from dmgs.errors import BackgroundNotFound


def read_image_size(path: str | Path) -> tuple[int, int]:
    """Return the pixel size of an image as (width, height).

    Raises:
        BackgroundNotFound: If the file cannot be opened as an image
    """
    try:
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise BackgroundNotFound(str(path)) from e
    return int(width), int(height)
