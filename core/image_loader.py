"""Image file validation and conversion into ImageRef data URIs."""

import base64
import io
import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from core.utils import ImageRef, ValidationResult

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024

SUPPORTED_IMAGE_EXTENSIONS = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".bmp": "image/bmp",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}


def validate_image_file(file_path: str) -> ValidationResult:
    """Validate that a file is a readable image of a supported type."""
    from i18n import t

    if not file_path:
        return ValidationResult(valid=False, error_message=t("validation.no_file"))

    path = Path(file_path)

    if not path.exists():
        return ValidationResult(valid=False, error_message=t("validation.file_not_found"))

    if not path.is_file():
        return ValidationResult(valid=False, error_message=t("validation.not_a_file"))

    file_size = path.stat().st_size
    if file_size == 0:
        return ValidationResult(valid=False, error_message=t("validation.empty_file"))

    if file_size > MAX_IMAGE_BYTES:
        return ValidationResult(valid=False, error_message=t("validation.too_large"))

    ext = path.suffix.lower()
    if ext not in SUPPORTED_IMAGE_EXTENSIONS:
        return ValidationResult(
            valid=False,
            error_message=t("validation.unsupported_format", ext=ext),
        )

    try:
        with Image.open(str(path)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError):
        return ValidationResult(
            valid=False,
            error_message=t("validation.cannot_read_image"),
        )

    return ValidationResult(
        valid=True,
        image_width=width,
        image_height=height,
        file_size_bytes=file_size,
        mime_type=SUPPORTED_IMAGE_EXTENSIONS[ext],
    )


def encode_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into (mime type, raw bytes)."""
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:"):-len(";base64")]
    return mime_type, base64.b64decode(payload)


def load_image_ref(file_path: str) -> ImageRef:
    """Read an image file into an ImageRef. Raises ValueError if invalid."""
    validation = validate_image_file(file_path)
    if not validation.valid:
        logger.warning("Rejected image %s: %s", file_path, validation.error_message)
        raise ValueError(validation.error_message)

    path = Path(file_path)
    data = path.read_bytes()
    logger.info(
        "Loaded image %s (%dx%d, %d bytes)",
        path.name, validation.image_width, validation.image_height, len(data),
    )
    return ImageRef(
        data_uri=encode_data_uri(data, validation.mime_type),
        file_name=path.name,
        size_bytes=len(data),
        width=validation.image_width,
        height=validation.image_height,
    )


def create_thumbnail(image: ImageRef, size: Tuple[int, int] = (256, 256)) -> bytes:
    """Create a PNG preview of an ImageRef and return its bytes."""
    _, data = decode_data_uri(image.data_uri)
    with Image.open(io.BytesIO(data)) as img:
        img.thumbnail(size, Image.Resampling.LANCZOS)
        if img.mode not in ("RGB", "RGBA", "L"):
            img = img.convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
    return buffer.getvalue()
