import mimetypes
from typing import Optional

import filetype

from cfimages.io.network_exceptions import InvalidImageError

MAX_IMAGE_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB
SUPPORTED_IMAGE_TYPES = (
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
    "image/svg+xml",
)


def guess_image_mime(data: bytes, filename: Optional[str] = None) -> Optional[str]:
    """Detect the MIME type from file content, falling back to the file name."""
    mime = filetype.guess_mime(data)
    if mime is None and filename is not None:
        mime, _ = mimetypes.guess_type(filename)
    return mime


def validate_image_file(content: bytes, filename: Optional[str] = None) -> str:
    """
    Check size and type of an image before upload.

    :param content: Image bytes.
    :param filename: Name used as a type hint when the content is not recognized.
    :return: Detected MIME type.
    :raises InvalidImageError: if the file is too large or of an unsupported type.
    """
    if len(content) > MAX_IMAGE_FILE_SIZE:
        raise InvalidImageError("File size exceeds maximum limit of 10 MB.")
    mime = guess_image_mime(content, filename)
    if mime not in SUPPORTED_IMAGE_TYPES:
        raise InvalidImageError("Unsupported image format.")
    return mime
