"""Size limits for user-supplied images.

Images are embedded in documents as data URLs, so oversized files are
rejected before any write is attempted.
"""

from nexus.domain.shared.result import Err, Ok, Result

KB = 1024

PROJECT_IMAGE_LIMIT = 500 * KB
NOTES_IMAGE_LIMIT = 500 * KB
AVATAR_IMAGE_LIMIT = 300 * KB


def validate_image_size(size_bytes: int, limit: int = PROJECT_IMAGE_LIMIT) -> Result[int, str]:
    """Accept an image of size_bytes if it is within limit.

    Returns:
        Ok(size_bytes), or Err with the size-threshold message.
    """
    if size_bytes > limit:
        return Err(f"Image is too large. Please upload an image smaller than {limit // KB}KB.")
    return Ok(size_bytes)
