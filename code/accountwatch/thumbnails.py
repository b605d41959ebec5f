import re
from pathlib import Path
from typing import Optional

PROFILE_IMAGE_RE = re.compile(
    r"^https?://([^/]+)/profile_images/(\d+)/(.*)_normal(\.[a-zA-Z0-9-]+)?$"
)

def thumbnail_name(avatar_url: str) -> Optional[str]:
    """
    Map a remote `_normal` profile image URL to the file name of its 400x400 thumbnail.
    Returns None when the URL is not a profile image URL.
    """
    m = PROFILE_IMAGE_RE.match(avatar_url)
    if not m:
        return None
    image_id, name, extension = m.group(2), m.group(3), m.group(4) or ""
    return f"{image_id}-{name}_400x400{extension}"

def resolve_thumbnail(avatar_url: str, thumbnails_dir: Path) -> str:
    """
    Relative `./<thumbnails dir>/<file>` path if the thumbnail has been downloaded into
    `thumbnails_dir` (a directory next to the report), else the remote URL.
    """
    name = thumbnail_name(avatar_url)
    if name is None or not (Path(thumbnails_dir) / name).exists():
        return avatar_url
    return f"./{Path(thumbnails_dir).name}/{name}"
