"""
YouTube link handling for content ingestion.
"""

import logging
import re
from typing import Optional

from ingestion.types import ExtractedContent
from services.errors import InvalidInputError

logger = logging.getLogger(__name__)

# watch URL, short link, embed URL
VIDEO_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)")

DEFAULT_VIDEO_TITLE = "YouTube Video"
UNKNOWN_DURATION = "Unknown"


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Pull the video id out of a YouTube URL.

    Supports:
    - youtube.com/watch?v=<id>
    - youtu.be/<id>
    - youtube.com/embed/<id>
    """
    if not url:
        return None
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


async def process_youtube_url(url: Optional[str]) -> ExtractedContent:
    """Resolve a YouTube link into a placeholder transcript record."""
    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidInputError("Invalid YouTube URL")

    # Transcript, title and duration lookups are not wired up yet.
    logger.warning("YouTube transcript extraction not supported, storing placeholder for %s", video_id)
    return ExtractedContent(
        title=DEFAULT_VIDEO_TITLE,
        content=f"YouTube transcript extraction not implemented yet. Video ID: {video_id}",
        metadata={"duration": UNKNOWN_DURATION, "url": url},
        supported=False,
    )
