"""
Video Metadata Model

Caller supplied description of a video, passed into draft creation.
"""

from dataclasses import dataclass

from ganjing.constants import DEFAULT_LANGUAGE, Category, Visibility


@dataclass(frozen=True)
class VideoMetadata:
    """
    Metadata for a new video.

    Attributes:
        title: Video title
        description: Video description
        category: Platform category
        visibility: Who can see the video
        lang: Language tag (default: en-US)

    Example:
        metadata = VideoMetadata(
            title="My Video",
            description="Description",
            category=Category.TECH,
            visibility=Visibility.PUBLIC,
        )
    """

    title: str
    description: str = ""
    category: Category = Category.ENTERTAINMENT
    visibility: Visibility = Visibility.PUBLIC
    lang: str = DEFAULT_LANGUAGE
