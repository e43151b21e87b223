"""
Identifier Models

Nominal wrappers for the ids the platform hands back. All four are plain
strings on the wire, but a ContentId is never a VideoId: equality and
hashing include the class, so mixing them up fails loudly in tests and
is flagged by type checkers.
"""

from dataclasses import dataclass

from ganjing.constants import WEB_VIDEO_URL_PREFIX


@dataclass(frozen=True)
class _Identifier:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(
                f"{type(self).__name__} expects a str, got {type(self.value).__name__}"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContentId(_Identifier):
    """Id of a content (draft/video page) record"""


@dataclass(frozen=True)
class VideoId(_Identifier):
    """Id of an uploaded video file on the VOD service"""


@dataclass(frozen=True)
class ImageId(_Identifier):
    """Id of an uploaded thumbnail image"""


@dataclass(frozen=True)
class ChannelId(_Identifier):
    """Id of the channel that owns the content"""


def get_web_url(content_id: ContentId) -> str:
    """
    Public watch URL for a content record.

    Example:
        get_web_url(ContentId("abc123xyz"))
        # Returns: "https://www.ganjingworld.com/video/abc123xyz"
    """
    return f"{WEB_VIDEO_URL_PREFIX}{content_id}"
