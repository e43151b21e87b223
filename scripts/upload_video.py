#!/usr/bin/env python3
"""
Upload Video - Command Line Tool

Uploads one video to GanJing World: thumbnail, draft, video file, then
waits for processing and prints the public URL.

Usage:
    python scripts/upload_video.py video.mp4 --title "My Video"
    python scripts/upload_video.py video.mp4 --title "My Video" --thumbnail thumb.jpg
    python scripts/upload_video.py video.mp4 --title "Test" --category tech --no-wait
    python scripts/upload_video.py video.mp4 --title "Test" --mock   # no network

Configuration (.env):
    GANJING_ACCESS_TOKEN=<token from a logged-in session>
    GANJING_CHANNEL_ID=<your channel id>
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import (
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    GANJING_CHANNEL_ID,
    LOG_LEVEL,
)
from ganjing import (
    Category,
    ChannelId,
    GanJingError,
    UploadController,
    UploadProgress,
    VideoMetadata,
    Visibility,
    create_client,
    create_extractor,
)
from ganjing.constants import DEFAULT_LANGUAGE

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def print_progress(progress: UploadProgress) -> None:
    """Progress callback: one line per phase"""
    logger.info(
        f"[{progress.percent_complete:3d}%] {progress.phase.value}: {progress.message}"
    )


def parse_category(value: str) -> Category:
    """Accept an enum name (tech, food) or a raw code (cat23)"""
    try:
        return Category[value.upper().replace("-", "_")]
    except KeyError:
        pass
    try:
        return Category(value)
    except ValueError:
        names = ", ".join(category.name.lower() for category in Category)
        raise argparse.ArgumentTypeError(f"unknown category '{value}' (choose from: {names})")


async def run_upload(args: argparse.Namespace) -> int:
    channel_id = args.channel_id or GANJING_CHANNEL_ID
    if not channel_id:
        logger.error("❌ No channel id: pass --channel-id or set GANJING_CHANNEL_ID in .env")
        return 1

    metadata = VideoMetadata(
        title=args.title,
        description=args.description,
        category=args.category,
        visibility=Visibility(args.visibility),
        lang=args.lang,
    )

    controller = UploadController(
        client=create_client(force_mock=args.mock),
        extractor=create_extractor(force_mock=args.mock),
    )

    async with controller:
        try:
            result = await controller.upload_complete(
                args.video,
                ChannelId(channel_id),
                metadata,
                thumbnail_path=args.thumbnail or "",
                wait_for_processing=not args.no_wait,
                poll_interval=args.poll_interval,
                max_wait_time=args.max_wait,
                auto_extract_thumbnail=not args.no_extract,
                on_progress=print_progress,
            )
        except GanJingError as e:
            logger.error(f"❌ Upload failed [{e.kind.value}]: {e}")
            return 1

    logger.info("=" * 70)
    logger.info(f"✅ Content ID: {result.content_id}")
    logger.info(f"   Video ID:   {result.video_id}")
    logger.info(f"   Web URL:    {result.web_url}")
    logger.info(f"   Status:     {result.processed_status.status.value}")
    if result.video_url:
        logger.info(f"   Stream URL: {result.video_url}")
    logger.info("=" * 70)

    return 0 if not result.processed_status.is_failed else 1


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Upload a video to GanJing World",
        epilog="""
Examples:
  %(prog)s video.mp4 --title "My Video"
  %(prog)s video.mp4 --title "My Video" --thumbnail thumb.jpg --category tech
  %(prog)s video.mp4 --title "Test" --mock
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("video", type=Path, help="Path to the MP4 file")
    parser.add_argument("--title", required=True, help="Video title")
    parser.add_argument("--description", default="", help="Video description")
    parser.add_argument(
        "--category",
        type=parse_category,
        default=Category.ENTERTAINMENT,
        help="Category name or code (default: entertainment)",
    )
    parser.add_argument(
        "--visibility",
        choices=[visibility.value for visibility in Visibility],
        default=Visibility.PUBLIC.value,
        help="Visibility (default: public)",
    )
    parser.add_argument(
        "--lang",
        default=DEFAULT_LANGUAGE,
        help=f"Content language (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument("--channel-id", help="Channel id (default: GANJING_CHANNEL_ID)")
    parser.add_argument("--thumbnail", type=Path, help="Thumbnail JPEG (default: extract with ffmpeg)")
    parser.add_argument(
        "--no-extract",
        action="store_true",
        help="Fail instead of extracting a thumbnail when none is given",
    )
    parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Check status once instead of waiting for processing",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        help=f"Seconds between status checks (default: {DEFAULT_POLL_INTERVAL_SECONDS:g})",
    )
    parser.add_argument(
        "--max-wait",
        type=float,
        default=DEFAULT_MAX_WAIT_SECONDS,
        help=f"Seconds to wait for processing (default: {DEFAULT_MAX_WAIT_SECONDS:g})",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the simulated platform (no network, no ffmpeg)",
    )

    args = parser.parse_args()
    return asyncio.run(run_upload(args))


if __name__ == "__main__":
    sys.exit(main())
