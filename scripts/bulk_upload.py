#!/usr/bin/env python3
"""
Bulk Upload - Maintenance Script

Uploads every .mp4 in a directory to GanJing World, several at a time.
Titles come from the file names; a JPEG next to the video with the same
stem (video1.mp4 + video1.jpg) is used as its thumbnail, otherwise one is
extracted with ffmpeg.

Usage:
    python scripts/bulk_upload.py videos/                     # Dry run
    python scripts/bulk_upload.py videos/ --upload            # Upload, 3 at a time
    python scripts/bulk_upload.py videos/ --upload --concurrency 2 --category tech

Safety:
    - Dry run by default (requires --upload to actually upload)
    - Continues on errors (one failed upload won't stop the rest)
    - All uploads share one client, so one upload token serves every job
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import GANJING_CHANNEL_ID, LOG_LEVEL
from ganjing import (
    Category,
    ChannelId,
    CompleteUploadResult,
    GanJingError,
    UploadController,
    UploadProgress,
    VideoMetadata,
    create_client,
    create_extractor,
)

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@dataclass
class UploadJob:
    """One queued upload"""

    job_id: str
    video_path: Path
    thumbnail_path: str
    metadata: VideoMetadata


@dataclass
class JobOutcome:
    job: UploadJob
    result: Optional[CompleteUploadResult] = None
    error: Optional[GanJingError] = None


def title_from_filename(video_path: Path) -> str:
    """my_first-video.mp4 → My First Video"""
    return video_path.stem.replace("_", " ").replace("-", " ").strip().title()


def build_jobs(video_dir: Path, category: Category, description: str) -> List[UploadJob]:
    """
    Scan a directory and build one job per .mp4 file.

    Returns:
        Jobs sorted by file name
    """
    jobs = []
    for index, video_path in enumerate(sorted(video_dir.glob("*.mp4")), 1):
        thumbnail = video_path.with_suffix(".jpg")
        jobs.append(
            UploadJob(
                job_id=f"video-{index}",
                video_path=video_path,
                thumbnail_path=str(thumbnail) if thumbnail.exists() else "",
                metadata=VideoMetadata(
                    title=title_from_filename(video_path),
                    description=description,
                    category=category,
                ),
            ),
        )
    return jobs


def make_progress_handler(job_id: str):
    """Create a progress callback for a specific job"""

    def handler(progress: UploadProgress) -> None:
        logger.info(
            f"[Job {job_id}] [{progress.percent_complete:3d}%] "
            f"{progress.phase.value}: {progress.message}"
        )

    return handler


async def upload_all(
    controller: UploadController,
    jobs: List[UploadJob],
    channel_id: ChannelId,
    max_concurrent: int = 3,
) -> List[JobOutcome]:
    """
    Upload all jobs with at most max_concurrent in flight.

    Returns:
        One JobOutcome per job, in job order
    """
    semaphore = asyncio.Semaphore(max_concurrent)

    async def run(job: UploadJob) -> JobOutcome:
        async with semaphore:
            logger.info(f"[Job {job.job_id}] Starting upload: {job.video_path.name}")
            try:
                result = await controller.upload(
                    job.video_path,
                    channel_id,
                    job.metadata,
                    thumbnail=job.thumbnail_path,
                    on_progress=make_progress_handler(job.job_id),
                )
            except GanJingError as e:
                logger.error(f"[Job {job.job_id}] ❌ FAILED [{e.kind.value}]: {e}")
                return JobOutcome(job=job, error=e)

            logger.info(f"[Job {job.job_id}] ✅ Upload completed: {result.web_url}")
            logger.info(f"  Thumbnail: {len(result.thumbnail_result.all_urls)} URLs")
            logger.info(f"  Status:    {result.processed_status.status.value}")
            return JobOutcome(job=job, result=result)

    logger.info(
        f"=== Starting bulk upload: {len(jobs)} videos, max {max_concurrent} concurrent ==="
    )
    return list(await asyncio.gather(*(run(job) for job in jobs)))


async def run_bulk(args: argparse.Namespace, jobs: List[UploadJob]) -> int:
    channel_id = args.channel_id or GANJING_CHANNEL_ID
    if not channel_id:
        logger.error("❌ No channel id: pass --channel-id or set GANJING_CHANNEL_ID in .env")
        return 1

    controller = UploadController(
        client=create_client(force_mock=args.mock),
        extractor=create_extractor(force_mock=args.mock),
    )
    async with controller:
        outcomes = await upload_all(controller, jobs, ChannelId(channel_id), args.concurrency)

    succeeded = [outcome for outcome in outcomes if outcome.result is not None]
    failed = [outcome for outcome in outcomes if outcome.error is not None]

    # Summary
    logger.info("=" * 70)
    logger.info("📊 UPLOAD SUMMARY")
    logger.info("=" * 70)
    for outcome in succeeded:
        result = outcome.result
        logger.info(f"✅ {result.content_result.title}")
        logger.info(f"   URL: {result.web_url}")
        logger.info(
            f"   IDs: content={result.content_id}, video={result.video_id}, "
            f"image={result.image_id}"
        )
        if result.processed_status.duration_sec is not None:
            logger.info(f"   Duration: {result.processed_status.duration_sec}s")
    for outcome in failed:
        logger.info(f"❌ {outcome.job.video_path.name}: {outcome.error}")
    logger.info(f"Total: {len(outcomes)}, successful: {len(succeeded)}, failed: {len(failed)}")
    logger.info("=" * 70)

    return 0 if not failed else 1


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Upload every .mp4 in a directory to GanJing World",
        epilog="""
Examples:
  %(prog)s videos/                      # Dry run - show what would be uploaded
  %(prog)s videos/ --upload             # Actually upload all videos
  %(prog)s videos/ --upload --mock      # Run against the simulated platform
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("video_dir", type=Path, help="Directory containing .mp4 files")
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Actually upload videos (default is dry run)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=3,
        help="Maximum simultaneous uploads (default: 3)",
    )
    parser.add_argument(
        "--category",
        type=lambda value: Category[value.upper()],
        default=Category.ENTERTAINMENT,
        help="Category name for every video (default: entertainment)",
    )
    parser.add_argument("--description", default="", help="Description for every video")
    parser.add_argument("--channel-id", help="Channel id (default: GANJING_CHANNEL_ID)")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the simulated platform (no network, no ffmpeg)",
    )

    args = parser.parse_args()

    if args.concurrency < 1:
        parser.error("--concurrency must be at least 1")

    if not args.video_dir.is_dir():
        logger.error(f"❌ Not a directory: {args.video_dir}")
        return 1

    jobs = build_jobs(args.video_dir, args.category, args.description)
    if not jobs:
        logger.info("✓ No videos found")
        return 0

    logger.info(f"Found {len(jobs)} video file(s)")
    for job in jobs:
        thumb = Path(job.thumbnail_path).name if job.thumbnail_path else "auto-extract"
        logger.info(f"  ✓ {job.video_path.name} → \"{job.metadata.title}\" (thumbnail: {thumb})")

    if not args.upload:
        logger.info("=" * 70)
        logger.info("DRY RUN MODE - No uploads performed")
        logger.info("Run with --upload to actually upload these videos")
        logger.info("=" * 70)
        return 0

    return asyncio.run(run_bulk(args, jobs))


if __name__ == "__main__":
    sys.exit(main())
