"""
Example: Exporting the comment threads of a few videos to a workbook.

Requires YOUTUBE_API_KEY in the environment or in a .env file.
"""
import logging

from yt_comment_extractor import CommentExtractor, ExtractorConfig

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger()

# --- Configuration ---
VIDEO_IDS = ["jNQXAC9IVRw", "feT7_wVmgv0"]
OUTPUT_PATH = "comments.xlsx"

# --- Script ---
if __name__ == "__main__":
    config = ExtractorConfig.from_env(output_path=OUTPUT_PATH, isolate_failures=True)

    with CommentExtractor(config) as extractor:
        results = extractor.extract(VIDEO_IDS)

    for video_id, row_count in results.items():
        logger.info(f"{video_id}: {row_count} row(s)")
    for video_id, error in extractor.failures.items():
        logger.warning(f"{video_id} failed: {error}")
