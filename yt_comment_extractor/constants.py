# yt_comment_extractor/constants.py

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/79.0.3945.130 Safari/537.36'

YOUTUBE_COMMENT_THREADS_API = "https://www.googleapis.com/youtube/v3/commentThreads?part=snippet%2Creplies&maxResults=100&order=time"

PARAM_KEY = "key"
PARAM_VIDEO_ID = "videoId"
PARAM_PAGE_TOKEN = "pageToken"

KEY_ITEMS = "items"
KEY_NEXT_PAGE_TOKEN = "nextPageToken"

DEFAULT_OUTPUT_PATH = "output.xlsx"
DEFAULT_TIMEOUT = 30.0
API_KEY_ENV_VAR = "YOUTUBE_API_KEY"

LOG_FILE_NAME = "cli.log"

HEADERS = [
    "etag",
    "author_display_name",
    "author_channel_url",
    "text_display",
    "published_at",
    "updated_at",
    "replied_etag",
    "replied_author_display_name",
    "replied_author_channel_url",
    "replied_text_display",
    "replied_published_at",
    "replied_updated_at",
]

# Offset of the reply columns within a row.
REPLY_COLUMN_OFFSET = 6

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74
