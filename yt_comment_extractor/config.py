# yt_comment_extractor/config.py

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from . import constants as const


@dataclass(frozen=True)
class ExtractorConfig:
    """
    Settings for one extraction run.

    `isolate_failures` switches from the default abort-on-first-error policy to
    logging a failed video and moving on to the next one. `fail_on_http_error`
    makes an HTTP error status from the API a `TransportError` instead of an
    empty page.
    """

    api_key: str
    output_path: Path = field(default_factory=lambda: Path(const.DEFAULT_OUTPUT_PATH))
    api_url: str = const.YOUTUBE_COMMENT_THREADS_API
    timeout: Optional[float] = const.DEFAULT_TIMEOUT
    verify_ssl: bool = True
    isolate_failures: bool = False
    fail_on_http_error: bool = False

    def __post_init__(self):
        if not self.api_key:
            raise ValueError(f"Missing API key. Pass one explicitly or set {const.API_KEY_ENV_VAR}.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"`timeout` must be positive (got {self.timeout})")
        object.__setattr__(self, "output_path", Path(self.output_path))

    @classmethod
    def from_env(cls, api_key: Optional[str] = None, dotenv_path: Union[str, Path, None] = None, **overrides):
        """
        Builds a config, falling back to `YOUTUBE_API_KEY` when `api_key` is not given.

        Variables from a `.env` file are loaded first without overriding the
        process environment.
        """
        load_dotenv(dotenv_path)
        api_key = api_key or os.getenv(const.API_KEY_ENV_VAR)
        return cls(api_key=api_key, **overrides)
