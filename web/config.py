"""Configuration for the channel analysis API."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    youtube_api_key: str
    openai_api_key: str
    openai_model: str
    openai_vision_model: str
    max_recent_videos: int
    output_folder: str

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_vision_model=os.getenv("OPENAI_VISION_MODEL", "gpt-4o"),
            max_recent_videos=int(os.getenv("MAX_RECENT_VIDEOS", "10")),
            output_folder=os.getenv("OUTPUT_FOLDER", ".tmp/channel_analyses"),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "OPENAI_API_KEY": self.openai_api_key,
            "OPENAI_MODEL": self.openai_model,
            "OPENAI_VISION_MODEL": self.openai_vision_model,
            "MAX_RECENT_VIDEOS": self.max_recent_videos,
            "OUTPUT_FOLDER": self.output_folder,
        }
