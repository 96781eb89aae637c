"""Environment-driven settings for the visualizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import os

from dotenv import load_dotenv


@dataclass
class AppConfig:
    default_capacity: int = 4
    min_capacity: int = 1
    max_capacity: int = 10
    # rolling operation log length
    log_limit: int = 10
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.min_capacity < 1:
            raise ValueError("LRU_MIN_CAPACITY must be >= 1")
        if self.min_capacity > self.max_capacity:
            raise ValueError("LRU_MIN_CAPACITY must not exceed LRU_MAX_CAPACITY")
        if self.log_limit < 1:
            raise ValueError("LRU_LOG_LIMIT must be >= 1")
        self.default_capacity = self.clamp(self.default_capacity)
        self.log_level = self.log_level.upper()

    def clamp(self, capacity: int) -> int:
        return max(self.min_capacity, min(self.max_capacity, int(capacity)))


def load_config(env_path: Optional[str] = None) -> AppConfig:
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()
    return AppConfig(
        default_capacity=int(os.getenv("LRU_DEFAULT_CAPACITY", "4")),
        min_capacity=int(os.getenv("LRU_MIN_CAPACITY", "1")),
        max_capacity=int(os.getenv("LRU_MAX_CAPACITY", "10")),
        log_limit=int(os.getenv("LRU_LOG_LIMIT", "10")),
        log_level=os.getenv("LRU_LOG_LEVEL", "INFO"),
    )


__all__ = ["AppConfig", "load_config"]
