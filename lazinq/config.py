import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """library-wide defaults. explicit keyword arguments always win."""
    # worker ceiling for par.for_each when concurrency <= 0; None means os.cpu_count()
    default_concurrency: Optional[int] = None
    # buffer size of channels created by to.channel()
    channel_capacity: int = 1
    thread_name_prefix: str = "lazinq"

    def resolve_concurrency(self, concurrency: int = 0) -> int:
        if concurrency > 0:
            return concurrency
        if self.default_concurrency is not None and self.default_concurrency > 0:
            return self.default_concurrency
        return os.cpu_count() or 1


settings = Settings()


def get_settings() -> Settings:
    return settings


def configure(**overrides) -> Settings:
    """replace library settings, e.g. configure(channel_capacity=8)."""
    global settings
    settings = replace(settings, **overrides)
    return settings
