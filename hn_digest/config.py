from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

MODES = ("story", "digest")


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    # Unset, unparsable and zero all fall back to the default.
    try:
        value = int(env.get(key, "") or 0)
    except ValueError:
        return default
    return value or default


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic: str = "hn_daily_summaries"
    tags: str = "news"
    digest_title: str = "Hacker News Top 10"
    ntfy_server: str = "https://ntfy.sh"
    story_limit: int = 10
    mode: str = "story"
    api_base: str = "https://hacker-news.firebaseio.com/v0"
    user_agent: str = "Mozilla/5.0"
    request_timeout: float = 15.0
    max_workers: int = 4
    summarize: bool = True
    log_level: str = "INFO"

    @field_validator("mode")
    @classmethod
    def _check_mode(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {v!r}")
        return v

    @field_validator("ntfy_server", "api_base")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        d = cls.model_fields
        try:
            timeout = float(env.get("REQUEST_TIMEOUT") or d["request_timeout"].default)
        except ValueError:
            timeout = d["request_timeout"].default
        return cls(
            topic=env.get("NTFY_TOPIC") or d["topic"].default,
            tags=env.get("NTFY_TAGS") or d["tags"].default,
            digest_title=env.get("NTFY_TITLE") or d["digest_title"].default,
            ntfy_server=env.get("NTFY_SERVER") or d["ntfy_server"].default,
            story_limit=_env_int(env, "STORY_LIMIT", d["story_limit"].default),
            mode=env.get("NOTIFY_MODE") or d["mode"].default,
            api_base=env.get("HN_API_BASE") or d["api_base"].default,
            user_agent=env.get("USER_AGENT") or d["user_agent"].default,
            request_timeout=timeout,
            max_workers=_env_int(env, "SUMMARY_WORKERS", d["max_workers"].default),
            summarize=_env_bool(env, "SUMMARIZE", d["summarize"].default),
            log_level=(env.get("LOG_LEVEL") or d["log_level"].default).upper(),
        )
