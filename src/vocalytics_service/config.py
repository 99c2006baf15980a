from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class Settings:
  log_level: str = "INFO"
  lexicon_path: str | None = None
  max_transcript_chars: int = 200_000


def load_settings() -> Settings:
  log_level = os.getenv("LOG_LEVEL", "INFO")
  lexicon_path = os.getenv("VOCALYTICS_LEXICON_PATH") or None
  try:
    max_chars = int(os.getenv("VOCALYTICS_MAX_CHARS", "200000"))
  except ValueError:
    max_chars = 200_000
  return Settings(log_level=log_level, lexicon_path=lexicon_path, max_transcript_chars=max_chars)
