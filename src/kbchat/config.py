"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


@dataclass(slots=True)
class AppConfig:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    max_tokens: int = 768
    api_url: str = DEFAULT_API_URL
    anthropic_version: str = ANTHROPIC_VERSION
    timeout: float = 60.0
    knowledge_path: Path = Path("knowledge.txt")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables, keeping defaults for unset ones."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            api_key=env.get("ANTHROPIC_API_KEY") or None,
            model=env.get("KBCHAT_MODEL") or defaults.model,
            max_tokens=int(env.get("KBCHAT_MAX_TOKENS") or defaults.max_tokens),
            api_url=env.get("KBCHAT_API_URL") or defaults.api_url,
            timeout=float(env.get("KBCHAT_TIMEOUT") or defaults.timeout),
            knowledge_path=Path(env.get("KBCHAT_KNOWLEDGE_PATH") or defaults.knowledge_path),
        )

    def resolve_knowledge_path(self, base_dir: Path | None = None) -> Path:
        path = Path(self.knowledge_path).expanduser()
        if path.is_absolute() or base_dir is None:
            return path
        return base_dir / path
