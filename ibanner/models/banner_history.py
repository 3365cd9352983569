"""Banner history entry model (pure Python, no Qt dependency)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from ibanner.models.banner_style import BannerStyle, parse_timestamp, utc_now


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class BannerHistory:
    """A previously displayed banner: its text and a snapshot of its style."""

    text: str
    style: BannerStyle
    timestamp: datetime = field(default_factory=utc_now)
    history_id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            "history_id": self.history_id,
            "text": self.text,
            "style": self.style.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> BannerHistory:
        return cls(
            history_id=str(data["history_id"]),
            text=str(data["text"]),
            style=BannerStyle.from_dict(data["style"]),
            timestamp=parse_timestamp(data["timestamp"]),
        )
