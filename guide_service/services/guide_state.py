"""
Guide State

Caller-owned holder for the most recent guide document and the status of the
refresh that produced it. One instance lives on the application state; nothing
here is module-global.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from guide_service.schemas import GuideDocument


@dataclass(slots=True)
class GuideState:
    """Latest guide document plus loading/error status."""
    document: GuideDocument | None = None
    loading: bool = False
    error: str | None = None
    fetched_at: datetime | None = None
    source: str | None = None

    @property
    def has_document(self) -> bool:
        return self.document is not None

    def begin_refresh(self) -> None:
        self.loading = True

    def complete_refresh(self, document: GuideDocument, source: str) -> None:
        """Swap in a freshly fetched document and clear any previous error."""
        self.document = document
        self.source = source
        self.fetched_at = datetime.now(timezone.utc)
        self.error = None
        self.loading = False

    def fail_refresh(self, error: str) -> None:
        """Record a failed refresh; the previous document stays available."""
        self.error = error
        self.loading = False

    def snapshot(self) -> dict:
        payload = {
            "loaded": self.has_document,
            "loading": self.loading,
            "fetched_at": self.fetched_at.isoformat() if self.fetched_at else None,
        }
        if self.error:
            payload["error"] = self.error
        return payload


__all__ = ["GuideState"]
