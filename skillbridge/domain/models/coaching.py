"""Domain models for coaching results handed to the presentation layer."""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional


class ResultSource(str, enum.Enum):
    """Where a coaching payload came from."""
    AI = "ai"             # Fresh model output
    CACHE = "cache"       # Previously fetched model output
    DEMO = "demo"         # Static data served because the AI quota ran out
    FALLBACK = "fallback" # Static data served after any other failure


@dataclass
class CoachingResult:
    """Payload plus provenance, so the UI can flag demo or fallback mode."""
    payload: Dict[str, Any]
    source: ResultSource
    note: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.source in (ResultSource.DEMO, ResultSource.FALLBACK)
