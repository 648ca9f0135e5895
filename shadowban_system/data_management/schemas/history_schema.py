"""History record and trend analysis schemas."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TrendDirection(str, Enum):
    """Direction of an entity's scores over its recent checks."""

    WORSENING = "worsening"
    IMPROVING = "improving"
    STABLE = "stable"


class HistoryRecord(BaseModel):
    """One past check outcome for a fingerprinted entity."""

    key: str = Field(..., description="Fingerprint, e.g. account:twitter:jack")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    score: float = Field(..., ge=0.0, le=100.0)
    confidence: float = Field(0.0, ge=0.0, le=100.0)
    flags: list[str] = Field(default_factory=list)
    verdict: Optional[str] = None

    model_config = {"frozen": True}


class HistoryAnalysis(BaseModel):
    """Summary statistics over an entity's history."""

    count: int = Field(0, ge=0)
    mean_score: float = 0.0
    recent_mean: float = 0.0
    older_mean: Optional[float] = Field(
        None, description="Mean of records before the recent window; None when there are none"
    )
    trend: TrendDirection = TrendDirection.STABLE
    recurring_flags: list[str] = Field(default_factory=list)
    high_severity_count: int = Field(0, ge=0)
