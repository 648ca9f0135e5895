"""Schema package for check requests, signal databases, agent results and synthesis.

Primary exports:
- CheckRequest: One unit of work dispatched to every agent
- SignalEntry / BulkCheckResult: Signal database entries and bulk classification output
- AgentResult / Finding: Normalized per-agent output
- Synthesis: Final aggregate with verdict and recommendations
- AgentConfigSnapshot: Immutable per-check agent configuration

Usage:
    from shadowban_system.data_management.schemas import CheckRequest, CheckKind
    request = CheckRequest(kind=CheckKind.TEXT, platform="twitter", text="hello #f4f")
"""

from shadowban_system.data_management.schemas.config_schema import (
    AgentConfigSnapshot,
    AgentSettings,
)
from shadowban_system.data_management.schemas.history_schema import (
    HistoryAnalysis,
    HistoryRecord,
    TrendDirection,
)
from shadowban_system.data_management.schemas.request_schema import (
    CheckKind,
    CheckRequest,
    ExtractedContent,
)
from shadowban_system.data_management.schemas.result_schema import (
    AgentResult,
    AgentStatus,
    Finding,
    Severity,
)
from shadowban_system.data_management.schemas.signal_schema import (
    BulkCheckResult,
    BulkCheckSummary,
    DatabaseStats,
    ExtractAndCheckResult,
    PatternHit,
    SignalEntry,
    SignalTier,
    TokenMatch,
)
from shadowban_system.data_management.schemas.synthesis_schema import (
    AgentAgreement,
    Recommendation,
    RecommendationPriority,
    Synthesis,
    TagCheck,
    TagCheckResult,
    TagVerdict,
    Verdict,
)

__all__ = [
    # Config
    "AgentConfigSnapshot",
    "AgentSettings",
    # History
    "HistoryAnalysis",
    "HistoryRecord",
    "TrendDirection",
    # Request
    "CheckKind",
    "CheckRequest",
    "ExtractedContent",
    # Agent results
    "AgentResult",
    "AgentStatus",
    "Finding",
    "Severity",
    # Signals
    "BulkCheckResult",
    "BulkCheckSummary",
    "DatabaseStats",
    "ExtractAndCheckResult",
    "PatternHit",
    "SignalEntry",
    "SignalTier",
    "TokenMatch",
    # Synthesis
    "AgentAgreement",
    "Recommendation",
    "RecommendationPriority",
    "Synthesis",
    "TagCheck",
    "TagCheckResult",
    "TagVerdict",
    "Verdict",
]
