"""External collaborators for the platform-signal and web-visibility agents.

Both agents depend on data the core cannot produce by itself: platform API
state and web probe results. The collaborators are injected as protocols so
that a deployment can plug in live clients while tests and the CLI use the
static implementations below.

Snapshot fields are Optional: None means "not reported", which lowers the
agent's confidence without counting as a risk signal.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from shadowban_system.errors import DataUnavailable


def _coverage(snapshot, names) -> float:
    names = list(names)
    if not names:
        return 0.0
    present = sum(1 for name in names if getattr(snapshot, name) is not None)
    return present / len(names)


@dataclass(frozen=True)
class AccountSnapshot:
    """Account state as reported by a platform."""

    exists: Optional[bool] = None
    suspended: Optional[bool] = None
    protected: Optional[bool] = None
    created_at: Optional[datetime] = None
    followers_count: Optional[int] = None
    following_count: Optional[int] = None
    visibility_restricted: Optional[bool] = None

    def coverage(self) -> float:
        """Share of fields the platform reported."""
        return _coverage(self, (f.name for f in fields(self)))


@dataclass(frozen=True)
class PostSnapshot:
    """Post state as reported by a platform.

    Attributes:
        removed_by: Who removed the post ("automod", "spam_filter", ...);
            only meaningful when removed is True
        engagement_rate: Engagements divided by views, as a fraction
    """

    exists: Optional[bool] = None
    tombstoned: Optional[bool] = None
    age_restricted: Optional[bool] = None
    limited_visibility: Optional[bool] = None
    removed: Optional[bool] = None
    removed_by: Optional[str] = None
    engagement_rate: Optional[float] = None

    def coverage(self) -> float:
        return _coverage(self, (f.name for f in fields(self) if f.name != "removed_by"))


# Checks that only make sense for Reddit listings
REDDIT_ONLY_CHECKS = ("hidden_in_listing", "hidden_on_old_reddit")


@dataclass(frozen=True)
class VisibilityReport:
    """Answers from web visibility probes; None means the probe could not tell."""

    search_ban: Optional[bool] = None
    search_suggestion_ban: Optional[bool] = None
    reply_deboosting: Optional[bool] = None
    hidden_in_listing: Optional[bool] = None
    hidden_on_old_reddit: Optional[bool] = None
    not_indexed: Optional[bool] = None
    mobile_hidden: Optional[bool] = None

    def applicable_checks(self, platform: str) -> Tuple[str, ...]:
        names = tuple(f.name for f in fields(self))
        if platform == "reddit":
            return names
        return tuple(n for n in names if n not in REDDIT_ONLY_CHECKS)

    def coverage(self, platform: str) -> float:
        """Share of applicable checks the probe answered."""
        return _coverage(self, self.applicable_checks(platform))


@runtime_checkable
class PlatformDataSource(Protocol):
    """Source of platform-reported account and post state."""

    async def fetch_account(self, platform: str, username: str) -> AccountSnapshot:
        ...

    async def fetch_post(
        self, platform: str, post_id: Optional[str], url: Optional[str] = None
    ) -> PostSnapshot:
        ...


@runtime_checkable
class VisibilityProbe(Protocol):
    """Prober of search and listing visibility for an account or post."""

    async def probe(
        self,
        platform: str,
        username: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> VisibilityReport:
        ...


class StaticPlatformDataSource:
    """
    In-memory PlatformDataSource backed by fixed snapshots.

    Lookups that have no snapshot raise DataUnavailable, which the agent
    treats the same as a missing data source.

    Usage:
        source = StaticPlatformDataSource(
            accounts={("twitter", "jack"): AccountSnapshot(exists=True)}
        )
    """

    def __init__(
        self,
        accounts: Optional[Dict[Tuple[str, str], AccountSnapshot]] = None,
        posts: Optional[Dict[Tuple[str, str], PostSnapshot]] = None,
    ):
        self._accounts = {(p, u.lower()): s for (p, u), s in (accounts or {}).items()}
        self._posts = dict(posts or {})

    async def fetch_account(self, platform: str, username: str) -> AccountSnapshot:
        try:
            return self._accounts[(platform, username.lower())]
        except KeyError:
            raise DataUnavailable("platform_data", f"no account data for {platform}:{username}")

    async def fetch_post(
        self, platform: str, post_id: Optional[str], url: Optional[str] = None
    ) -> PostSnapshot:
        for key in (post_id, url):
            if key and (platform, key) in self._posts:
                return self._posts[(platform, key)]
        raise DataUnavailable("platform_data", f"no post data for {platform}:{post_id or url}")


class StaticVisibilityProbe:
    """In-memory VisibilityProbe returning fixed reports keyed by identifier."""

    def __init__(self, reports: Optional[Dict[Tuple[str, str], VisibilityReport]] = None):
        self._reports = dict(reports or {})

    async def probe(
        self,
        platform: str,
        username: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> VisibilityReport:
        for key in (post_id, username):
            if key and (platform, key) in self._reports:
                return self._reports[(platform, key)]
        raise DataUnavailable("visibility_probe", f"no report for {platform}:{post_id or username}")
