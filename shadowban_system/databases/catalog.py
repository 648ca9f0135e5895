"""Signal catalog: the five databases an application context hands to agents."""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict

from shadowban_system.data_management.schemas import DatabaseStats
from shadowban_system.databases.base_database import SignalDatabase
from shadowban_system.databases.content_database import ContentDatabase
from shadowban_system.databases.emoji_database import EmojiDatabase
from shadowban_system.databases.hashtag_database import HashtagDatabase
from shadowban_system.databases.link_database import LinkDatabase
from shadowban_system.databases.mention_database import MentionDatabase


@dataclass(frozen=True)
class SignalCatalog:
    """Immutable bundle of signal databases."""

    hashtags: HashtagDatabase = field(default_factory=HashtagDatabase)
    links: LinkDatabase = field(default_factory=LinkDatabase)
    content: ContentDatabase = field(default_factory=ContentDatabase)
    mentions: MentionDatabase = field(default_factory=MentionDatabase)
    emojis: EmojiDatabase = field(default_factory=EmojiDatabase)

    def databases(self) -> Dict[str, SignalDatabase]:
        return {
            "hashtags": self.hashtags,
            "links": self.links,
            "content": self.content,
            "mentions": self.mentions,
            "emojis": self.emojis,
        }

    def get_stats(self) -> Dict[str, DatabaseStats]:
        return {name: db.get_stats() for name, db in self.databases().items()}


@lru_cache(maxsize=1)
def load_default_catalog() -> SignalCatalog:
    """Build the default catalog once per process."""
    return SignalCatalog()
