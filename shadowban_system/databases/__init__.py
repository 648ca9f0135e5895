"""Signal databases: immutable lookup tables with bulk classification."""

from shadowban_system.databases.base_database import SignalDatabase
from shadowban_system.databases.catalog import SignalCatalog, load_default_catalog
from shadowban_system.databases.content_database import ContentDatabase
from shadowban_system.databases.emoji_database import EmojiDatabase
from shadowban_system.databases.hashtag_database import HashtagDatabase, normalize_tag
from shadowban_system.databases.link_database import LinkDatabase, domain_of
from shadowban_system.databases.mention_database import MentionDatabase

__all__ = [
    "SignalDatabase",
    "SignalCatalog",
    "load_default_catalog",
    "ContentDatabase",
    "EmojiDatabase",
    "HashtagDatabase",
    "normalize_tag",
    "LinkDatabase",
    "domain_of",
    "MentionDatabase",
]
