"""Check request schema.

A CheckRequest is one unit of work handed to every agent. It is frozen so
that no agent can alter what the others see during a pass.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from shadowban_system.config.platforms import PLATFORM_ALIASES


class CheckKind(str, Enum):
    """What is being checked."""

    TEXT = "text"
    POST = "post"
    ACCOUNT = "account"


class ExtractedContent(BaseModel):
    """Tokens a platform adapter pulled out of free text.

    Token kinds the platform does not use are left empty.
    """

    hashtags: list[str] = Field(default_factory=list)
    cashtags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)
    emojis: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class CheckRequest(BaseModel):
    """Input shared by every agent for a single check.

    Attributes:
        kind: text, post or account
        platform: Platform id (twitter, reddit, ...)
        text: Raw post or draft text
        url: URL the request was built from, canonicalized when possible
        urls: Links found in or attached to the content
        username: Account handle without the leading sigil
        post_id: Platform post identifier
        subreddit: Subreddit name for Reddit posts
        content: Tokens extracted by the platform adapter
    """

    kind: CheckKind = CheckKind.TEXT
    platform: str = Field(..., min_length=1)
    text: Optional[str] = None
    url: Optional[str] = None
    urls: tuple[str, ...] = ()
    username: Optional[str] = None
    post_id: Optional[str] = None
    subreddit: Optional[str] = None
    content: Optional[ExtractedContent] = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "kind": "text",
                    "platform": "twitter",
                    "text": "New thread on #python packaging",
                },
                {
                    "kind": "post",
                    "platform": "reddit",
                    "url": "https://reddit.com/r/python/comments/abc123",
                    "post_id": "abc123",
                    "subreddit": "python",
                },
            ]
        },
    }

    @field_validator("platform")
    @classmethod
    def normalize_platform(cls, value: str) -> str:
        value = value.strip().lower()
        return PLATFORM_ALIASES.get(value, value)

    @field_validator("username")
    @classmethod
    def strip_handle_sigil(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        for sigil in ("@", "u/", "/u/"):
            if value.lower().startswith(sigil):
                value = value[len(sigil):]
        return value or None

    @model_validator(mode="after")
    def check_identifiers(self) -> "CheckRequest":
        if self.kind == CheckKind.ACCOUNT and not self.username:
            raise ValueError("account checks require a username")
        if self.kind == CheckKind.POST and not (self.post_id or self.url):
            raise ValueError("post checks require a post_id or url")
        return self

    @property
    def identifier(self) -> Optional[str]:
        """Identifier of the checked entity, None for anonymous text."""
        if self.kind == CheckKind.ACCOUNT:
            return self.username
        if self.kind == CheckKind.POST:
            return self.post_id or self.url
        return None

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())
