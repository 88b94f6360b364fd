"""Core enums and type definitions."""

from enum import StrEnum


class ResolutionStatus(StrEnum):
    """Outcome of a single ENS resolution call."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    # Every endpoint tried within the attempt budget failed
    TRANSPORT_DEGRADED = "transport_degraded"


class FriendshipStatus(StrEnum):
    """Lifecycle state of a friendship edge."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class TextRecordKey(StrEnum):
    """Well-known ENS text record keys fetched for a profile."""

    EMAIL = "email"
    URL = "url"
    AVATAR = "avatar"
    DESCRIPTION = "description"
    NOTICE = "notice"
    KEYWORDS = "keywords"

    # Service identifiers (ENSIP-5 reverse-DNS keys)
    DISCORD = "com.discord"
    GITHUB = "com.github"
    REDDIT = "com.reddit"
    TWITTER = "com.twitter"
    TELEGRAM = "org.telegram"
    KEYBASE = "io.keybase"


COMMON_TEXT_RECORD_KEYS: tuple[str, ...] = tuple(key.value for key in TextRecordKey)
