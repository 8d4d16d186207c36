"""Slug-based topic resolver.

Implements TopicResolverProtocol. Configured aliases (TOPIC_ALIASES) map an
event code straight to a topic folder; every other code resolves to its
slug, so "Wedding 42" and "wedding-42" address the same topic.
"""

import re

from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, collapse runs of other characters to "-", trim the edges."""
    return _NON_SLUG.sub("-", value.strip().lower()).strip("-")


class SlugTopicResolver:
    """Resolves event codes through aliases, then slugs.

    Args:
        aliases: Event code to topic overrides (matched after slugifying
            the code).
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self._aliases = {slugify(code): topic for code, topic in (aliases or {}).items()}

    def resolve(self, event_code: str) -> Result[str, NotFoundError]:
        """Resolve an event code to its topic.

        Args:
            event_code: Code from the request path.

        Returns:
            Success(topic), or Failure(NotFoundError) if the code has no
            usable characters.
        """
        slug = slugify(event_code)
        if not slug:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.EVENT_NOT_FOUND,
                    message="Event not found",
                    resource_type="Event",
                    resource_id=event_code,
                )
            )
        return Success(value=self._aliases.get(slug, slug))
