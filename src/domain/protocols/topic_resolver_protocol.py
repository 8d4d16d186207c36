"""Topic resolution protocol (port).

Maps the human-facing event code in a URL to the canonical topic string
that scopes subscribers and stored artifacts.
"""

from typing import Protocol

from src.core.errors import NotFoundError
from src.core.result import Result


class TopicResolverProtocol(Protocol):
    """Protocol for event code to topic resolution.

    Implementations:
        - SlugTopicResolver: Configured aliases, then slugified code
    """

    def resolve(self, event_code: str) -> Result[str, NotFoundError]:
        """Resolve an event code.

        Args:
            event_code: Code from the request path.

        Returns:
            Success(topic) or Failure(NotFoundError) for an unknown event.
        """
        ...
