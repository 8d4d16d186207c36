"""Topic resolution adapters."""

from src.infrastructure.topics.slug_topic_resolver import SlugTopicResolver, slugify

__all__ = ["SlugTopicResolver", "slugify"]
