"""Lesson registry: one read-only lookup surface over every topic.

The registry is built once from the ordered list of topics and never
changes afterwards. Lookups of unknown slugs return `None` rather than
raising, so callers branch on absence and render a "not found" state.

Module-level accessors (`get_lesson_content`, `has_lesson`,
`get_lesson_count`, `get_all_lesson_slugs`) delegate to the process-wide
registry returned by `get_registry()`.
"""

import json
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .config import settings
from .schemas import LessonContent, Topic
from .utils.lesson_loader import load_topics

logger = logging.getLogger("app.content")


class DuplicateLessonError(ValueError):
    """Two topics contribute the same lesson slug."""


class LessonRegistry:
    """Immutable slug -> `LessonContent` map with topic views."""

    def __init__(self, lessons: Mapping[str, LessonContent], topics: Iterable[Topic] = ()):
        self._lessons = MappingProxyType(dict(lessons))
        self._topics = tuple(topics)
        self._topics_by_name = {t.topic: t for t in self._topics}
        self._slugs: Optional[Tuple[str, ...]] = None

    def get_lesson_content(self, slug: str) -> Optional[LessonContent]:
        """Return the record for an exact slug match, or `None`."""
        return self._lessons.get(slug)

    def has_lesson(self, slug: str) -> bool:
        return slug in self._lessons

    def get_lesson_count(self) -> int:
        return len(self._lessons)

    def get_all_lesson_slugs(self) -> Tuple[str, ...]:
        """Return every registered slug.

        Computed on first call; the same tuple is returned afterwards.
        """
        if self._slugs is None:
            self._slugs = tuple(self._lessons)
        return self._slugs

    def all_lesson_content(self) -> Mapping[str, LessonContent]:
        return self._lessons

    def topics(self) -> Tuple[Topic, ...]:
        return self._topics

    def get_topic(self, name: str) -> Optional[Topic]:
        return self._topics_by_name.get(name)

    def get_topic_lessons(self, name: str) -> Optional[Mapping[str, LessonContent]]:
        """Return a read-only view of one topic's lessons, or `None`."""
        topic = self._topics_by_name.get(name)
        if topic is None:
            return None
        return topic.lessons


def build_registry(topics: Iterable[Topic], allow_override: bool = False) -> LessonRegistry:
    """Merge `topics` in the given order into one `LessonRegistry`.

    A slug contributed by two topics raises DuplicateLessonError unless
    `allow_override` is set, in which case the later topic wins.
    """
    topics = list(topics)
    merged: Dict[str, LessonContent] = {}
    owners: Dict[str, str] = {}
    for topic in topics:
        for slug, lesson in topic.lessons.items():
            previous = owners.get(slug)
            if previous is not None:
                if not allow_override:
                    raise DuplicateLessonError(
                        f"duplicate lesson slug '{slug}' in topics '{previous}' and '{topic.topic}'"
                    )
                logger.warning(
                    "lesson_slug_overridden %s",
                    json.dumps({"slug": slug, "previous_topic": previous, "topic": topic.topic}),
                )
            merged[slug] = lesson
            owners[slug] = topic.topic
    registry = LessonRegistry(merged, topics)
    logger.info(
        "lesson_registry_built %s",
        json.dumps({"topics": len(topics), "lessons": registry.get_lesson_count()}),
    )
    return registry


@lru_cache(maxsize=1)
def get_registry() -> LessonRegistry:
    """Build the process-wide registry from the configured content folder."""
    topics = load_topics(settings.LESSON_CONTENT_DIR)
    return build_registry(topics, allow_override=settings.ALLOW_SLUG_OVERRIDE)


def get_lesson_content(slug: str) -> Optional[LessonContent]:
    return get_registry().get_lesson_content(slug)


def has_lesson(slug: str) -> bool:
    return get_registry().has_lesson(slug)


def get_lesson_count() -> int:
    return get_registry().get_lesson_count()


def get_all_lesson_slugs() -> Tuple[str, ...]:
    return get_registry().get_all_lesson_slugs()
