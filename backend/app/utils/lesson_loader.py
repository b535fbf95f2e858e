"""Helpers to discover and parse topic files under a lesson content folder.

Each topic file is YAML with a small header (`topic`, `title`, `phase`,
`order`) and a `lessons` mapping from slug to lesson fields. The loader
returns validated `Topic` objects sorted into merge order.
"""

import json
import logging
from pathlib import Path
from typing import List

import yaml

from ..schemas import Topic

SUPPORTED_EXT = {'.yaml', '.yml'}
# Literal path segments under /lessons that a slug must not take.
RESERVED_SLUGS = {'count'}
_LOGGER = logging.getLogger("app.content")


def find_topic_files(root: Path) -> List[Path]:
    """Return topic file paths directly under `root`, sorted by name.

    Raises FileNotFoundError when the folder does not exist so a bad
    `LESSON_CONTENT_DIR` fails loudly at startup.
    """
    if not root.is_dir():
        raise FileNotFoundError(f'lesson content folder not found at {root}')
    files = [f for f in root.iterdir() if f.is_file() and f.suffix.lower() in SUPPORTED_EXT]
    return sorted(files)


def parse_topic(raw, source: str = '<memory>') -> Topic:
    """Validate an already-parsed topic mapping and return a `Topic`.

    Lessons may omit `slug`; it defaults to the mapping key. A declared
    slug that differs from its key raises ValueError, as does a reserved
    slug such as `count`.
    """
    if not isinstance(raw, dict):
        raise ValueError(f'{source}: topic file must contain a mapping')
    lessons_raw = raw.get('lessons')
    if not isinstance(lessons_raw, dict) or not lessons_raw:
        raise ValueError(f'{source}: lessons missing or empty')
    lessons = {}
    for key, fields in lessons_raw.items():
        key = str(key)
        if not isinstance(fields, dict):
            raise ValueError(f'{source}: lesson {key!r} must be a mapping')
        declared = fields.get('slug', key)
        if declared != key:
            raise ValueError(f'{source}: lesson key {key!r} does not match slug {declared!r}')
        if key in RESERVED_SLUGS:
            raise ValueError(f'{source}: lesson slug {key!r} is reserved')
        lessons[key] = {**fields, 'slug': key}
    return Topic.model_validate({**raw, 'lessons': lessons})


def load_topic(path: Path) -> Topic:
    """Read one topic file from disk. Malformed YAML raises ValueError."""
    try:
        raw = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ValueError(f'{path.name}: invalid YAML: {e}') from e
    topic = parse_topic(raw, source=path.name)
    _LOGGER.debug(
        "topic_loaded %s",
        json.dumps({'topic': topic.topic, 'file': path.name, 'lessons': len(topic.lessons)}),
    )
    return topic


def load_topics(root: Path) -> List[Topic]:
    """Load every topic under `root` in merge order.

    Merge order is `(phase, order, topic)`. Two files declaring the same
    topic name raise ValueError.
    """
    topics = [load_topic(p) for p in find_topic_files(root)]
    seen = {}
    for t in topics:
        if t.topic in seen:
            raise ValueError(f'duplicate topic {t.topic!r} in {root}')
        seen[t.topic] = t
    return sorted(topics, key=lambda t: (t.phase, t.order, t.topic))
