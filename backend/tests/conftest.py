from pathlib import Path
import os
import tempfile
import pytest

# Point the app at a throwaway SQLite file before any test imports `app`.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="lesson-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"

from app.schemas import LessonContent, Topic


def make_lesson(slug, **overrides):
    """Build a minimal lesson record for registry tests."""
    fields = {
        'slug': slug,
        'title': slug.replace('-', ' ').title(),
        'problem_content': f'# {slug}',
        'solution_content': 'solution',
        'explanation_content': 'explanation',
        'realworld_content': 'real world',
        'mistakes_content': 'mistakes',
        'interview_content': 'interview',
        'starter_code': 'pass',
        'solution_code': 'print("done")',
        'hints': ['first', 'second'],
    }
    fields.update(overrides)
    return LessonContent(**fields)


def make_topic(name, *lessons, phase=1, order=0):
    return Topic(topic=name, title=name.title(), phase=phase, order=order,
                 lessons={lesson.slug: lesson for lesson in lessons})


@pytest.fixture
def lesson_factory():
    return make_lesson


@pytest.fixture
def topic_factory():
    return make_topic
