"""CLI script to validate lesson topic files and print registry counts.
Usage: python scripts/check_lessons.py [--content-dir DIR] [--allow-override]
"""
import sys
import argparse
import pathlib
from typing import Optional
# Ensure `backend/` is on sys.path so `app` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from app.config import settings
from app.registry import build_registry
from app.utils.lesson_loader import load_topics

def main(content_dir: Optional[pathlib.Path] = None, allow_override: bool = False) -> int:
    """Load every topic file and build the registry.

    Prints one line per topic and the registry total. Returns a non-zero
    exit code on any content error so CI can gate on it.
    """
    root = content_dir or settings.LESSON_CONTENT_DIR
    try:
        topics = load_topics(root)
        registry = build_registry(topics, allow_override=allow_override)
    except (OSError, ValueError) as e:
        print(f'Content error in {root}: {e}')
        return 1
    for t in topics:
        print(f'Phase {t.phase} {t.topic}: {len(t.lessons)} lessons')
    print(f'Total lessons: {registry.get_lesson_count()} across {len(topics)} topics')
    return 0

if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--content-dir', type=pathlib.Path, help='Topic files folder (defaults to LESSON_CONTENT_DIR)')
    parser.add_argument('--allow-override', action='store_true', help='Let later topics overwrite duplicate slugs')
    args = parser.parse_args()
    sys.exit(main(content_dir=args.content_dir, allow_override=args.allow_override))
