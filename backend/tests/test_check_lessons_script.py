import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / 'scripts' / 'check_lessons.py'
spec = importlib.util.spec_from_file_location('check_lessons', SCRIPT)
check_lessons = importlib.util.module_from_spec(spec)
spec.loader.exec_module(check_lessons)

LESSON = """\
    problem_content: p
    solution_content: s
    explanation_content: e
    realworld_content: r
    mistakes_content: m
    interview_content: i
    starter_code: ''
    solution_code: ''
"""


def _write_topic(path, name, slug):
    path.write_text(f"topic: {name}\ntitle: {name}\nlessons:\n  {slug}:\n{LESSON}", encoding='utf-8')


def test_bundled_content_passes(capsys):
    assert check_lessons.main() == 0
    out = capsys.readouterr().out
    assert 'Total lessons:' in out


def test_duplicate_slug_fails_unless_override(tmp_path, capsys):
    _write_topic(tmp_path / 'a.yaml', 'a', 'dup')
    _write_topic(tmp_path / 'b.yaml', 'b', 'dup')
    assert check_lessons.main(content_dir=tmp_path) == 1
    assert 'duplicate lesson slug' in capsys.readouterr().out
    assert check_lessons.main(content_dir=tmp_path, allow_override=True) == 0
    assert 'Total lessons: 1 across 2 topics' in capsys.readouterr().out


def test_missing_folder_fails(tmp_path):
    assert check_lessons.main(content_dir=tmp_path / 'missing') == 1


def test_broken_yaml_is_reported(tmp_path, capsys):
    (tmp_path / 'broken.yaml').write_text('topic: broken\ntitle: [unclosed\n', encoding='utf-8')
    assert check_lessons.main(content_dir=tmp_path) == 1
    out = capsys.readouterr().out
    assert 'Content error' in out
    assert 'invalid YAML' in out
