from fastapi.testclient import TestClient
from app.main import app
from app.registry import get_registry

client = TestClient(app)


def test_health_and_request_id():
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers


def test_request_id_is_echoed():
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.headers['X-Request-ID'] == 'abc123'


def test_list_lessons_matches_registry():
    r = client.get('/lessons')
    assert r.status_code == 200
    body = r.json()
    assert body['slugs'] == list(get_registry().get_all_lesson_slugs())
    assert body['count'] == len(body['slugs'])
    count = client.get('/lessons/count').json()
    assert count['count'] == body['count']


def test_count_route_is_never_a_lesson_slug():
    assert not get_registry().has_lesson('count')
    r = client.get('/lessons/count')
    assert r.status_code == 200
    assert r.json() == {'count': get_registry().get_lesson_count()}


def test_get_lesson_uses_camel_case_fields():
    r = client.get('/lessons/http-basics')
    assert r.status_code == 200
    body = r.json()
    assert body['slug'] == 'http-basics'
    for key in ('problemContent', 'solutionContent', 'explanationContent', 'realworldContent',
                'mistakesContent', 'interviewContent', 'starterCode', 'solutionCode'):
        assert isinstance(body[key], str)
    assert isinstance(body['hints'], list)
    assert 'problem_content' not in body


def test_unknown_lesson_returns_404():
    r = client.get('/lessons/does-not-exist')
    assert r.status_code == 404
    assert r.json()['detail'] == 'lesson not found'


def test_lesson_exists_endpoint():
    assert client.get('/lessons/http-basics/exists').json() == {'slug': 'http-basics', 'exists': True}
    assert client.get('/lessons/nope/exists').json() == {'slug': 'nope', 'exists': False}


def test_topics_endpoints():
    r = client.get('/topics')
    assert r.status_code == 200
    topics = r.json()
    assert topics[0]['topic'] == 'python-essentials'
    assert sum(t['lesson_count'] for t in topics) == get_registry().get_lesson_count()
    detail = client.get('/topics/langchain').json()
    assert 'langchain-setup' in detail['slugs']
    assert detail['lesson_count'] == len(detail['slugs'])
    assert client.get('/topics/unknown').status_code == 404
