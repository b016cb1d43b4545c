from sqlalchemy.exc import OperationalError

from medicohub.models import Attempt, LeaderboardEntry
from medicohub.services import LeaderboardService
from tests.conftest import answer_ids


def test_first_credit_creates_entry(app):
    entry = LeaderboardService.credit_xp('u1', 'Uma', 3)
    assert (entry.user_id, entry.name, entry.xp, entry.streak) == ('u1', 'Uma', 3, 1)
    assert entry.last_active is not None


def test_credit_increments_without_touching_streak(app):
    LeaderboardService.credit_xp('u1', 'Uma', 3)
    entry = LeaderboardService.credit_xp('u1', 'Uma', 4)
    assert entry.xp == 7
    assert entry.streak == 1
    assert LeaderboardEntry.query.count() == 1


def test_missing_display_name_defaults(app):
    assert LeaderboardService.credit_xp('u1', None, 1).name == 'Unknown'


def test_xp_never_decreases(app):
    seen = []
    for amount in [2, 0, 5, 1, 0]:
        seen.append(LeaderboardService.credit_xp('u1', 'Uma', amount).xp)
    assert seen == sorted(seen)
    assert seen[-1] == 8


def test_top_n_orders_by_xp(app):
    LeaderboardService.credit_xp('a', 'A', 1)
    LeaderboardService.credit_xp('b', 'B', 9)
    LeaderboardService.credit_xp('c', 'C', 4)

    top = LeaderboardService.top_n(2)
    assert [row['userId'] for row in top] == ['b', 'c']
    assert [row['rank'] for row in top] == [1, 2]


def test_resubmitting_double_counts_xp(client, quiz):
    payload = {'userId': 'u1', 'name': 'Uma', 'answers': answer_ids(quiz, ['B', 'A', 'D'])}
    client.post(f'/api/quizzes/{quiz.id}/attempt', json=payload)
    client.post(f'/api/quizzes/{quiz.id}/attempt', json=payload)

    assert LeaderboardEntry.query.filter_by(user_id='u1').one().xp == 6


def test_credit_failure_does_not_fail_submission(client, quiz, monkeypatch):
    def broken_credit(*args, **kwargs):
        raise OperationalError('UPDATE leaderboard_entry', {}, Exception('db down'))

    monkeypatch.setattr(LeaderboardService, 'credit_xp', broken_credit)

    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'userId': 'u1', 'answers': answer_ids(quiz, ['B', 'A', 'D']),
    })

    assert resp.status_code == 200
    assert resp.get_json()['score'] == 3
    assert Attempt.query.count() == 1
    assert LeaderboardEntry.query.count() == 0


def test_global_leaderboard_route(client):
    LeaderboardService.credit_xp('a', 'A', 1)
    LeaderboardService.credit_xp('b', 'B', 9)

    resp = client.get('/api/leaderboard?limit=1')
    assert resp.status_code == 200
    assert [row['name'] for row in resp.get_json()] == ['B']

    assert client.get('/api/leaderboard?limit=0').status_code == 400
    assert len(client.get('/api/leaderboard').get_json()) == 2


def test_concurrent_first_credit_falls_back_to_increment(app, monkeypatch):
    LeaderboardService.credit_xp('u1', 'Uma', 3)

    real_increment = LeaderboardService._increment
    calls = []

    def increment_missing_first(user_id, amount):
        # First call behaves as if the entry did not exist yet
        calls.append(user_id)
        if len(calls) == 1:
            return 0
        return real_increment(user_id, amount)

    monkeypatch.setattr(LeaderboardService, '_increment', staticmethod(increment_missing_first))

    entry = LeaderboardService.credit_xp('u1', 'Uma', 4)

    assert len(calls) == 2
    assert entry.xp == 7
    assert LeaderboardEntry.query.count() == 1
