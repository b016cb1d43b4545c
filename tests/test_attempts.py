import pytest
from sqlalchemy.exc import OperationalError

from medicohub.errors import ValidationError
from medicohub.extensions import db
from medicohub.models import Attempt, LeaderboardEntry
from medicohub.services import AttemptService
from tests.conftest import answer_ids


def test_record_attempt_requires_user_id(app, quiz):
    with pytest.raises(ValidationError):
        AttemptService.record_attempt(None, 'quiz', quiz.id, [], 0, 10)
    with pytest.raises(ValidationError):
        AttemptService.record_attempt('', 'quiz', quiz.id, [], 0, 10)
    assert Attempt.query.count() == 0


def test_record_attempt_rejects_unknown_kind(app, quiz):
    with pytest.raises(ValidationError):
        AttemptService.record_attempt('u1', 'survey', quiz.id, [], 0, 10)


def test_every_submission_creates_a_new_attempt(app, quiz):
    AttemptService.record_attempt('u1', 'quiz', quiz.id, [], 1, 10)
    AttemptService.record_attempt('u1', 'quiz', quiz.id, [], 3, 12)
    assert Attempt.query.filter_by(user_id='u1').count() == 2


def test_leaderboard_faster_attempt_wins_tie(app, quiz):
    AttemptService.record_attempt('A', 'quiz', quiz.id, [], 5, 30, user_name='Alice')
    AttemptService.record_attempt('B', 'quiz', quiz.id, [], 5, 20, user_name='Bob')
    AttemptService.record_attempt('C', 'quiz', quiz.id, [], 6, 90, user_name='Cleo')

    board = AttemptService.leaderboard_for('quiz', quiz.id)

    assert [row['userId'] for row in board] == ['C', 'B', 'A']
    assert [row['rank'] for row in board] == [1, 2, 3]
    assert board[1] == {
        'rank': 2,
        'user': 'Bob',
        'userId': 'B',
        'score': 5,
        'time': 20,
        'date': board[1]['date'],
    }


def test_leaderboard_capped_at_fifty(app, quiz):
    for i in range(55):
        AttemptService.record_attempt(f'u{i}', 'quiz', quiz.id, [], i % 4, i)
    assert len(AttemptService.leaderboard_for('quiz', quiz.id)) == 50


def test_leaderboard_only_includes_matching_kind(app, quiz, exam):
    AttemptService.record_attempt('u1', 'quiz', quiz.id, [], 2, 10)
    AttemptService.record_attempt('u2', 'exam', exam.id, [], 1, 10)
    board = AttemptService.leaderboard_for('exam', exam.id)
    assert [row['userId'] for row in board] == ['u2']


def test_submit_quiz_attempt_route(client, quiz):
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'userId': 'u1',
        'name': 'Uma',
        'answers': answer_ids(quiz, ['B', 'C', 'D']),
        'durationSec': 42,
    })

    assert resp.status_code == 200
    body = resp.get_json()
    assert body['success'] is True
    assert body['score'] == 2
    assert body['attempt']['score'] == 2
    assert body['attempt']['durationSec'] == 42
    assert body['attempt']['type'] == 'quiz'
    assert [a['correct'] for a in body['attempt']['answers']] == [True, False, True]


def test_submit_without_user_id_writes_nothing(client, quiz):
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'answers': answer_ids(quiz, ['B', 'A', 'D']),
    })
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'userId required'}
    assert Attempt.query.count() == 0


def test_submit_to_missing_quiz_is_404(client):
    resp = client.post('/api/quizzes/999/attempt', json={'userId': 'u1', 'answers': []})
    assert resp.status_code == 404
    assert Attempt.query.count() == 0


def test_negative_duration_rejected(client, quiz):
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'userId': 'u1', 'answers': [], 'durationSec': -5,
    })
    assert resp.status_code == 400


def test_submit_exam_route_scores_typed_answers(client, exam):
    resp = client.post(f'/api/exams/{exam.id}/submit', json={
        'userId': 'u9',
        'answers': answer_ids(exam, [10, False]),
        'durationSec': 600,
    })
    assert resp.status_code == 200
    assert resp.get_json()['score'] == 2

    resp = client.post(f'/api/exams/{exam.id}/submit', json={
        'userId': 'u8',
        'answers': answer_ids(exam, ['10', 0]),
    })
    assert resp.get_json()['score'] == 0


def test_quiz_leaderboard_route(client, quiz):
    for user, picks, secs in [('A', ['B', 'A', 'C'], 30), ('B', ['B', 'A', 'C'], 20)]:
        client.post(f'/api/quizzes/{quiz.id}/attempt', json={
            'userId': user, 'name': user, 'answers': answer_ids(quiz, picks), 'durationSec': secs,
        })

    resp = client.get(f'/api/quizzes/{quiz.id}/leaderboard')
    assert resp.status_code == 200
    assert [row['user'] for row in resp.get_json()] == ['B', 'A']


def test_leaderboard_for_missing_exam_is_404(client):
    assert client.get('/api/exams/12345/leaderboard').status_code == 404


def test_attempt_write_failure_records_nothing(client, quiz, monkeypatch):
    def broken_add(obj):
        raise OperationalError('INSERT INTO attempt', {}, Exception('db down'))

    monkeypatch.setattr(db.session, 'add', broken_add)
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'userId': 'u1', 'answers': answer_ids(quiz, ['B', 'A', 'D']),
    })
    monkeypatch.undo()

    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Failed to submit quiz attempt'}
    assert Attempt.query.count() == 0
    assert LeaderboardEntry.query.count() == 0


def test_fractional_durations_break_ties(client, quiz):
    for user, secs in [('A', 20.9), ('B', 20.1)]:
        resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
            'userId': user, 'name': user, 'answers': [], 'durationSec': secs,
        })
        assert resp.status_code == 200
        assert resp.get_json()['attempt']['durationSec'] == secs

    board = client.get(f'/api/quizzes/{quiz.id}/leaderboard').get_json()
    assert [(row['user'], row['time']) for row in board] == [('B', 20.1), ('A', 20.9)]


def test_duration_accepts_numeric_strings(client, quiz):
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
        'userId': 'u1', 'answers': [], 'durationSec': '20.5',
    })
    assert resp.status_code == 200
    assert resp.get_json()['attempt']['durationSec'] == 20.5


def test_duration_defaults_to_zero(client, quiz):
    resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={'userId': 'u1', 'answers': []})
    assert resp.get_json()['attempt']['durationSec'] == 0


def test_invalid_durations_rejected(client, quiz):
    for bad in [True, False, 'soon', [1], {'s': 1}, 'nan', 'inf']:
        resp = client.post(f'/api/quizzes/{quiz.id}/attempt', json={
            'userId': 'u1', 'answers': [], 'durationSec': bad,
        })
        assert resp.status_code == 400, bad
    assert Attempt.query.count() == 0
