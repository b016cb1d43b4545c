import pytest

from medicohub import create_app
from medicohub.extensions import db, socketio
from medicohub.services import AssessmentService, GroupService

ADMIN_EMAIL = 'admin@medicohub.test'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app, client):
    sio = socketio.test_client(app, flask_test_client=client)
    yield sio
    if sio.is_connected():
        sio.disconnect()


@pytest.fixture
def admin_headers():
    return {'X-User-Email': ADMIN_EMAIL}


@pytest.fixture
def quiz(app):
    """Three questions, correct answers B, A, D"""
    return AssessmentService.create_quiz({
        'title': 'Cardiology basics',
        'topic': 'cardiology',
        'questions': [
            {'question': 'Q1', 'options': ['A', 'B', 'C', 'D'], 'correctAnswer': 'B'},
            {'question': 'Q2', 'options': ['A', 'B', 'C', 'D'], 'correctAnswer': 'A'},
            {'question': 'Q3', 'options': ['A', 'B', 'C', 'D'], 'correctAnswer': 'D'},
        ],
    })


@pytest.fixture
def exam(app):
    return AssessmentService.create_exam({
        'title': 'Pharmacology final',
        'duration': 90,
        'questions': [
            {'question': 'Dose of X?', 'options': [5, 10, 20], 'correctAnswer': 10},
            {'question': 'Is Y safe?', 'options': [True, False], 'correctAnswer': False},
        ],
    })


@pytest.fixture
def groups(app):
    red = GroupService.create({'name': 'Red', 'members': ['u1', 'u2']})
    blue = GroupService.create({'name': 'Blue', 'members': ['u3']})
    return red, blue


def answer_ids(assessment, selections):
    """[{questionId, selected}] in question order"""
    return [
        {'questionId': q.id, 'selected': s}
        for q, s in zip(assessment.questions, selections)
    ]
