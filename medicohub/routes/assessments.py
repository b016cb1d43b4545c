"""
Assessment Routes
Quiz and exam CRUD, attempt submission and per-assessment leaderboards
"""
from flask import Blueprint, request, jsonify
from medicohub.errors import register_error_handlers
from medicohub.models.assessment import QUIZ, EXAM
from medicohub.services import AssessmentService, AttemptService, SubmissionService
from medicohub.utils import require_admin, request_json, current_user_email, is_admin_email

assessments_bp = Blueprint('assessments', __name__)
register_error_handlers(assessments_bp)


def _show_answers():
    return is_admin_email(current_user_email())


# ======================= QUIZZES =======================

@assessments_bp.route('/quizzes', methods=['POST'])
@require_admin
def create_quiz():
    """Create a quiz: {topic, title, difficulty, questions}"""
    quiz = AssessmentService.create_quiz(request_json())
    return jsonify({'success': True, 'quiz': quiz.to_dict(include_answers=True)}), 201


@assessments_bp.route('/quizzes', methods=['GET'])
def list_quizzes():
    quizzes = AssessmentService.list_all(QUIZ, topic=request.args.get('topic'))
    return jsonify([q.to_dict(include_answers=_show_answers()) for q in quizzes])


@assessments_bp.route('/quizzes/<int:quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    quiz = AssessmentService.get(QUIZ, quiz_id)
    return jsonify(quiz.to_dict(include_answers=_show_answers()))


@assessments_bp.route('/quizzes/<int:quiz_id>', methods=['PUT'])
@require_admin
def update_quiz(quiz_id):
    quiz = AssessmentService.update(QUIZ, quiz_id, request_json())
    return jsonify({'success': True, 'quiz': quiz.to_dict(include_answers=True)})


@assessments_bp.route('/quizzes/<int:quiz_id>/attempt', methods=['POST'])
def attempt_quiz(quiz_id):
    """
    Submit a quiz attempt
    Body: {userId, name, answers: [{questionId, questionText, selected}], durationSec}
    """
    return jsonify(SubmissionService.submit_assessment(QUIZ, quiz_id, request_json()))


@assessments_bp.route('/quizzes/<int:quiz_id>/leaderboard', methods=['GET'])
def quiz_leaderboard(quiz_id):
    AssessmentService.get(QUIZ, quiz_id)
    return jsonify(AttemptService.leaderboard_for(QUIZ, quiz_id))


# ======================= EXAMS =======================

@assessments_bp.route('/exams', methods=['POST'])
@require_admin
def create_exam():
    """Create an exam: {title, duration, questions}"""
    exam = AssessmentService.create_exam(request_json())
    return jsonify({'success': True, 'exam': exam.to_dict(include_answers=True)}), 201


@assessments_bp.route('/exams', methods=['GET'])
def list_exams():
    exams = AssessmentService.list_all(EXAM, topic=request.args.get('topic'))
    return jsonify([e.to_dict(include_answers=_show_answers()) for e in exams])


@assessments_bp.route('/exams/<int:exam_id>', methods=['GET'])
def get_exam(exam_id):
    exam = AssessmentService.get(EXAM, exam_id)
    return jsonify(exam.to_dict(include_answers=_show_answers()))


@assessments_bp.route('/exams/<int:exam_id>', methods=['PUT'])
@require_admin
def update_exam(exam_id):
    exam = AssessmentService.update(EXAM, exam_id, request_json())
    return jsonify({'success': True, 'exam': exam.to_dict(include_answers=True)})


@assessments_bp.route('/exams/<int:exam_id>/submit', methods=['POST'])
def submit_exam(exam_id):
    """Submit an exam attempt (same body as quiz attempts)"""
    return jsonify(SubmissionService.submit_assessment(EXAM, exam_id, request_json()))


@assessments_bp.route('/exams/<int:exam_id>/leaderboard', methods=['GET'])
def exam_leaderboard(exam_id):
    AssessmentService.get(EXAM, exam_id)
    return jsonify(AttemptService.leaderboard_for(EXAM, exam_id))
