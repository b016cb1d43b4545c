"""
Models Package
Exports all database models
"""
from medicohub.models.user import User
from medicohub.models.assessment import Assessment, Quiz, Exam
from medicohub.models.question import Question
from medicohub.models.attempt import Attempt
from medicohub.models.group import Group
from medicohub.models.competition import Competition, CompetitionResult, CompetitionParticipant
from medicohub.models.leaderboard import LeaderboardEntry

__all__ = [
    'User', 'Assessment', 'Quiz', 'Exam', 'Question', 'Attempt', 'Group',
    'Competition', 'CompetitionResult', 'CompetitionParticipant', 'LeaderboardEntry'
]
