"""
Services Package
"""
from medicohub.services.scoring_service import ScoringService
from medicohub.services.attempt_service import AttemptService
from medicohub.services.leaderboard_service import LeaderboardService
from medicohub.services.assessment_service import AssessmentService
from medicohub.services.group_service import GroupService
from medicohub.services.competition_service import CompetitionService
from medicohub.services.submission_service import SubmissionService

__all__ = [
    'ScoringService', 'AttemptService', 'LeaderboardService', 'AssessmentService',
    'GroupService', 'CompetitionService', 'SubmissionService'
]
