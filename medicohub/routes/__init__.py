"""
Routes Package
Exports all route blueprints
"""
from medicohub.routes.assessments import assessments_bp
from medicohub.routes.competitions import competitions_bp
from medicohub.routes.leaderboard import leaderboard_bp
from medicohub.routes.admin import admin_bp

__all__ = ['assessments_bp', 'competitions_bp', 'leaderboard_bp', 'admin_bp']
