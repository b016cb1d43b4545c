"""
Leaderboard Routes
Global XP standings
"""
from flask import Blueprint, current_app, request, jsonify
from medicohub.errors import register_error_handlers, ValidationError
from medicohub.services import LeaderboardService

leaderboard_bp = Blueprint('leaderboard', __name__)
register_error_handlers(leaderboard_bp)


@leaderboard_bp.route('/leaderboard', methods=['GET'])
def xp_leaderboard():
    """Top users by XP (?limit=n)"""
    limit = request.args.get('limit', current_app.config['XP_LEADERBOARD_DEFAULT'], type=int)
    if limit is None or limit <= 0:
        raise ValidationError('limit must be a positive integer')
    limit = min(limit, current_app.config['XP_LEADERBOARD_MAX'])
    return jsonify(LeaderboardService.top_n(limit))
