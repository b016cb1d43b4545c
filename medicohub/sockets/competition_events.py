"""
Socket.IO Event Handlers
Live competition standings and XP leaderboard pushes
"""
import logging

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from medicohub.extensions import socketio
from medicohub.errors import MedicoHubError

logger = logging.getLogger(__name__)


def competition_room(competition_id):
    return f'competition_{competition_id}'


def register_socket_events():
    """Register all Socket.IO event handlers"""

    @socketio.on('join_competition')
    def join_competition(data):
        """Client follows a competition's standings"""
        from medicohub.services.competition_service import CompetitionService

        competition_id = (data or {}).get('competition_id')
        try:
            board = CompetitionService.leaderboard_for(int(competition_id))
        except (TypeError, ValueError, MedicoHubError) as e:
            emit('competition_error', {'error': str(e) or 'Invalid competition_id'})
            return

        join_room(competition_room(competition_id))
        logger.info('Socket %s joined %s', request.sid, competition_room(competition_id))
        emit('competition_leaderboard', {
            'competition_id': int(competition_id),
            'leaderboard': board,
        })

    @socketio.on('leave_competition')
    def leave_competition(data):
        competition_id = (data or {}).get('competition_id')
        leave_room(competition_room(competition_id))
        logger.info('Socket %s left %s', request.sid, competition_room(competition_id))


def emit_competition_leaderboard(competition_id):
    """Push standings to everyone following the competition"""
    from medicohub.services.competition_service import CompetitionService

    try:
        socketio.emit('competition_leaderboard', {
            'competition_id': competition_id,
            'leaderboard': CompetitionService.leaderboard_for(competition_id),
        }, to=competition_room(competition_id))
    except Exception as e:
        logger.warning('Failed to emit standings for competition %s: %s', competition_id, e)


def emit_xp_leaderboard():
    """Push the top of the XP leaderboard to all clients"""
    from medicohub.services.leaderboard_service import LeaderboardService

    try:
        socketio.emit('xp_leaderboard', {
            'leaderboard': LeaderboardService.top_n(current_app.config['XP_LEADERBOARD_DEFAULT']),
        })
    except Exception as e:
        logger.warning('Failed to emit XP leaderboard: %s', e)
