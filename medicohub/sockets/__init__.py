"""
Sockets Package
"""
from medicohub.sockets.competition_events import (
    register_socket_events,
    emit_competition_leaderboard,
    emit_xp_leaderboard
)

__all__ = ['register_socket_events', 'emit_competition_leaderboard', 'emit_xp_leaderboard']
