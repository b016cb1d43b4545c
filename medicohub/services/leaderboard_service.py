"""
Leaderboard Service
Per-user XP credit and global standings
"""
import logging

from sqlalchemy.exc import IntegrityError

from medicohub.extensions import db
from medicohub.models import LeaderboardEntry
from medicohub.utils import now_utc

logger = logging.getLogger(__name__)


class LeaderboardService:
    """XP leaderboard"""

    @staticmethod
    def _increment(user_id, amount):
        """Single UPDATE so concurrent credits for one user never lose XP"""
        return LeaderboardEntry.query.filter_by(user_id=user_id).update(
            {
                LeaderboardEntry.xp: LeaderboardEntry.xp + amount,
                LeaderboardEntry.last_active: now_utc(),
            },
            synchronize_session=False
        )

    @staticmethod
    def credit_xp(user_id, display_name, amount):
        """
        Add amount to a user's XP, creating the entry on first credit

        New entries start with streak 1; the streak of existing entries is
        left untouched.
        """
        user_id = str(user_id)
        amount = max(int(amount or 0), 0)

        if not LeaderboardService._increment(user_id, amount):
            entry = LeaderboardEntry(
                user_id=user_id,
                name=display_name or 'Unknown',
                xp=amount,
                streak=1,
                last_active=now_utc(),
            )
            db.session.add(entry)
            try:
                db.session.commit()
                return entry
            except IntegrityError:
                # Another request created the entry first
                db.session.rollback()
                LeaderboardService._increment(user_id, amount)

        db.session.commit()
        return LeaderboardEntry.query.filter_by(user_id=user_id).one()

    @staticmethod
    def top_n(n):
        """Entries ordered by XP, highest first"""
        entries = LeaderboardEntry.query.order_by(
            LeaderboardEntry.xp.desc(),
            LeaderboardEntry.last_active.asc()
        ).limit(n).all()

        return [
            dict(entry.to_dict(), rank=idx)
            for idx, entry in enumerate(entries, 1)
        ]
