"""Business logic for the dashboard: profile, achievements, challenges,
classes and the leaderboard."""
from typing import Dict, List, Optional, Tuple


class GamificationService:
    """Reads and writes gamification data, delegating to the ``database``
    module's helper functions.

    All methods accept a *db* SQLAlchemy session as the first argument so
    that callers control the session lifecycle.  Writes are plain inserts:
    a rejected insert (for example a second enrollment in the same class)
    comes back as ``(False, <database message>)`` for the caller to show.
    """

    def __init__(self, db_module) -> None:
        """
        Args:
            db_module: The imported ``database`` module (or any object that
                exposes the same helper functions).
        """
        self._db = db_module

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_profile(self, db, user_id: str) -> Optional[Dict]:
        return self._db.get_profile(db, user_id)

    def get_achievements(self, db) -> List[Dict]:
        return self._db.get_achievements(db)

    def get_earned_achievements(self, db, user_id: str) -> List[Dict]:
        return self._db.get_user_achievements(db, user_id)

    def get_challenges(self, db, limit: Optional[int] = None) -> List[Dict]:
        return self._db.get_active_challenges(db, limit=limit)

    def get_classes(self, db) -> List[Dict]:
        return self._db.get_active_classes(db)

    def get_leaderboard(self, db, limit: int = 10) -> List[Dict]:
        return self._db.get_leaderboard(db, limit=limit)

    def get_dashboard(self, db, user_id: str) -> Dict:
        """Everything the dashboard page shows for *user_id* in one dict.

        Returns:
            Dict with ``profile`` (or ``None``), ``achievements``,
            ``earned``, ``challenges``, ``classes`` and ``leaderboard``.
        """
        return {
            'profile': self.get_profile(db, user_id),
            'achievements': self.get_achievements(db),
            'earned': self.get_earned_achievements(db, user_id),
            'challenges': self.get_challenges(db),
            'classes': self.get_classes(db),
            'leaderboard': self.get_leaderboard(db),
        }

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def join_challenge(self, db, user_id: str, challenge_id: str) -> Tuple[bool, str]:
        return self._db.join_challenge(db, user_id, challenge_id)

    def enroll(self, db, user_id: str, class_id: str) -> Tuple[bool, str]:
        return self._db.enroll_in_class(db, user_id, class_id)
