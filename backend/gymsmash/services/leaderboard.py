"""Community leaderboard built from user stats."""
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence
from uuid import UUID

from gymsmash.models.social import UserStats

LEADERBOARD_SIZE = 50
BOARD_SIZE = 10
ANONYMOUS_NAME = "Anonymous User"


@dataclass
class LeaderboardEntry:
    user_id: UUID
    full_name: str
    points: int
    total_volume: float
    current_streak: int
    total_workouts: int


@dataclass
class Leaderboard:
    by_points: list[LeaderboardEntry] = field(default_factory=list)
    by_volume: list[LeaderboardEntry] = field(default_factory=list)
    by_streak: list[LeaderboardEntry] = field(default_factory=list)
    by_workouts: list[LeaderboardEntry] = field(default_factory=list)
    user_rank: Optional[int] = None
    user_entry: Optional[LeaderboardEntry] = None


def build_leaderboard(
    stats: Sequence[UserStats],
    names: Mapping[UUID, Optional[str]],
    user_id: Optional[UUID] = None,
) -> Leaderboard:
    """
    Rank users by points and build the category boards.

    Args:
        stats: Stats rows for all users
        names: Full names by user id; missing or empty names are anonymised
        user_id: Caller, whose rank and entry are reported

    Returns:
        Leaderboard with the caller's 1-based points rank, if present
    """
    ranked = sorted(stats, key=lambda s: s.points or 0, reverse=True)[:LEADERBOARD_SIZE]
    entries = [
        LeaderboardEntry(
            user_id=s.user_id,
            full_name=names.get(s.user_id) or ANONYMOUS_NAME,
            points=s.points or 0,
            total_volume=s.total_volume or 0,
            current_streak=s.current_streak or 0,
            total_workouts=s.total_workouts or 0,
        )
        for s in ranked
    ]

    board = Leaderboard(
        by_points=entries,
        by_volume=sorted(entries, key=lambda e: e.total_volume, reverse=True)[:BOARD_SIZE],
        by_streak=sorted(entries, key=lambda e: e.current_streak, reverse=True)[:BOARD_SIZE],
        by_workouts=sorted(entries, key=lambda e: e.total_workouts, reverse=True)[:BOARD_SIZE],
    )

    if user_id is not None:
        for position, entry in enumerate(entries):
            if entry.user_id == user_id:
                board.user_rank = position + 1
                board.user_entry = entry
                break

    return board
