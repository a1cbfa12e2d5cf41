"""
Gamification maths shared by the stores

Streaks are derived on demand from completion history rather than stored.
"""

from habitquest.gamification.streak_system import calculate_current_streak, calculate_longest_streak

__all__ = [
    "calculate_current_streak",
    "calculate_longest_streak",
]
