"""
HabitQuest - progress and gamification state engine

Tracks XP-earning activities, daily completions, streaks, levels and
level-gated rewards, alongside todos and journal entries.
"""

__version__ = "0.1.0"
