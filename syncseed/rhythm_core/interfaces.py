"""
Collaborator Interfaces
=======================

Narrow capabilities the core calls out to. Rendering, audio, haptics,
leaderboard storage and menus implement these outside the core; the Null
variants are used when no collaborator is wired.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreDisplay(Protocol):
    def update(self, score: int) -> None: ...


@runtime_checkable
class LeaderboardSink(Protocol):
    def submit(self, player_name: str, score: int) -> None: ...


@runtime_checkable
class UiControl(Protocol):
    def show_leaderboard(self) -> None: ...

    def show_start_menu(self) -> None: ...


@runtime_checkable
class FeedbackChannel(Protocol):
    def play_hit_sound(self) -> None: ...

    def trigger_haptic_pulse(self) -> None: ...


class NullScoreDisplay:
    def update(self, score: int) -> None:
        pass


class NullLeaderboardSink:
    def submit(self, player_name: str, score: int) -> None:
        pass


class NullUiControl:
    def show_leaderboard(self) -> None:
        pass

    def show_start_menu(self) -> None:
        pass


class NullFeedbackChannel:
    def play_hit_sound(self) -> None:
        pass

    def trigger_haptic_pulse(self) -> None:
        pass
