"""
Shared fixtures: config, recording collaborators and captured warnings.
"""

from dataclasses import replace

import pytest
from loguru import logger

from syncseed.rhythm_core.config_loader import load_config


class RecordingScoreDisplay:
    def __init__(self):
        self.scores = []

    def update(self, score):
        self.scores.append(score)


class RecordingLeaderboard:
    def __init__(self):
        self.submissions = []

    def submit(self, player_name, score):
        self.submissions.append((player_name, score))


class RecordingUi:
    def __init__(self):
        self.calls = []

    def show_leaderboard(self):
        self.calls.append("leaderboard")

    def show_start_menu(self):
        self.calls.append("start_menu")


class RecordingFeedback:
    def __init__(self):
        self.hit_sounds = 0
        self.haptic_pulses = 0

    def play_hit_sound(self):
        self.hit_sounds += 1

    def trigger_haptic_pulse(self):
        self.haptic_pulses += 1


class Recorder:
    """Subscriber that records every emission as a tuple of its arguments."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def make_config(config):
    """Build a variant of the default config by replacing whole sections' fields."""
    def _make(**sections):
        result = config
        for section_name, overrides in sections.items():
            section = getattr(result, section_name)
            result = replace(result, **{section_name: replace(section, **overrides)})
        return result
    return _make


@pytest.fixture
def score_display():
    return RecordingScoreDisplay()


@pytest.fixture
def leaderboard():
    return RecordingLeaderboard()


@pytest.fixture
def ui():
    return RecordingUi()


@pytest.fixture
def feedback():
    return RecordingFeedback()


@pytest.fixture
def recorder():
    return Recorder


@pytest.fixture
def warnings_log():
    """Collect loguru messages at WARNING and above."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
