"""
SyncSeed Package
================

Gameplay core of the SyncSeed rhythm/collection game. Rendering, AR, audio,
haptics, leaderboard storage and menus live outside this package and are
reached through the interfaces in syncseed.rhythm_core.interfaces.

All tunable parameters are in game_config.yaml.
"""
