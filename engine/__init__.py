"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Recorder, compare
"""

from engine.scheduler import PollingScheduler, AsyncioScheduler
from engine.playback  import PlaybackController, PlaybackState, SPEED_PRESETS, DEFAULT_SPEED_MS, MIN_SPEED_MS, MODE_FACTORS
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare, step_to_dict, stats_to_dict

__all__ = [
    "PollingScheduler",
    "AsyncioScheduler",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "DEFAULT_SPEED_MS",
    "MIN_SPEED_MS",
    "MODE_FACTORS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "step_to_dict",
    "stats_to_dict",
]
