"""
Feed module - client-side feed behaviour, kept free of any UI toolkit.

- FeedNavigator: which video in the vertical feed is active
- VideoPlayback: load/play/error/retry state of one video element

Usage:
    from jobreel.feed import FeedNavigator, VideoPlayback
"""

from jobreel.feed.navigator import SWIPE_MIN_DISTANCE, FeedNavigator
from jobreel.feed.playback import (
    MediaElement,
    MediaErrorCode,
    PlaybackRejected,
    PlaybackState,
    VideoPlayback,
    format_duration,
    source_type,
)

__all__ = [
    "SWIPE_MIN_DISTANCE",
    "FeedNavigator",
    "MediaElement",
    "MediaErrorCode",
    "PlaybackRejected",
    "PlaybackState",
    "VideoPlayback",
    "format_duration",
    "source_type",
]
