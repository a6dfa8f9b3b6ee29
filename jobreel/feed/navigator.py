"""
Feed navigation - one active video at a time, moved by swipe or arrow keys.
"""

from typing import Callable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

# Vertical drag distance (px) before a swipe counts
SWIPE_MIN_DISTANCE = 50


class FeedNavigator(Generic[T]):
    """
    Tracks the active index of a vertical video feed.

    Moves are clamped to the ends of the feed (no wraparound). `direction`
    is +1 after moving forward and -1 after moving back; a blocked move
    leaves it as it was. Optional callbacks fire with the video that
    stops and starts being active.
    """

    def __init__(
        self,
        videos: Optional[Sequence[T]] = None,
        on_activate: Optional[Callable[[T], None]] = None,
        on_deactivate: Optional[Callable[[T], None]] = None,
    ):
        self.videos: List[T] = list(videos or [])
        self.current_index = 0
        self.direction = 0
        self.on_activate = on_activate
        self.on_deactivate = on_deactivate

    def __len__(self) -> int:
        return len(self.videos)

    @property
    def active_video(self) -> Optional[T]:
        if not self.videos:
            return None
        return self.videos[self.current_index]

    @property
    def has_next(self) -> bool:
        return self.current_index < len(self.videos) - 1

    @property
    def has_previous(self) -> bool:
        return self.current_index > 0

    def is_active(self, index: int) -> bool:
        return bool(self.videos) and index == self.current_index

    def next(self) -> bool:
        if not self.has_next:
            return False
        self._move(1)
        return True

    def previous(self) -> bool:
        if not self.has_previous:
            return False
        self._move(-1)
        return True

    def swipe(self, delta_y: float) -> bool:
        """Swipe up (negative delta) shows the next video, swipe down the previous."""
        if delta_y < -SWIPE_MIN_DISTANCE:
            return self.next()
        if delta_y > SWIPE_MIN_DISTANCE:
            return self.previous()
        return False

    def handle_key(self, key: str) -> bool:
        if key == "ArrowUp":
            return self.previous()
        if key == "ArrowDown":
            return self.next()
        return False

    def preload_window(self) -> List[T]:
        """Previous, current and next videos - the ones worth buffering."""
        if not self.videos:
            return []
        start = max(0, self.current_index - 1)
        return self.videos[start:self.current_index + 2]

    def replace_videos(self, videos: Sequence[T]) -> None:
        """Swap in a refreshed feed, keeping the index inside it."""
        previous = self.active_video
        self.videos = list(videos)
        self.current_index = min(self.current_index, max(len(self.videos) - 1, 0))
        current = self.active_video
        if current is not previous:
            self._notify(previous, current)

    def _move(self, step: int) -> None:
        previous = self.active_video
        self.current_index += step
        self.direction = step
        self._notify(previous, self.active_video)

    def _notify(self, previous: Optional[T], current: Optional[T]) -> None:
        if previous is not None and self.on_deactivate:
            self.on_deactivate(previous)
        if current is not None and self.on_activate:
            self.on_activate(current)
