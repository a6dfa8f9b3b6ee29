"""
Video playback state - drives one media element through loading,
autoplay, errors and bounded recovery.

The element itself is injected (anything implementing MediaElement), as
is the scheduler used for delayed reloads, so the state machine runs the
same against a browser bridge or a test double.
"""

import logging
import math
import threading
from enum import Enum, IntEnum
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

MP4 = "video/mp4"
WEBM = "video/webm"
HLS = "application/x-mpegURL"

NETWORK_RETRY_DELAY = 2.0
DEFAULT_MAX_RETRIES = 2


class PlaybackState(str, Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    playing = "playing"
    paused = "paused"
    error = "error"
    retrying = "retrying"


class MediaErrorCode(IntEnum):
    aborted = 1
    network = 2
    decode = 3
    src_not_supported = 4


ERROR_MESSAGES = {
    MediaErrorCode.aborted: "The video loading was aborted",
    MediaErrorCode.network: "Network error while loading the video",
    MediaErrorCode.decode: "Video decoding failed - trying alternate format",
    MediaErrorCode.src_not_supported: "Video not found or access denied",
}
DEFAULT_ERROR_MESSAGE = "An error occurred while loading the video"
INTERACTION_REQUIRED_MESSAGE = "Playback failed - please interact with the video to play"
UNSUPPORTED_MESSAGE = "Playback failed - video format may not be supported"


class PlaybackRejected(Exception):
    """Raised by MediaElement.play(). `name` follows DOM exception names."""

    def __init__(self, name: str = "NotAllowedError", message: str = ""):
        self.name = name
        super().__init__(message or name)


class MediaElement(Protocol):
    muted: bool

    def load(self, src: str, mime_type: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Any]


def _timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def source_type(src: str) -> str:
    """HLS playlists by URL, everything else is tried as mp4 first."""
    return HLS if "m3u8" in src.lower() else MP4


def format_duration(seconds: Optional[float]) -> str:
    """Seconds as MM:SS. Missing, NaN or negative input gives 00:00."""
    if not seconds or math.isnan(seconds) or seconds < 0:
        return "00:00"
    minutes = int(seconds // 60)
    remaining = int(seconds % 60)
    return f"{minutes:02d}:{remaining:02d}"


class VideoPlayback:
    """
    Playback state for a single feed video.

    idle -> loading -> ready -> playing <-> paused
    Any load failure goes to retrying while a reload is under way, or to
    error once retries are spent. From error only tap() recovers.

    Videos start muted, browsers only allow muted autoplay reliably.
    """

    def __init__(
        self,
        src: str,
        media: MediaElement,
        scheduler: Optional[Scheduler] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = NETWORK_RETRY_DELAY,
    ):
        self.src = src
        self.media = media
        self.scheduler = scheduler or _timer
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self.state = PlaybackState.idle
        self.error: Optional[str] = None
        self.retries = 0
        self.duration = 0.0
        self.current_time = 0.0
        self.visible = False
        self._play_when_ready = False

        self.media.muted = True

    # ---------------- derived ----------------

    @property
    def muted(self) -> bool:
        return self.media.muted

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.playing

    @property
    def progress(self) -> float:
        """Percent watched, 0..100."""
        if not self.duration:
            return 0.0
        return min(100.0, self.current_time / self.duration * 100)

    # ---------------- media lifecycle ----------------

    def mount(self) -> None:
        if self.state != PlaybackState.idle:
            return
        self._load(source_type(self.src))

    def metadata_loaded(self, duration: float) -> None:
        if self.state not in (PlaybackState.loading, PlaybackState.retrying):
            return
        self.duration = duration
        self.state = PlaybackState.ready
        self.error = None
        if self.visible or self._play_when_ready:
            self._play_when_ready = False
            self._attempt_play()

    def time_update(self, current_time: float) -> None:
        self.current_time = current_time

    def fail(self, code: int) -> None:
        """Media error event. Network and decode errors retry a bounded number of times."""
        self.error = ERROR_MESSAGES.get(code, DEFAULT_ERROR_MESSAGE)
        logger.warning("Video error %s on %s: %s", code, self.src, self.error)

        if self.retries < self.max_retries and code == MediaErrorCode.network:
            self.retries += 1
            self.state = PlaybackState.retrying
            self.scheduler(self.retry_delay, self._reload)
        elif self.retries < self.max_retries and code == MediaErrorCode.decode:
            self.retries += 1
            self.state = PlaybackState.retrying
            self.media.load(self.src, WEBM)
        else:
            self.state = PlaybackState.error

    # ---------------- visibility ----------------

    def activate(self) -> None:
        """The video scrolled into view: autoplay if it is loaded."""
        self.visible = True
        if self.state in (PlaybackState.ready, PlaybackState.paused):
            self._attempt_play()

    def deactivate(self) -> None:
        self.visible = False
        if self.state == PlaybackState.playing:
            self.media.pause()
            self.state = PlaybackState.paused

    # ---------------- user input ----------------

    def tap(self) -> None:
        """Toggle mute, or start over after an error."""
        if self.state == PlaybackState.error:
            self.error = None
            self.retries = 0
            self._play_when_ready = True
            self._load(source_type(self.src))
        else:
            self.media.muted = not self.media.muted

    def toggle_play(self) -> None:
        if self.state == PlaybackState.playing:
            self.media.pause()
            self.state = PlaybackState.paused
        elif self.state in (PlaybackState.ready, PlaybackState.paused):
            self._attempt_play()

    def seek_to_percent(self, percent: float) -> None:
        if not self.duration:
            return
        percent = max(0.0, min(100.0, percent))
        self.current_time = percent / 100 * self.duration
        self.media.seek(self.current_time)

    def replay(self) -> None:
        if self.state not in (PlaybackState.ready, PlaybackState.playing, PlaybackState.paused):
            return
        self.current_time = 0.0
        self.media.seek(0)
        self._attempt_play()

    # ---------------- internals ----------------

    def _load(self, mime_type: str) -> None:
        self.state = PlaybackState.loading
        self.media.load(self.src, mime_type)

    def _reload(self) -> None:
        # A tap may have already restarted loading
        if self.state == PlaybackState.retrying:
            self.media.load(self.src, MP4)

    def _attempt_play(self) -> None:
        try:
            self.media.play()
        except PlaybackRejected as e:
            logger.warning("Playback failed: %s", e)
            if e.name != "NotAllowedError":
                self._enter_error(UNSUPPORTED_MESSAGE)
                return
            # Autoplay policy: retry muted
            self.media.muted = True
            try:
                self.media.play()
            except PlaybackRejected:
                self._enter_error(INTERACTION_REQUIRED_MESSAGE)
                return
        self.state = PlaybackState.playing
        self.error = None

    def _enter_error(self, message: str) -> None:
        self.state = PlaybackState.error
        self.error = message
