"""
Commit policy for one inline-editable text region.

The editor canvas reports raw input, blur and paste events; InlineContentEditor
decides when the text is committed through ``on_change(field, text)``:

    input  -> emoji inserted into idle text: commit after EMOJI_DELAY
              anything else: debounce, commit DEBOUNCE_DELAY after the last input
    blur   -> commit, unless an input commit happened within BLUR_GRACE
    paste  -> flatten to plain text, cursor to end, commit immediately

While a commit is processing (PROCESSING_WINDOW) blur and paste commits are
dropped; input keeps the latest text and commits it once the window closes.
Timing state lives on the editor's own EditSequence, so two editors never
interfere with each other.
"""

import asyncio
import inspect
import logging
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Optional, Set

from markupsafe import Markup

logger = logging.getLogger(__name__)

EMOJI_DELAY = 0.010
DEBOUNCE_DELAY = 0.300
BLUR_GRACE = 0.200
PROCESSING_WINDOW = 0.150
# Longest ZWJ family/flag sequence we still treat as one emoji
MAX_EMOJI_LENGTH = 8

# Symbols plus the joiners, selectors and skin-tone modifiers emoji are built from
EMOJI_CATEGORIES = {"So", "Sk", "Mn", "Cf"}


@dataclass
class EditSequence:
    """Per-editor record of the last input commit."""
    last_input_at: Optional[float] = None
    last_event: str = ""
    commits: int = 0

    def record(self, event: str, now: float) -> None:
        self.commits += 1
        self.last_event = event
        if event.startswith("input"):
            self.last_input_at = now

    def since_last_input(self, now: float) -> float:
        if self.last_input_at is None:
            return float("inf")
        return now - self.last_input_at


def flatten_paste(text: str) -> str:
    """Plain text of a paste: markup stripped, whitespace collapsed."""
    return Markup(text or "").striptags()


def inserted_text(text: str, previous: str) -> str:
    """The span of ``text`` that replaced or was added to ``previous``."""
    start = 0
    limit = min(len(text), len(previous))
    while start < limit and text[start] == previous[start]:
        start += 1
    end = 0
    while end < limit - start and text[-1 - end] == previous[-1 - end]:
        end += 1
    return text[start:len(text) - end]


def is_likely_emoji_insert(text: str, previous: str) -> bool:
    if len(text) <= len(previous):
        return False
    added = inserted_text(text, previous)
    if not added or len(added) > MAX_EMOJI_LENGTH:
        return False
    categories = {unicodedata.category(ch) for ch in added}
    return "So" in categories and categories <= EMOJI_CATEGORIES


class InlineContentEditor:
    def __init__(
        self,
        content_field: str,
        on_change: Callable[[str, str], Any],
        initial_text: str = "",
    ):
        self.content_field = content_field
        self.on_change = on_change
        self.last_content = initial_text or ""
        self.text = self.last_content
        self.cursor = len(self.text)
        self.sequence = EditSequence()

        self._processing = False
        self._debounce: Optional[asyncio.TimerHandle] = None
        self._quick: Optional[asyncio.TimerHandle] = None
        self._timers: Set[asyncio.TimerHandle] = set()
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def has_pending(self) -> bool:
        return self._debounce is not None or self._quick is not None or bool(self._timers)

    # Events

    def handle_input(self, text: str, cursor: Optional[int] = None) -> None:
        if self._closed:
            return
        text = text or ""
        previous = self.text
        self.text = text
        if cursor is not None:
            self.cursor = cursor

        # Plain typing, or anything arriving mid-burst, rides the debounce
        idle = not self._processing and self._debounce is None and self._quick is None
        if idle and is_likely_emoji_insert(text, previous):
            self._quick = asyncio.get_running_loop().call_later(EMOJI_DELAY, self._fire_quick, text, cursor)
        else:
            self._arm_debounce(text, cursor, DEBOUNCE_DELAY)

    def handle_blur(self, text: str) -> bool:
        if self._closed or self._processing:
            return False
        now = asyncio.get_running_loop().time()
        if self.sequence.since_last_input(now) <= BLUR_GRACE:
            logger.debug(f"[{self.content_field}] blur ignored, input committed {self.sequence.since_last_input(now):.3f}s ago")
            return False
        return self.commit(text, "blur")

    def handle_paste(self, text: str) -> bool:
        if self._closed or self._processing:
            return False
        self._cancel_all_timers()
        flat = flatten_paste(text)
        self.text = flat
        self.cursor = len(flat)
        return self.commit(flat, "paste")

    # Commit

    def commit(self, text: str, event: str) -> bool:
        """Send ``text`` to on_change unless it is suppressed, unchanged or the first baseline."""
        if self._processing:
            return False
        if self.last_content == "" and text:
            self.last_content = text
            return False
        if text == self.last_content:
            return False

        loop = asyncio.get_running_loop()
        self._processing = True
        self.sequence.record(event, loop.time())
        logger.debug(f"[{self.content_field}] committed ({event}): {len(text)} chars")
        self.last_content = text

        result = self.on_change(self.content_field, text)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        handle = loop.call_later(PROCESSING_WINDOW, self._end_processing)
        self._timers.add(handle)
        return True

    def restore_cursor(self, position: Optional[int]) -> int:
        if position is None:
            position = len(self.text)
        self.cursor = max(0, min(position, len(self.text)))
        return self.cursor

    async def close(self) -> None:
        """Cancel pending timers and wait for in-flight change callbacks."""
        self._closed = True
        self._cancel_all_timers()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    # Timer callbacks

    def _fire_quick(self, text: str, cursor: Optional[int]) -> None:
        self._quick = None
        if self._processing:
            self._arm_debounce(text, cursor, PROCESSING_WINDOW)
            return
        self.commit(text, "input-emoji")
        self.restore_cursor(cursor)

    def _fire_debounced(self, text: str, cursor: Optional[int]) -> None:
        self._debounce = None
        if self._processing:
            self._arm_debounce(text, cursor, PROCESSING_WINDOW)
            return
        self.commit(text, "input-text")
        self.restore_cursor(cursor)

    def _end_processing(self) -> None:
        self._processing = False
        self._drop_finished_timers()

    def _arm_debounce(self, text: str, cursor: Optional[int], delay: float) -> None:
        self._cancel_debounce()
        if self._quick is not None:
            self._quick.cancel()
            self._quick = None
        self._debounce = asyncio.get_running_loop().call_later(delay, self._fire_debounced, text, cursor)

    def _drop_finished_timers(self) -> None:
        now = asyncio.get_running_loop().time()
        self._timers = {h for h in self._timers if not h.cancelled() and h.when() > now}

    def _cancel_debounce(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    def _cancel_all_timers(self) -> None:
        self._cancel_debounce()
        if self._quick is not None:
            self._quick.cancel()
            self._quick = None
        for handle in self._timers:
            handle.cancel()
        self._timers.clear()
        self._processing = False
