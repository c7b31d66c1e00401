import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from landing_builder.editor import EditSequence, InlineContentEditor
from landing_builder.editor.inline_editor import (
    BLUR_GRACE,
    DEBOUNCE_DELAY,
    PROCESSING_WINDOW,
    flatten_paste,
    inserted_text,
    is_likely_emoji_insert,
)

LONG_TEXT = "Build landing pages in minutes"


@pytest.fixture
def on_change():
    return MagicMock(return_value=None)


"""
1. Input
"""

@pytest.mark.asyncio
async def test_emoji_insert_commits_quickly(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)

    editor.handle_input(LONG_TEXT + "\U0001F600", cursor=len(LONG_TEXT) + 1)
    await asyncio.sleep(0.02)

    on_change.assert_called_once_with("headline", LONG_TEXT + "\U0001F600")
    assert editor.sequence.last_event == "input-emoji"
    assert editor.cursor == len(LONG_TEXT) + 1
    await editor.close()


@pytest.mark.asyncio
async def test_typing_is_debounced_into_one_commit(on_change):
    editor = InlineContentEditor("subheadline", on_change, initial_text="Old subheadline text")

    editor.handle_input("New subheadline")
    await asyncio.sleep(0.05)
    editor.handle_input("New subheadline text here")
    await asyncio.sleep(0.05)

    on_change.assert_not_called()
    assert editor.has_pending

    await asyncio.sleep(DEBOUNCE_DELAY + 0.05)

    on_change.assert_called_once_with("subheadline", "New subheadline text here")
    assert editor.sequence.last_event == "input-text"
    await editor.close()


@pytest.mark.asyncio
async def test_keystrokes_commit_once_after_the_last(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)
    letters = "abcdefghijklmnopqrst"

    for i in range(1, len(letters) + 1):
        editor.handle_input(letters[:i], cursor=i)
        await asyncio.sleep(0.03)

    on_change.assert_not_called()
    await asyncio.sleep(DEBOUNCE_DELAY + 0.05)

    on_change.assert_called_once_with("headline", letters)
    assert editor.sequence.last_event == "input-text"
    await editor.close()


@pytest.mark.asyncio
async def test_plain_character_appended_is_debounced(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)

    editor.handle_input(LONG_TEXT + "!")
    await asyncio.sleep(0.05)

    on_change.assert_not_called()
    await asyncio.sleep(DEBOUNCE_DELAY)
    on_change.assert_called_once_with("headline", LONG_TEXT + "!")
    await editor.close()


@pytest.mark.asyncio
async def test_input_during_processing_is_committed_afterwards(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)

    assert editor.commit("a", "blur") is True
    editor.handle_input("ab", cursor=2)
    assert editor.text == "ab"

    await asyncio.sleep(DEBOUNCE_DELAY + PROCESSING_WINDOW + 0.1)

    assert [c.args for c in on_change.call_args_list] == [("headline", "a"), ("headline", "ab")]
    assert editor.last_content == "ab"
    await editor.close()


@pytest.mark.asyncio
async def test_debounce_firing_inside_processing_window_is_retried(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)
    editor.handle_input("Draft headline")

    await asyncio.sleep(DEBOUNCE_DELAY - 0.05)
    assert editor.commit("Blurred headline", "blur") is True
    await asyncio.sleep(PROCESSING_WINDOW + 0.15)

    assert on_change.call_count == 2
    on_change.assert_called_with("headline", "Draft headline")
    await editor.close()


@pytest.mark.asyncio
async def test_first_text_sets_baseline_without_commit(on_change):
    editor = InlineContentEditor("headline", on_change)

    assert editor.commit("Hello", "blur") is False
    assert editor.last_content == "Hello"
    on_change.assert_not_called()

    assert editor.commit("Hello", "blur") is False
    assert editor.commit("Hello there", "blur") is True
    on_change.assert_called_once_with("headline", "Hello there")
    await editor.close()


"""
2. Blur
"""

@pytest.mark.asyncio
async def test_blur_right_after_input_commit_is_ignored(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)
    editor.sequence.last_input_at = asyncio.get_running_loop().time()

    assert editor.handle_blur("Something else entirely") is False
    on_change.assert_not_called()
    await editor.close()


@pytest.mark.asyncio
async def test_blur_without_recent_input_commits(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)

    assert editor.handle_blur("Something else entirely") is True
    on_change.assert_called_once_with("headline", "Something else entirely")
    assert editor.sequence.last_input_at is None
    await editor.close()


@pytest.mark.asyncio
async def test_blur_after_grace_period_commits(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text=LONG_TEXT)
    editor.sequence.last_input_at = asyncio.get_running_loop().time() - (BLUR_GRACE + 0.1)

    assert editor.handle_blur("Another headline") is True
    await editor.close()


"""
3. Paste
"""

@pytest.mark.asyncio
async def test_paste_flattens_and_moves_cursor_to_end(on_change):
    editor = InlineContentEditor("description", on_change, initial_text="Before")

    assert editor.handle_paste("<b>Bold</b> and <i>italic</i>") is True

    on_change.assert_called_once_with("description", "Bold and italic")
    assert editor.text == "Bold and italic"
    assert editor.cursor == len("Bold and italic")
    await editor.close()


@pytest.mark.asyncio
async def test_paste_cancels_pending_debounce(on_change):
    editor = InlineContentEditor("description", on_change, initial_text="Some earlier text")
    editor.handle_input("Typing something long")

    editor.handle_paste("Pasted")
    await asyncio.sleep(DEBOUNCE_DELAY + 0.05)

    on_change.assert_called_once_with("description", "Pasted")
    await editor.close()


"""
4. Processing window and lifecycle
"""

@pytest.mark.asyncio
async def test_commits_are_suppressed_while_processing(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text="First headline")

    assert editor.commit("Second headline", "blur") is True
    assert editor.is_processing
    assert editor.commit("Third headline", "blur") is False

    await asyncio.sleep(PROCESSING_WINDOW + 0.05)

    assert not editor.is_processing
    assert editor.commit("Third headline", "blur") is True
    assert on_change.call_count == 2
    await editor.close()


@pytest.mark.asyncio
async def test_async_on_change_is_awaited_on_close():
    on_change = AsyncMock()
    editor = InlineContentEditor("headline", on_change, initial_text="First headline")

    editor.commit("Second headline", "blur")
    await editor.close()

    on_change.assert_awaited_once_with("headline", "Second headline")


@pytest.mark.asyncio
async def test_close_cancels_pending_commits(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text="Old subheadline text")
    editor.handle_input("A much longer replacement text")

    await editor.close()
    await asyncio.sleep(DEBOUNCE_DELAY + 0.05)

    on_change.assert_not_called()
    assert not editor.has_pending


@pytest.mark.asyncio
async def test_restore_cursor_clamps(on_change):
    editor = InlineContentEditor("headline", on_change, initial_text="Hello")

    assert editor.restore_cursor(99) == 5
    assert editor.restore_cursor(-3) == 0
    assert editor.restore_cursor(None) == 5
    await editor.close()


@pytest.mark.asyncio
async def test_editors_keep_separate_sequences(on_change):
    first = InlineContentEditor("headline", on_change, initial_text="First headline")
    second = InlineContentEditor("subheadline", on_change, initial_text="First subheadline")

    first.commit("Changed headline", "input-text")

    assert first.sequence.last_input_at is not None
    assert second.sequence.last_input_at is None
    assert second.handle_blur("Changed subheadline") is True
    await first.close()
    await second.close()


"""
5. Helpers
"""

def test_edit_sequence_records_only_input_times():
    sequence = EditSequence()
    sequence.record("blur", 5.0)
    assert sequence.since_last_input(6.0) == float("inf")

    sequence.record("input-text", 5.0)
    assert sequence.since_last_input(5.25) == pytest.approx(0.25)
    assert sequence.commits == 2


def test_inserted_text():
    assert inserted_text("Hello big world", "Hello world") == "big "
    assert inserted_text("Hello world!", "Hello world") == "!"
    assert inserted_text("ab", "a") == "b"
    assert inserted_text("same", "same") == ""


def test_is_likely_emoji_insert():
    assert is_likely_emoji_insert("Hello world \U0001F600", "Hello world ")
    assert is_likely_emoji_insert("Hi \u2764\ufe0f there", "Hi  there")
    assert is_likely_emoji_insert("\U0001F44D\U0001F3FD", "")
    assert not is_likely_emoji_insert("Hello world!", "Hello world")
    assert not is_likely_emoji_insert("a", "")
    assert not is_likely_emoji_insert("Hello", "Hello \U0001F600")
    assert not is_likely_emoji_insert("café", "caf")


def test_flatten_paste():
    assert flatten_paste("<p>One</p>\n<p>Two</p>") == "One Two"
    assert flatten_paste(None) == ""
