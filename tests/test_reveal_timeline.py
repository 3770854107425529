"""Tests for reveal frame arithmetic."""

import pytest

from slide_reveal.reveal.timeline import (
    deposit_frame_for,
    fade_progress,
    has_deposited,
    last_deposit_frame,
    masked_text,
    rain_char_indices,
    start_offset_for,
    total_frames,
)


def test_start_offsets_rotate_through_table():
    assert [start_offset_for(i) for i in range(5)] == [50, 100, 75, 50, 100]


def test_deposit_frames_for_hello():
    offsets = [start_offset_for(i) for i in range(5)]
    assert [deposit_frame_for(offset) for offset in offsets] == [1, 3, 2, 1, 3]
    assert last_deposit_frame(offsets) == 3
    assert total_frames(offsets) == 10


def test_single_character_frame_count():
    assert total_frames([50]) == 8


def test_empty_drop_set_uses_first_table_offset():
    assert last_deposit_frame([]) == deposit_frame_for(50) == 1
    assert total_frames([]) == 8


def test_has_deposited_matches_deposit_frame():
    for offset in (50, 75, 100):
        deposit = deposit_frame_for(offset)
        assert not has_deposited(offset, deposit - 1)
        assert has_deposited(offset, deposit)
        assert has_deposited(offset, deposit + 10)


@pytest.mark.parametrize(
    "elapsed, steps, expected",
    [(0, 4, 0.0), (1, 4, 0.25), (4, 4, 1.0), (9, 4, 1.0), (-2, 4, 0.0)],
)
def test_fade_progress_is_clamped(elapsed, steps, expected):
    assert fade_progress(elapsed, steps) == expected


def test_rain_char_indices_skip_spaces():
    assert rain_char_indices("Hi there") == [0, 1, 3, 4, 5, 6, 7]
    assert rain_char_indices("   ") == []


def test_masked_text_keeps_length():
    assert masked_text("Hi there") == "        "
    assert masked_text("Hi there", [0, 4]) == "H   h   "
    assert len(masked_text("Hello", [1, 2, 3])) == 5
