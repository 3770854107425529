"""Tests for the matrix reveal state machine and its request batches."""

import random

import pytest

from slide_reveal.colors import BLACK, FLASH_GREEN, MATRIX_GREEN, RgbColor
from slide_reveal.constants import MATRIX_CHARS, MAX_BATCH_SIZE
from slide_reveal.dispatcher import BatchDispatcher
from slide_reveal.errors import BackendError
from slide_reveal.models import TextElementSpec
from slide_reveal.reveal import DropPhase, RevealAnimator

FINAL = RgbColor(1.0, 1.0, 1.0)


def make_animator(text: str, x: float = 50, y: float = 100, seed: int = 1) -> RevealAnimator:
    spec = TextElementSpec(text=text, x=x, y=y, w=600, h=60, size=28, bold=True, animate="matrix")
    return RevealAnimator("slide_1", "slide_1_elem_0", spec, FINAL, rng=random.Random(seed))


def main_text_inserts(batches):
    return [
        op["insertText"]["text"]
        for _, batch in batches
        for op in batch
        if "insertText" in op and op["insertText"]["objectId"] == "slide_1_elem_0"
    ]


class TestFrameSequence:
    """Frame counts, call counts and the final cleanup frame."""

    def test_hello_runs_ten_frames_in_eleven_calls(self, backend):
        animator = make_animator("Hello")

        sent = animator.run(BatchDispatcher(backend), "pres1")

        assert animator.total_frames == 10
        assert sent == 10
        assert len(backend.batches) == 11

    def test_single_character_runs_eight_frames(self, backend):
        animator = make_animator("X")

        animator.run(BatchDispatcher(backend), "pres1")

        assert animator.total_frames == 8
        assert len(backend.batches) == 9
        assert main_text_inserts(backend.batches)[-1] == "X"

    def test_all_space_text_only_creates(self, backend):
        animator = make_animator("   ")

        sent = animator.run(BatchDispatcher(backend), "pres1")

        assert sent == 0
        assert animator.total_frames == 0
        assert len(backend.batches) == 1
        assert len(backend.requests_of("createShape")) == 1
        assert backend.requests_of("insertText")[0]["text"] == "   "

    def test_one_drop_per_non_space_character(self, backend):
        animator = make_animator("Hi there")

        animator.run(BatchDispatcher(backend), "pres1")

        drop_shapes = [
            shape for shape in backend.requests_of("createShape") if "_rain_" in shape["objectId"]
        ]
        deleted = backend.requests_of("deleteObject")
        assert len(drop_shapes) == 7
        assert sorted(d["objectId"] for d in deleted) == sorted(s["objectId"] for s in drop_shapes)

    def test_drops_are_only_destroyed_on_the_final_frame(self, backend):
        make_animator("Hello").run(BatchDispatcher(backend), "pres1")

        for _, batch in backend.batches[:-1]:
            assert not any("deleteObject" in op for op in batch)
        final_deletes = [op for op in backend.batches[-1][1] if "deleteObject" in op]
        assert len(final_deletes) == 5

    def test_frames_are_never_split(self, backend):
        long_text = "abcdefghijklmnopqrstuvwxyz0123"
        animator = make_animator(long_text)

        animator.run(BatchDispatcher(backend), "pres1")

        creation_requests = 4 + 3 * len(long_text)
        creation_calls = -(-creation_requests // MAX_BATCH_SIZE)
        assert len(backend.batches) == creation_calls + animator.total_frames
        assert any(len(batch) > MAX_BATCH_SIZE for _, batch in backend.batches)


class TestMainText:
    """Character deposits into the main text element."""

    def test_main_text_length_is_invariant(self, backend):
        animator = make_animator("Hi there!")
        animator.run(BatchDispatcher(backend), "pres1")

        inserts = main_text_inserts(backend.batches)
        assert len(inserts) == 1 + animator.total_frames
        assert all(len(text) == len("Hi there!") for text in inserts)

    def test_deposits_follow_offsets_and_never_regress(self):
        animator = make_animator("Hello")
        frames = list(animator.iter_state_timeline())

        assert frames[0].text == "     "
        assert [frame.text for frame in frames[1:5]] == ["     ", "H  l ", "H ll ", "Hello"]
        for previous, current in zip(frames, frames[1:]):
            assert previous.deposited <= current.deposited

    def test_each_frame_deletes_then_reinserts_main_text(self):
        animator = make_animator("Hello")
        animator.reset()
        requests = animator.operations_for(animator.advance(0))

        assert requests[0] == {"deleteText": {"objectId": "slide_1_elem_0", "textRange": {"type": "ALL"}}}
        assert requests[1]["insertText"] == {"objectId": "slide_1_elem_0", "text": "     "}
        base = requests[2]["updateTextStyle"]
        assert base["textRange"] == {"type": "FIXED_RANGE", "startIndex": 0, "endIndex": 5}
        assert base["style"]["foregroundColor"]["opaqueColor"]["rgbColor"] == BLACK.to_api()

    def test_deposited_characters_fade_in_toward_flash_color(self):
        animator = make_animator("Hello")
        frames = {frame.index: frame for frame in animator.iter_state_timeline()}

        # 'H' deposits on frame 1 and fades in over 4 frames
        assert dict(frames[1].char_colors)[0] == BLACK
        assert dict(frames[2].char_colors)[0] == FLASH_GREEN.scaled(0.25)
        assert dict(frames[5].char_colors)[0] == FLASH_GREEN
        # 'e' (drop 1) fades over 7 frames from its deposit on frame 3
        assert dict(frames[4].char_colors)[1] == FLASH_GREEN.scaled(1 / 7)

    def test_single_character_style_ranges(self):
        animator = make_animator("Hello")
        animator.reset()
        for frame in range(3):
            state = animator.advance(frame)
        requests = animator.operations_for(state)

        ranges = [
            op["updateTextStyle"]["textRange"]
            for op in requests
            if "updateTextStyle" in op and op["updateTextStyle"]["objectId"] == "slide_1_elem_0"
        ][1:]
        assert {(r["startIndex"], r["endIndex"]) for r in ranges} == {(0, 1), (2, 3), (3, 4)}

    def test_final_frame_fades_each_character_toward_final_color(self):
        animator = make_animator("Hi you")
        final = list(animator.iter_state_timeline())[-1]

        assert final.is_final
        assert final.index == 9
        assert final.text == "Hi you"
        # Drops 1 and 4 deposit on frame 3 and fade over 7 steps
        assert dict(final.char_colors) == {
            0: FINAL,
            1: FINAL.scaled(6 / 7),
            3: FINAL,
            4: FINAL,
            5: FINAL.scaled(6 / 7),
        }

    def test_final_frame_styles_use_final_color(self):
        animator = make_animator("Hello")
        final_batch = list(animator.iter_frame_batches())[-1]

        colors = [
            op["updateTextStyle"]["style"]["foregroundColor"]["opaqueColor"]["rgbColor"]
            for op in final_batch
            if "updateTextStyle" in op
        ][1:]
        assert colors[1] == FINAL.scaled(6 / 7).to_api()
        assert colors[0] == FINAL.to_api()


class TestRainDrops:
    """Drop positions, colors and phases."""

    def test_creation_places_drops_above_their_characters(self):
        animator = make_animator("Hello", x=50, y=100)
        requests = animator.creation_operations()

        drop_shapes = [op["createShape"] for op in requests if "createShape" in op][1:]
        transforms = [shape["elementProperties"]["transform"] for shape in drop_shapes]
        char_width = 28 * 0.48
        assert [t["translateY"] for t in transforms] == [
            pytest.approx((100 - offset) * 12700) for offset in (50, 100, 75, 50, 100)
        ]
        assert transforms[2]["translateX"] == pytest.approx((50 + 7.2 + 2 * char_width) * 12700)
        sizes = {shape["elementProperties"]["size"]["width"]["magnitude"] for shape in drop_shapes}
        assert sizes == {30 * 12700}

    def test_creation_styles_blank_text_and_drops_black(self):
        requests = make_animator("Hello").creation_operations()

        inserts = [op["insertText"] for op in requests if "insertText" in op]
        assert inserts[0]["text"] == "     "
        assert all(len(i["text"]) == 1 and i["text"] in MATRIX_CHARS for i in inserts[1:])
        styles = [op["updateTextStyle"]["style"] for op in requests if "updateTextStyle" in op]
        assert all(s["foregroundColor"]["opaqueColor"]["rgbColor"] == BLACK.to_api() for s in styles)
        assert all(s["bold"] for s in styles)

    def test_drops_fall_one_step_per_frame(self):
        animator = make_animator("Hello", y=100)
        frames = list(animator.iter_state_timeline())

        first_drop_y = [frame.drops[0].y for frame in frames[:-1]]
        assert first_drop_y[:4] == [50, 75, 100, 125]

    def test_drop_color_fades_in_snaps_then_fades_out(self):
        animator = make_animator("Hello")
        frames = {frame.index: frame for frame in animator.iter_state_timeline()}

        # Drop 1: offset 100, fade-in over 3 frames, deposits on frame 3, fades out over 5
        assert frames[0].drops[1].color == FLASH_GREEN.scaled(1 / 3)
        assert frames[2].drops[1].color == FLASH_GREEN
        assert frames[3].drops[1].color == FLASH_GREEN
        assert frames[4].drops[1].color == MATRIX_GREEN.scaled(1 - 1 / 5)
        # Drop 0: deposits on frame 1, fades out over 3 frames
        assert frames[1].drops[0].color == FLASH_GREEN
        assert frames[4].drops[0].color == BLACK

    def test_drop_phases(self):
        animator = make_animator("Hello")
        phases = [frame.drops[0].phase for frame in animator.iter_state_timeline()]

        assert phases[:4] == [DropPhase.SPAWNED, DropPhase.SPAWNED, DropPhase.DEPOSITING, DropPhase.SETTLING]
        assert phases[-1] == DropPhase.REMOVED

    def test_drop_frame_requests(self):
        animator = make_animator("Hello")
        animator.reset()
        requests = animator.operations_for(animator.advance(0))

        drop_requests = [op for op in requests if _object_id(op) == "slide_1_elem_0_rain_0"]
        assert [next(iter(op)) for op in drop_requests] == [
            "deleteText",
            "insertText",
            "updateTextStyle",
            "updatePageElementTransform",
        ]
        transform = drop_requests[3]["updatePageElementTransform"]
        assert transform["applyMode"] == "ABSOLUTE"
        assert transform["transform"]["translateY"] == pytest.approx(75 * 12700)


class TestFailure:
    def test_dispatch_failure_aborts_remaining_frames(self, backend_factory):
        backend = backend_factory(fail_on_call=3)
        animator = make_animator("Hello")

        with pytest.raises(BackendError):
            animator.run(BatchDispatcher(backend), "pres1")

        assert len(backend.batches) == 3

    def test_frames_are_computed_lazily(self):
        animator = make_animator("Hello")
        animator.reset()
        batches = animator.iter_frame_batches()

        next(batches)
        assert all(drop.phase is DropPhase.SPAWNED for drop in animator.drops)
        assert animator.drops[0].y == 75

    def test_replay_starts_from_fresh_drops(self):
        animator = make_animator("Hello")
        first = list(animator.iter_frame_batches())
        second = list(animator.iter_frame_batches())

        assert len(second) == len(first) == animator.total_frames
        assert all(drop.phase is DropPhase.REMOVED for drop in animator.drops)
        first_frame_moves = [
            op["updatePageElementTransform"]["transform"]["translateY"]
            for op in second[0]
            if "updatePageElementTransform" in op
        ]
        assert len(first_frame_moves) == 5
        assert first_frame_moves[0] == pytest.approx(75 * 12700)


def _object_id(operation):
    return next(iter(operation.values())).get("objectId")
