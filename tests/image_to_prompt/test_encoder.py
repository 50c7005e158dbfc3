"""Tests for the run-length prompt encoder."""

import logging

import numpy as np
import pytest

from imageprompt.apps.image_to_prompt.core.encoder import (
    PromptEncoder,
    build_header,
    describe_row,
    describe_run,
    encode_prompt,
    iter_runs,
)
from imageprompt.apps.image_to_prompt.core.models import Run
from imageprompt.libs.vision.grid import PixelGrid
from imageprompt.libs.vision.luma import PixelColor

B = PixelColor.BLACK
W = PixelColor.WHITE


def _grid(pattern):
    """Build a grid from strings of 'B'/'W', one string per row."""
    height = len(pattern)
    width = len(pattern[0]) if pattern else 0
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 3] = 255
    for y, row in enumerate(pattern):
        for x, ch in enumerate(row):
            if ch == "W":
                arr[y, x, :3] = 255
    return PixelGrid(arr)


def _body(prompt):
    header, _, body = prompt.partition("\n\n")
    return body


def test_single_white_pixel():
    assert encode_prompt(_grid(["W"])) == (
        "Please create an image with 1 rows and 1 columns.\n\n"
        "Line 1 only contains white pixels.\n"
    )


def test_starts_and_finally():
    assert _body(encode_prompt(_grid(["BBW"]))) == (
        "Line 1 starts with 2 black pixels, and finally 1 white pixel.\n"
    )


def test_middle_runs():
    assert _body(encode_prompt(_grid(["WBBBW"]))) == (
        "Line 1 starts with 1 white pixel, followed by 3 black pixels, "
        "and finally 1 white pixel.\n"
    )


def test_multiple_rows_are_numbered_from_one():
    prompt = encode_prompt(_grid(["WW", "BW", "BB"]))
    assert prompt == (
        "Please create an image with 3 rows and 2 columns.\n\n"
        "Line 1 only contains white pixels.\n"
        "Line 2 starts with 1 black pixel, and finally 1 white pixel.\n"
        "Line 3 only contains black pixels.\n"
    )


def test_row_numbers_ignore_grid_origin():
    arr = np.full((2, 1, 4), 255, dtype=np.uint8)
    grid = PixelGrid(arr, min_x=-4, min_y=7)
    assert _body(encode_prompt(grid)) == (
        "Line 1 only contains white pixels.\nLine 2 only contains white pixels.\n"
    )


def test_singular_wording_in_every_position():
    text = describe_row([W, B, W, W, B], line=4)
    assert text == (
        "Line 4 starts with 1 white pixel, followed by 1 black pixel, "
        "followed by 2 white pixels, and finally 1 black pixel.\n"
    )
    assert "1 white pixels" not in text
    assert "1 black pixels" not in text


def test_only_contains_wins_over_first_and_last():
    run = Run(B, 6, 0)
    assert describe_run(run, line=2, width=6) == "Line 2 only contains black pixels.\n"


def test_uniform_row_has_no_other_fragments():
    text = describe_row([W] * 9, line=1)
    assert text == "Line 1 only contains white pixels.\n"
    assert "starts" not in text and "finally" not in text


def test_header():
    assert build_header(12, 34) == "Please create an image with 12 rows and 34 columns.\n\n"


@pytest.mark.parametrize(
    "colors",
    [
        [W],
        [B, B, W],
        [W, B, B, B, W],
        [B, W, B, W, B, W],
        [W] * 5 + [B] * 7 + [W],
    ],
)
def test_runs_reconstruct_the_row(colors):
    runs = list(iter_runs(colors))
    rebuilt = [run.color for run in runs for _ in range(run.length)]
    assert rebuilt == colors
    assert sum(run.length for run in runs) == len(colors)
    assert runs[0].start == 0
    for prev, nxt in zip(runs, runs[1:]):
        assert prev.end == nxt.start
        assert prev.color != nxt.color


def test_iter_runs_of_empty_row():
    assert list(iter_runs([])) == []


def test_zero_height_grid_emits_header_only():
    grid = PixelGrid(np.zeros((0, 5, 4), dtype=np.uint8))
    assert encode_prompt(grid) == "Please create an image with 0 rows and 5 columns.\n\n"


def test_zero_width_rows_keep_one_line_per_row():
    grid = PixelGrid(np.zeros((2, 0, 4), dtype=np.uint8))
    assert encode_prompt(grid) == (
        "Please create an image with 2 rows and 0 columns.\n\n"
        "Line 1 contains no pixels.\n"
        "Line 2 contains no pixels.\n"
    )


def test_encoding_is_idempotent():
    grid = _grid(["WBWB", "BBBB", "WWBB"])
    encoder = PromptEncoder()
    assert encoder.encode(grid) == encoder.encode(grid)
    assert encode_prompt(grid) == encoder.encode(grid)


def test_run_rejects_empty_length():
    with pytest.raises(ValueError):
        Run(W, 0)


def test_encoder_logs_through_the_given_logger(caplog):
    log = logging.getLogger("tests.encoder")
    with caplog.at_level(logging.DEBUG, logger="tests.encoder"):
        PromptEncoder(log).encode(_grid(["BW"]))
    record = next(r for r in caplog.records if r.name == "tests.encoder")
    assert record.rows == 1
    assert record.columns == 2
