import io

import pytest
from rich.console import Console

from ask_stream.exceptions import StatusLineClosedError
from ask_stream.ui.status_line import CLEAR_LINE, StatusLine, StatusLineState

CLEAR = CLEAR_LINE.segment.text


def visible_text(raw: str) -> str:
    """What the bottom line shows: everything after the last line clear/newline."""
    tail = raw.rsplit(CLEAR, 1)[-1]
    return tail.rsplit("\n", 1)[-1]


def test_clear_sequence_is_carriage_return_and_erase():
    assert CLEAR == "\r\x1b[0K"


def test_set_text_renders_in_place(console, output):
    line = StatusLine(console)
    line.set_text("Connecting...")
    assert output() == "Connecting..."
    assert line.visible
    assert line.state is StatusLineState.ACTIVE
    assert line.text == "Connecting..."


def test_set_text_erases_previous_render(console, output):
    line = StatusLine(console)
    line.set_text("a much longer status")
    line.set_text("short")
    assert output() == "a much longer status" + CLEAR + "short"
    assert visible_text(output()) == "short"
    assert "\n" not in output()


def test_start_is_first_render(console, output):
    line = StatusLine(console)
    line.start("Generating...")
    assert output() == "Generating..."


def test_status_text_is_not_markup(console, output):
    line = StatusLine(console)
    line.set_text("[bold]literal[/bold]")
    assert output() == "[bold]literal[/bold]"


def test_stop_clears_line(console, output):
    line = StatusLine(console)
    line.set_text("working")
    line.stop()
    assert output() == "working" + CLEAR
    assert not line.visible
    assert line.state is StatusLineState.STOPPED


def test_stop_twice_same_as_once(console, output):
    line = StatusLine(console)
    line.set_text("working")
    line.stop()
    after_once = output()
    line.stop()
    assert output() == after_once
    assert line.state is StatusLineState.STOPPED


def test_stop_when_idle_writes_nothing(console, output):
    StatusLine(console).stop()
    assert output() == ""


def test_set_text_after_stop_reactivates(console, output):
    line = StatusLine(console)
    line.set_text("one")
    line.stop()
    line.set_text("two")
    assert line.state is StatusLineState.ACTIVE
    assert visible_text(output()) == "two"


def test_succeed_writes_permanent_line(console, output):
    line = StatusLine(console)
    line.set_text("Generated 2 words...")
    line.succeed("Response completed!")
    assert output() == "Generated 2 words..." + CLEAR + "✔ Response completed!\n"
    assert line.state is StatusLineState.SUCCEEDED
    assert not line.visible


def test_fail_writes_permanent_line(console, output):
    line = StatusLine(console)
    line.set_text("working")
    line.fail("Failed [quota]")
    assert output().endswith(CLEAR + "✖ Failed [quota]\n")
    assert line.state is StatusLineState.FAILED


@pytest.mark.parametrize("finish", ["succeed", "fail"])
def test_terminal_states_are_irreversible(console, output, finish):
    line = StatusLine(console)
    line.set_text("working")
    getattr(line, finish)("done")
    before = output()

    with pytest.raises(StatusLineClosedError):
        line.set_text("again")
    with pytest.raises(StatusLineClosedError):
        line.succeed("again")
    with pytest.raises(StatusLineClosedError):
        line.fail("again")
    line.stop()

    assert output() == before
    assert line.closed


def test_at_most_one_render_visible(console, output):
    line = StatusLine(console)
    for text in ["first", "second render", "3rd"]:
        line.set_text(text)
        # Only the latest render follows the last erase
        assert visible_text(output()) == text
        assert line.visible
    line.clear()
    assert visible_text(output()) == ""
    assert not line.visible
    assert line.state is StatusLineState.ACTIVE


def test_plain_mode_skips_in_place_renders(console, output):
    line = StatusLine(console, plain=True)
    line.set_text("working")
    line.stop()
    line.set_text("again")
    assert output() == ""
    line.succeed("done")
    assert output() == "✔ done\n"


def test_non_terminal_console_skips_in_place_renders():
    buffer = io.StringIO()
    piped = Console(file=buffer, force_terminal=False, color_system=None)
    line = StatusLine(piped)
    line.set_text("working")
    line.fail("nope")
    assert not line.live
    assert buffer.getvalue() == "✖ nope\n"


def test_long_text_is_cropped_to_terminal_width(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    narrow = Console(file=io.StringIO(), force_terminal=True, color_system=None, width=20)
    line = StatusLine(narrow)
    for words, chars in [(1, 5), (123, 4567), (12345, 987654)]:
        line.set_text(f"Generated {words} words, {chars} characters...")
        raw = narrow.file.getvalue()
        assert "\n" not in raw
        assert 0 < len(visible_text(raw)) <= 20
    assert visible_text(narrow.file.getvalue()).endswith("…")


@pytest.mark.parametrize("finish, mark", [("succeed", "✔"), ("fail", "✖")])
def test_final_line_keeps_emoji_codes_literal(console, output, finish, mark):
    line = StatusLine(console)
    getattr(line, finish)("Got :thumbs_up: back")
    assert output() == f"{mark} Got :thumbs_up: back\n"
