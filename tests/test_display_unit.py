from util.display import display_width, pad_display, trim_display, wrap_display


def test_display_width_counts_wide_chars():
    assert display_width("abc") == 3
    assert display_width("日本") == 4


def test_trim_display():
    assert trim_display("日本語", 4) == "日本"
    assert trim_display("abc", 10) == "abc"


def test_pad_display_alignments():
    assert pad_display("ab", 4) == "ab  "
    assert pad_display("ab", 4, "right") == "  ab"
    assert pad_display("ab", 5, "center") == " ab  "


def test_wrap_on_words():
    assert wrap_display("buy milk and eggs", 9) == ["buy milk", "and eggs"]


def test_wrap_keeps_newlines():
    assert wrap_display("a\n\nb", 10) == ["a", "", "b"]


def test_wrap_splits_long_words():
    assert wrap_display("abcdefgh", 3) == ["abc", "def", "gh"]
