"""Tests for ghostmail.markdown.chunk."""

from ghostmail.markdown.chunk import split_into_chunks


class TestFastPath:
    def test_short_text_single_chunk(self):
        assert split_into_chunks("short line", 4000) == ["short line"]

    def test_short_text_is_trimmed(self):
        assert split_into_chunks("  padded \n", 4000) == ["padded"]

    def test_blank_text_no_chunks(self):
        assert split_into_chunks("", 4000) == []
        assert split_into_chunks(" \n\n ", 4000) == []


class TestLineSplitting:
    def test_fifty_lines_split_in_two(self):
        lines = [f"{i:03d}" + "x" * 97 for i in range(50)]
        chunks = split_into_chunks("\n".join(lines), 4000)

        assert len(chunks) == 2
        assert chunks[0] == "\n".join(lines[:39])
        assert chunks[1] == "\n".join(lines[39:])
        assert all(len(c) <= 4000 for c in chunks)

    def test_order_preserved_and_bounded(self):
        text = "\n".join(f"line {i} " + "y" * (i % 37 + 1) for i in range(500))
        chunks = split_into_chunks(text, 300)

        assert all(0 < len(c) <= 300 for c in chunks)
        assert "\n".join(chunks).split("\n") == text.split("\n")


class TestWordSplitting:
    def test_long_line_split_on_spaces(self):
        text = " ".join(["abcd"] * 30)
        chunks = split_into_chunks(text, 20)

        assert all(len(c) <= 20 for c in chunks)
        words = [w for c in chunks for w in c.split(" ")]
        assert words == ["abcd"] * 30

    def test_long_line_between_short_lines(self):
        text = "head\n" + " ".join(["w" * 9] * 10) + "\ntail"
        chunks = split_into_chunks(text, 30)

        assert chunks[0] == "head"
        assert chunks[1:4] == [" ".join(["w" * 9] * 3)] * 3
        assert chunks[4] == "w" * 9 + "\ntail"

    def test_oversized_word_emitted_whole(self):
        chunks = split_into_chunks("aa " + "b" * 50 + " cc", 10)
        assert chunks == ["aa", "b" * 50, "cc"]

    def test_single_oversized_run_without_boundaries(self):
        chunks = split_into_chunks("a" * 4500, 4000)
        assert chunks == ["a" * 4500]

    def test_escape_pairs_never_split(self):
        text = " ".join(["a\\.b\\!"] * 200)
        for chunk in split_into_chunks(text, 50):
            trailing = len(chunk) - len(chunk.rstrip("\\"))
            assert trailing % 2 == 0
