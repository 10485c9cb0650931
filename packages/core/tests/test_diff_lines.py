"""Tests for unified-diff line classification."""

from commitlens_core.utils.diff import ADDITION, CONTEXT, DELETION, HUNK, DiffLine, classify_line, split_patch


class TestClassifyLine:
    def test_addition(self):
        assert classify_line("+foo") == DiffLine(ADDITION, "+", "foo")

    def test_deletion(self):
        assert classify_line("-bar") == DiffLine(DELETION, "-", "bar")

    def test_hunk_header_verbatim(self):
        assert classify_line("@@ -1,2 +1,2 @@") == DiffLine(HUNK, "", "@@ -1,2 +1,2 @@")

    def test_context_strips_leading_space(self):
        assert classify_line(" baz") == DiffLine(CONTEXT, " ", "baz")

    def test_context_keeps_indentation_after_marker(self):
        assert classify_line("     return x").content == "    return x"

    def test_empty_line_is_context(self):
        assert classify_line("") == DiffLine(CONTEXT, " ", "")

    def test_no_newline_marker_is_context(self):
        assert classify_line("\\ No newline at end of file").kind == CONTEXT


class TestSplitPatch:
    def test_splits_and_classifies(self):
        patch = "@@ -1,2 +1,2 @@\n line1\n-old\n+new\n"
        kinds = [line.kind for line in split_patch(patch)]
        assert kinds == [HUNK, CONTEXT, DELETION, ADDITION]

    def test_first_context_line_keeps_its_marker(self):
        lines = split_patch(" ctx\n+x")
        assert lines[0] == DiffLine(CONTEXT, " ", "ctx")

    def test_empty_patch(self):
        assert split_patch("") == []
        assert split_patch(None) == []
        assert split_patch("\n\n") == []
