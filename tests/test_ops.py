"""
Tests for engine/ops.py: input reading, conversion, delivery hand-off.
"""

import io

import pytest

from tskpaste.engine.ops import InputError, convert_text, paste, read_input


EXAMPLE = (
    "Write presentation !Friday #work\n"
    "Research Mother's Day gifts @1w !(5/12/2019) --Flowers are boring\n"
    "Asparagus #shopping\n"
    "#personal\n"
    "@2d\n"
)

EXPECTED = (
    "- Write presentation @tags(work,personal) @defer(2d) @due(Friday) \n"
    "- Research Mother's Day gifts @tags(personal) @defer(1w) @due(5/12/2019) \n"
    "\tFlowers are boring\n"
    "- Asparagus @tags(shopping,personal) @defer(2d) \n"
)


class TestReadInput:
    def test_reads_file(self, tmp_path):
        p = tmp_path / "tasks.txt"
        p.write_text("a\nb\n", encoding="utf-8")
        assert read_input(p) == "a\nb\n"

    @pytest.mark.parametrize("source", [None, "-"])
    def test_reads_stdin(self, source):
        assert read_input(source, stdin=io.StringIO("x #y")) == "x #y"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError) as exc:
            read_input(tmp_path / "nope.txt")
        assert "does not exist" in str(exc.value)

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(InputError) as exc:
            read_input(tmp_path)
        assert exc.value.message == "Path is not a file"


class TestConvert:
    def test_example_end_to_end(self):
        assert convert_text(EXAMPLE) == EXPECTED

    def test_empty(self):
        assert convert_text("") == ""
        assert convert_text("  \n\n") == ""

    def test_no_directives_one_block_per_line(self):
        text = "a #x\nb @1d\n\nc !2d --note\n"
        out = convert_text(text)
        blocks = [ln for ln in out.splitlines() if ln.startswith("- ")]
        assert len(blocks) == 3


class TestPaste:
    def test_delivers_converted_text_once(self, fake_deliverer):
        assert paste(EXAMPLE, fake_deliverer) is True
        assert fake_deliverer.calls == [EXPECTED]

    def test_empty_document_still_delivers(self, fake_deliverer):
        assert paste("", fake_deliverer) is True
        assert fake_deliverer.calls == [""]

    def test_failure_is_reported(self, failing_deliverer):
        assert paste(EXAMPLE, failing_deliverer) is False
        assert len(failing_deliverer.calls) == 1
