"""
Tests for engine/render.py.
"""

import io

from tskpaste.engine.model import Task
from tskpaste.engine.parse import parse_document
from tskpaste.engine.render import render_task, render_task_detail, render_taskpaper


class TestRenderTask:
    def test_title_only(self):
        assert render_task(Task(title="Buy milk")) == "- Buy milk \n"

    def test_untitled_task_is_still_emitted(self):
        assert render_task(Task(title="", tags=("x",))) == "-  @tags(x) \n"

    def test_full_field_order(self):
        task = Task(title="T", tags=("a", "b"), defer="2d", due="fri", note="n")
        assert render_task(task) == "- T @tags(a,b) @defer(2d) @due(fri) \n\tn\n"

    def test_empty_note_adds_no_note_line(self):
        assert render_task(Task(title="T", note="")) == "- T \n"

    def test_absent_fields_are_dropped_individually(self):
        assert render_task(Task(title="T", due="fri")) == "- T @due(fri) \n"
        assert render_task(Task(title="T", defer="2d")) == "- T @defer(2d) \n"

    def test_plain_line_has_no_attributes(self):
        out = render_taskpaper(parse_document("Just a thing"))
        assert "@tags(" not in out
        assert "@defer(" not in out
        assert "@due(" not in out


class TestRenderTaskpaper:
    def test_empty(self):
        assert render_taskpaper([]) == ""

    def test_blocks_concatenate_in_order(self):
        out = render_taskpaper([Task(title="a"), Task(title="b", note="x"), Task(title="c")])
        assert out == "- a \n- b \n\tx\n- c \n"


class TestRenderTaskDetail:
    def test_listing(self):
        tasks = [
            Task(title="Asparagus", tags=("shopping", "personal"), defer="2d"),
            Task(title="", note="only a note"),
        ]
        buf = io.StringIO()
        render_task_detail(tasks, stream=buf)
        out = buf.getvalue()

        assert "1) Asparagus" in out
        assert "tags: shopping, personal" in out
        assert "defer: 2d" in out
        assert "2) (untitled)" in out
        assert "note: only a note" in out
        assert out.rstrip().endswith("2 task(s)")

    def test_empty_listing(self):
        buf = io.StringIO()
        render_task_detail([], stream=buf)
        assert "0 task(s)" in buf.getvalue()
