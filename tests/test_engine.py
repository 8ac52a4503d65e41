"""Tests for the merge pipeline facade."""

from pathlib import Path

import pytest

from lam.engine import Engine, merge, parse_template, read_template, run_fields, run_parse, run_render
from lam.errors import LAMUserError
from lam.template.errors import UnmatchedOpenError
from lam.template.nodes import Variable
from lam.types import RunOptions
from tests.infrastructure.file_utils import document_xml, write


class TestEngine:

    def test_merge_defaults(self):
        assert merge("Hi {{name}}", {"name": "Ann"}) == "Hi Ann"

    def test_merge_via_tree(self):
        out = merge(
            "[[REPEAT FOR r]]{{v}}[[END REPEAT]]",
            {"r": [{"v": "a"}, {"v": "b"}]},
            RunOptions(via_tree=True),
        )

        assert out == "ab"

    def test_coalesce_option(self):
        markup = document_xml([["Hi {{na", "me}}"]])

        plain = Engine(RunOptions()).merge(markup, {"name": "Ann"})
        joined = Engine(RunOptions(coalesce_runs=True)).merge(markup, {"name": "Ann"})

        assert ">Hi Ann<" not in plain
        assert ">Hi Ann<" in joined

    def test_parse_template_with_coalescing(self):
        markup = document_xml([["{{client", "_name}}"]])

        elements = parse_template(markup, RunOptions(coalesce_runs=True))

        assert Variable("client_name") in elements

    @pytest.mark.parametrize("options", [
        RunOptions(),
        RunOptions(validate=False),
        RunOptions(via_tree=True),
    ])
    def test_structural_errors_in_every_mode(self, options):
        with pytest.raises(UnmatchedOpenError):
            merge("[[IF a]]", {}, options)


class TestEntryPoints:

    def test_read_template_missing(self, tmp_path: Path):
        with pytest.raises(LAMUserError):
            read_template(str(tmp_path / "missing.txt"))

    def test_run_render(self, tmpdocs: Path):
        out = run_render(str(tmpdocs / "letter.txt"), tmpdocs / "answers.yaml", RunOptions())

        assert out == "Dear Alice &amp; Co,\nURGENT\nRegards"

    def test_run_render_without_answers(self, tmpdocs: Path):
        out = run_render(str(tmpdocs / "letter.txt"), None, RunOptions())

        assert out == "Dear ,\nRegards"

    def test_run_parse(self, tmpdocs: Path):
        report = run_parse(str(tmpdocs / "letter.txt"), RunOptions())

        kinds = [e.kind for e in report.elements]
        assert kinds == ["text", "variable", "text", "conditional", "text"]
        assert report.elements[1].name == "client_name"
        assert report.elements[3].children[0].content == "URGENT\n"

    def test_run_fields(self, tmp_path: Path):
        path = write(tmp_path / "t.txt", "{{name}}[[REPEAT FOR rows]]{{is_ok}}[[END REPEAT]]")

        report = run_fields(str(path), RunOptions())

        assert [f.name for f in report.fields] == ["name", "rows"]
        assert report.fields[1].children[0].field_type == "boolean"
        assert report.defaults == {"name": "", "rows": []}
