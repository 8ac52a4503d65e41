"""Tests for joining split WordprocessingML text runs."""

from lam.template.coalesce import coalesce, coalesce_count
from lam.template.nodes import Variable
from lam.template.parser import tokenize
from lam.template.renderer import render
from tests.infrastructure.file_utils import document_xml


class TestCoalesce:

    def test_joins_placeholder_split_by_formatting(self):
        markup = (
            "<w:p><w:r><w:t>Hello {{client_</w:t></w:r>"
            "<w:r><w:rPr><w:b/></w:rPr><w:t>name}}</w:t></w:r></w:p>"
        )

        assert coalesce(markup) == "<w:p><w:r><w:t>Hello {{client_name}}</w:t></w:r></w:p>"

    def test_attributes_and_whitespace_between_runs(self):
        markup = (
            '<w:r w:rsidR="00A1"><w:t xml:space="preserve">A </w:t></w:r>\n  '
            '<w:r w:rsidRPr="00B2"><w:rPr><w:i/><w:sz w:val="20"/></w:rPr>'
            '<w:t xml:space="preserve">B</w:t></w:r>'
        )

        assert coalesce(markup) == '<w:r w:rsidR="00A1"><w:t xml:space="preserve">A B</w:t></w:r>'

    def test_preserve_mark_carried_to_surviving_node(self):
        markup = (
            "<w:r><w:t>{{a}}</w:t></w:r>"
            '<w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve"> tail</w:t></w:r>'
        )

        assert coalesce(markup) == '<w:r><w:t xml:space="preserve">{{a}} tail</w:t></w:r>'

    def test_preserved_space_survives_empty_substitution(self):
        markup = '<w:r><w:t>{{a}}</w:t></w:r><w:r><w:t xml:space="preserve"> tail</w:t></w:r>'

        assert render(coalesce(markup), {}) == '<w:r><w:t xml:space="preserve"> tail</w:t></w:r>'

    def test_head_attributes_are_kept(self):
        markup = '<w:r><w:t w:id="1">A</w:t></w:r><w:r><w:t xml:space="preserve"> B</w:t></w:r>'

        assert coalesce(markup) == '<w:r><w:t w:id="1" xml:space="preserve">A B</w:t></w:r>'

    def test_no_preserve_mark_added_when_none_absorbed(self):
        markup = "<w:r><w:t>A</w:t></w:r><w:r><w:t>B</w:t></w:r>"

        assert coalesce(markup) == "<w:r><w:t>AB</w:t></w:r>"

    def test_counts_removed_boundaries(self):
        markup = document_xml([["[[IF ", "show", "]]x[[END IF]]"]])

        _, count = coalesce_count(markup)

        assert count == 2

    def test_paragraph_boundaries_are_kept(self):
        markup = "<w:p><w:r><w:t>A</w:t></w:r></w:p><w:p><w:r><w:t>B</w:t></w:r></w:p>"

        assert coalesce(markup) == markup

    def test_runs_with_other_content_are_kept(self):
        markup = "<w:r><w:t>A</w:t></w:r><w:r><w:tab/><w:t>B</w:t></w:r>"

        assert coalesce(markup) == markup

    def test_idempotent(self):
        markup = document_xml([["{{a", "b}}", " and ", "{{c}}"], ["x"]])
        once = coalesce(markup)

        assert coalesce(once) == once

    def test_text_without_runs_unchanged(self):
        text = "Hello {{name}} [[IF x]]y[[END IF]]"

        assert coalesce(text) == text


class TestCoalesceThenMerge:

    def test_split_variable_is_recognised_after_coalescing(self):
        markup = document_xml([["Dear {{client_", "name}},"]])

        assert Variable("client_name") not in tokenize(markup)
        assert Variable("client_name") in tokenize(coalesce(markup))

    def test_split_directives_render_after_coalescing(self):
        markup = document_xml([["[[IF ", "show]]Shown[[END", " IF]] {{na", "me}}"]])

        out = render(coalesce(markup), {"show": True, "name": "Al"})

        assert ">Shown Al<" in out
        assert "[[" not in out and "{{" not in out
