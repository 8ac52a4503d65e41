"""Tests for answer file loading."""

import datetime as dt
from pathlib import Path

import pytest

from lam.answers import AnswerFileError, load_answers, parse_answers_text
from lam.values import BoolValue, DateValue, NumberValue, RowListValue, TextValue
from tests.infrastructure.file_utils import write


class TestParseAnswersText:

    def test_yaml_document(self):
        answers = parse_answers_text(
            "client_name: Alice Smith\n"
            "is_company: true\n"
            "shares: 100\n"
            "settlement_date: 2025-07-27\n"
            "directors:\n"
            "  - director_name: Bob\n"
            "  - director_name: Carol\n"
        )

        assert answers == {
            "client_name": TextValue("Alice Smith"),
            "is_company": BoolValue(True),
            "shares": NumberValue(100),
            "settlement_date": DateValue(dt.date(2025, 7, 27)),
            "directors": RowListValue([
                {"director_name": TextValue("Bob")},
                {"director_name": TextValue("Carol")},
            ]),
        }

    def test_json_document(self):
        answers = parse_answers_text('{"name": "Ann", "rows": [{"x": 1.5}], "flag": false}')

        assert answers["name"] == TextValue("Ann")
        assert answers["rows"] == RowListValue([{"x": NumberValue(1.5)}])
        assert answers["flag"] == BoolValue(False)

    def test_empty_document(self):
        assert parse_answers_text("") == {}
        assert parse_answers_text("# only a comment\n") == {}

    def test_top_level_must_be_mapping(self):
        with pytest.raises(AnswerFileError):
            parse_answers_text("- a\n- b\n")

    def test_invalid_yaml(self):
        with pytest.raises(AnswerFileError) as exc:
            parse_answers_text("a: [1, 2\n")

        assert "invalid YAML" in str(exc.value)

    def test_list_of_scalars_loads_without_rows(self):
        answers = parse_answers_text("name: Ann\ntags: [a, b]\n")

        assert answers == {"name": TextValue("Ann"), "tags": RowListValue([])}


class TestLoadAnswers:

    def test_load_yaml_file(self, tmp_path: Path):
        path = write(tmp_path / "answers.yml", "name: Ann\n")

        assert load_answers(path) == {"name": TextValue("Ann")}

    def test_load_json_file(self, tmp_path: Path):
        path = write(tmp_path / "answers.json", '{"name": "Ann"}')

        assert load_answers(path) == {"name": TextValue("Ann")}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(AnswerFileError) as exc:
            load_answers(tmp_path / "nope.yaml")

        assert "file not found" in str(exc.value)

    def test_unsupported_suffix(self, tmp_path: Path):
        path = write(tmp_path / "answers.txt", "name: Ann\n")

        with pytest.raises(AnswerFileError):
            load_answers(path)
