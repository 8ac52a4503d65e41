"""Tests for version reporting."""

from importlib import metadata

from lam import version
from lam.errors import LAMUserError


class TestToolVersion:

    def test_installed_distribution(self, monkeypatch):
        seen = []

        def fake_version(dist):
            seen.append(dist)
            return "1.2.3"

        monkeypatch.setattr(version.metadata, "version", fake_version)

        assert version.tool_version() == "1.2.3"
        assert seen == ["legal-automator"]

    def test_source_checkout(self, monkeypatch):
        def missing(dist):
            raise metadata.PackageNotFoundError(dist)

        monkeypatch.setattr(version.metadata, "version", missing)

        assert version.tool_version() == "0.0.0"


class TestUserErrors:

    def test_exit_code(self):
        assert LAMUserError("bad").exit_code == 2
