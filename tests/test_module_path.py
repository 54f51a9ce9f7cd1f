"""Tests for module path validation and proxy escaping."""

import pytest

from common.errors import DecodeFailure
from versioning.module_path import check_path, escape_path


class TestEscapePath:
    """Uppercase letters are encoded for case-insensitive proxies."""

    def test_lowercase_path_unchanged(self):
        assert escape_path("github.com/foo/bar") == "github.com/foo/bar"

    def test_uppercase_letters_escaped(self):
        assert escape_path("github.com/Azure/azure-sdk-for-go") == "github.com/!azure/azure-sdk-for-go"
        assert escape_path("github.com/BurntSushi/toml") == "github.com/!burnt!sushi/toml"


class TestCheckPath:
    """Malformed module paths are rejected before any request."""

    @pytest.mark.parametrize(
        "path",
        [
            "",
            "/github.com/foo",
            "github.com/foo/",
            "github.com//foo",
            "localhost/foo",
            "GitHub.com/foo",
            "-bad.com/foo",
            "github.com/foo/.bar",
            "github.com/foo/bar.",
            "github.com/foo bar",
            "github.com/foo!bar",
        ],
    )
    def test_rejects_malformed(self, path):
        with pytest.raises(DecodeFailure):
            check_path(path)

    @pytest.mark.parametrize(
        "path",
        ["github.com/foo/bar", "golang.org/x/tools/gopls", "gopkg.in/yaml.v3", "example.com/a~b/c+d"],
    )
    def test_accepts_well_formed(self, path):
        check_path(path)
