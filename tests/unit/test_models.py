"""Tests for selectors and requests."""

import pytest

from gitsnip.core import ResolutionError, Selector, SelectorKind, SnippetRequest, ValidationError
from gitsnip.core.models import normalize_commit


class TestSelector:
    @pytest.mark.parametrize(
        "options",
        [
            {"branch": "main", "tag": "v1"},
            {"branch": "main", "commit_hash": "a" * 40},
            {"tag": "v1", "commit_hash": "a" * 40},
            {"branch": "main", "tag": "v1", "commit_hash": "a" * 40},
        ],
    )
    def test_rejects_multiple_selectors(self, options):
        with pytest.raises(ValidationError):
            Selector.from_options(**options)

    def test_no_selector_is_default_branch(self):
        selector = Selector.from_options()
        assert selector.is_default_branch
        assert selector.kind is SelectorKind.BRANCH

    def test_empty_strings_count_as_missing(self):
        assert Selector.from_options(branch="", tag="v1") == Selector.tag("v1")

    def test_each_kind(self):
        assert Selector.from_options(branch="dev") == Selector(SelectorKind.BRANCH, "dev")
        assert Selector.from_options(tag="v1").kind is SelectorKind.TAG
        assert Selector.from_options(commit_hash="f" * 40).kind is SelectorKind.COMMIT

    def test_str(self):
        assert str(Selector.default_branch()) == "default branch"
        assert str(Selector.tag("v1")) == "tag v1"


class TestNormalizeCommit:
    def test_lowercases(self):
        assert normalize_commit("ABCDEF" + "0" * 34) == "abcdef" + "0" * 34

    def test_accepts_sha256(self):
        assert normalize_commit("1" * 64) == "1" * 64

    @pytest.mark.parametrize("sha", ["abc123", "g" * 40, "a" * 41, ""])
    def test_rejects_malformed(self, sha):
        with pytest.raises(ResolutionError) as exc_info:
            normalize_commit(sha)
        assert exc_info.value.selector == Selector.commit(sha)


class TestSnippetRequest:
    def test_requires_url_and_path(self):
        with pytest.raises(ValidationError):
            SnippetRequest(git_url="", path="a.txt", selector=Selector.default_branch())
        with pytest.raises(ValidationError):
            SnippetRequest(git_url="u", path="", selector=Selector.default_branch())

    @pytest.mark.parametrize("path", ["/etc/passwd", "../secret", "src/../../x"])
    def test_rejects_paths_outside_repository(self, path):
        with pytest.raises(ValidationError):
            SnippetRequest(git_url="u", path=path, selector=Selector.default_branch())
