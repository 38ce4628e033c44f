"""Tests for deriving the render URL from the request URL."""

from __future__ import annotations

from streamshell.middleware.base_path import page_url_for


class TestPageUrl:
    def test_default_base_strips_leading_slash(self) -> None:
        assert page_url_for("/about", "", "/") == "about"

    def test_keeps_query_string(self) -> None:
        assert page_url_for("/search", "q=1", "/") == "search?q=1"

    def test_custom_base(self) -> None:
        assert page_url_for("/app/docs/intro", "", "/app/") == "docs/intro"

    def test_only_first_occurrence_is_removed(self) -> None:
        assert page_url_for("/app/app/", "", "/app/") == "app/"

    def test_root(self) -> None:
        assert page_url_for("/", "", "/") == ""
