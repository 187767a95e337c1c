"""Tests for menutrail.menu.index — in-memory menu link tree."""

import logging

import pytest

from menutrail.errors import ConfigurationError, UnknownLink
from menutrail.menu.index import MenuLinkTree, normalize_parameters
from menutrail.menu.link import MenuLink


def _tree() -> MenuLinkTree:
    return MenuLinkTree(
        [
            MenuLink("main.news", "main", "news.list"),
            MenuLink("main.news.item", "main", "news.view", {"id": "7"}, parent="main.news"),
            MenuLink("main.news.item.comments", "main", "news.comments", parent="main.news.item"),
            MenuLink("footer.news.item", "footer", "news.view", {"id": 7}),
            MenuLink("main.news.other", "main", "news.view", {"id": "8"}, parent="main.news"),
        ]
    )


class TestRegistration:
    def test_len_and_contains(self) -> None:
        tree = _tree()
        assert len(tree) == 5
        assert "main.news" in tree
        assert "missing" not in tree

    def test_duplicate_id_raises(self) -> None:
        tree = _tree()
        with pytest.raises(ConfigurationError, match="main.news"):
            tree.add(MenuLink("main.news", "main", "other"))

    def test_get(self) -> None:
        assert _tree().get("main.news").route_name == "news.list"

    def test_get_unknown(self) -> None:
        with pytest.raises(UnknownLink) as exc_info:
            _tree().get("missing")
        assert isinstance(exc_info.value, KeyError)
        assert "missing" in str(exc_info.value)


class TestNormalizeParameters:
    def test_values_become_strings(self) -> None:
        assert normalize_parameters({"id": 7, "slug": "x"}) == {"id": "7", "slug": "x"}


class TestLoadLinksByRoute:
    def test_exact_parameters(self) -> None:
        links = _tree().load_links_by_route("news.view", {"id": "7"})
        assert list(links) == ["main.news.item", "footer.news.item"]

    def test_converted_values_match(self) -> None:
        links = _tree().load_links_by_route("news.view", {"id": 8})
        assert list(links) == ["main.news.other"]

    def test_menu_filter(self) -> None:
        links = _tree().load_links_by_route("news.view", {"id": "7"}, "footer")
        assert list(links) == ["footer.news.item"]

    def test_extra_parameter_misses(self) -> None:
        assert _tree().load_links_by_route("news.view", {"id": "7", "sort": "asc"}) == {}

    def test_empty_parameters_match_parameterless_links(self) -> None:
        assert list(_tree().load_links_by_route("news.list", {})) == ["main.news"]

    def test_none_ignores_parameters(self) -> None:
        links = _tree().load_links_by_route("news.view", None, "main")
        assert list(links) == ["main.news.item", "main.news.other"]

    def test_unknown_route(self) -> None:
        assert _tree().load_links_by_route("missing", {}) == {}

    def test_weight_orders_candidates(self) -> None:
        tree = MenuLinkTree(
            [
                MenuLink("heavy", "main", "page", weight=10),
                MenuLink("light", "main", "page", weight=-5),
                MenuLink("plain", "main", "page"),
            ]
        )
        assert list(tree.load_links_by_route("page", {})) == ["light", "plain", "heavy"]
        assert [link.id for link in tree.links_for_route("page")] == ["light", "plain", "heavy"]


class TestParentIds:
    def test_root_first(self) -> None:
        assert _tree().parent_ids("main.news.item.comments") == ("main.news", "main.news.item")

    def test_root_link_has_no_parents(self) -> None:
        assert _tree().parent_ids("main.news") == ()

    def test_unknown_link(self) -> None:
        assert _tree().parent_ids("missing") == ()

    def test_missing_parent_stops_walk(self, caplog: pytest.LogCaptureFixture) -> None:
        tree = MenuLinkTree(
            [
                MenuLink("a", "main", "a", parent="gone"),
                MenuLink("b", "main", "b", parent="a"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="menutrail.index"):
            assert tree.parent_ids("b") == ("a",)
        assert "gone" in caplog.text

    def test_cycle_stops_walk(self, caplog: pytest.LogCaptureFixture) -> None:
        tree = MenuLinkTree(
            [
                MenuLink("a", "main", "a", parent="b"),
                MenuLink("b", "main", "b", parent="a"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="menutrail.index"):
            assert tree.parent_ids("a") == ("b",)
        assert "Cycle" in caplog.text

    def test_parent_in_other_menu_stops_walk(self, caplog: pytest.LogCaptureFixture) -> None:
        tree = MenuLinkTree(
            [
                MenuLink("footer.top", "footer", "top"),
                MenuLink("main.section", "main", "section", parent="footer.top"),
                MenuLink("main.page", "main", "page", parent="main.section"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="menutrail.index"):
            assert tree.parent_ids("main.page") == ("main.section",)
        assert "another menu" in caplog.text


class TestLoadLinks:
    def test_in_given_order(self) -> None:
        links = _tree().load_links(["main.news", "main.news.item"])
        assert list(links) == ["main.news", "main.news.item"]

    def test_skips_unknown_and_root(self) -> None:
        links = _tree().load_links(["", "main.news", "missing"])
        assert list(links) == ["main.news"]
