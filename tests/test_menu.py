"""Tests for the interactive menu dispatcher."""
from unittest.mock import patch

import pytest

from article_manager import articles, menu
from article_manager.articles import Article, ArticleStore
from article_manager.menu import MenuDispatcher, State


@pytest.fixture
def demo_store():
    store = ArticleStore()
    articles.seed_demo_data(store)
    return store


def run_session(store, answers):
    """Run a full menu session with scripted input lines."""
    with patch('builtins.input', side_effect=answers):
        return MenuDispatcher(store).run()


def run_state(store, state, answers):
    """Run a single state handler with scripted input lines."""
    dispatcher = MenuDispatcher(store)
    dispatcher.state = state
    with patch('builtins.input', side_effect=answers):
        return dispatcher.step()


class TestMainMenu:
    """Tests for main menu selection."""

    @pytest.mark.parametrize("selection,expected", [
        ("0", State.EXITING),
        ("1", State.CREATING),
        ("2", State.LISTING),
        ("3", State.UPDATING),
        ("4", State.SEARCHING),
        ("5", State.DELETING),
        (" 2 ", State.LISTING),
    ])
    def test_valid_selection(self, demo_store, selection, expected):
        assert run_state(demo_store, State.MAIN_MENU, [selection]) is expected

    def test_non_integer_stays_in_main_menu(self, demo_store, capsys):
        assert run_state(demo_store, State.MAIN_MENU, ["abc"]) is State.MAIN_MENU
        assert menu.MSG_NUMBERS_ONLY in capsys.readouterr().out

    def test_out_of_range_names_real_range(self, demo_store, capsys):
        assert run_state(demo_store, State.MAIN_MENU, ["6"]) is State.MAIN_MENU
        assert run_state(demo_store, State.MAIN_MENU, ["-1"]) is State.MAIN_MENU
        out = capsys.readouterr().out
        assert "between 0 and 5" in out
        assert "0 and 4" not in out

    def test_menu_text_printed(self, demo_store, capsys):
        run_state(demo_store, State.MAIN_MENU, ["0"])
        out = capsys.readouterr().out
        assert "1 - create article" in out
        assert "0 - quit" in out


class TestRun:
    """Tests for the full session loop."""

    def test_quit_returns_zero(self, demo_store):
        assert run_session(demo_store, ["0"]) == 0

    def test_invalid_input_then_quit(self, demo_store):
        assert run_session(demo_store, ["x", "9", "", "0"]) == 0

    def test_end_of_input_exits(self, demo_store):
        assert run_session(demo_store, ["2", EOFError()]) == 0

    def test_delete_then_list(self, demo_store, capsys):
        """Test deleting the middle demo article leaves 1001 and 1003."""
        run_session(demo_store, ["5", "1002", "2", "0"])

        lines = capsys.readouterr().out.splitlines()
        header_index = lines.index(articles.format_header())
        rows = lines[header_index + 1:header_index + 3]
        assert rows == [
            articles.format_article(demo_store.get("1001")),
            articles.format_article(demo_store.get("1003")),
        ]
        assert "1002" not in demo_store


class TestCreating:
    """Tests for the create flow."""

    def test_create_article(self):
        store = ArticleStore()
        assert run_state(store, State.CREATING, ["2000", "Kiwi", "0.79", "111,222"]) is State.MAIN_MENU
        assert store.get("2000") == Article("2000", "Kiwi", 0.79, ("111", "222"))

    def test_price_reprompts_until_numeric(self, capsys):
        store = ArticleStore()
        run_state(store, State.CREATING, ["2000", "Kiwi", "abc", "", "1.5", "9"])

        assert store.get("2000").price == 1.5
        assert capsys.readouterr().out.count(menu.MSG_NUMBERS_ONLY) == 2

    def test_empty_codes_line_gives_one_empty_code(self):
        store = ArticleStore()
        run_state(store, State.CREATING, ["2000", "", "1", ""])
        assert store.get("2000").codes == ("",)

    def test_duplicate_id_aborts(self, demo_store, capsys):
        assert run_state(demo_store, State.CREATING, ["1001"]) is State.MAIN_MENU
        assert menu.MSG_DUPLICATE_ID in capsys.readouterr().out
        assert demo_store.get("1001").name == "Apfel grün"


class TestUpdating:
    """Tests for the update flow."""

    def test_blank_name_and_codes_keep_values(self, demo_store):
        run_state(demo_store, State.UPDATING, ["1003", "", "4.49", ""])
        assert demo_store.get("1003") == Article("1003", "Banane", 4.49, ("7890123456789",))

    def test_blank_price_keeps_price(self, demo_store):
        run_state(demo_store, State.UPDATING, ["1001", "Apfel", "", "42"])
        assert demo_store.get("1001") == Article("1001", "Apfel", 1.99, ("42",))

    def test_invalid_price_reprompts_price_only(self, demo_store, capsys):
        run_state(demo_store, State.UPDATING, ["1002", "Rot", "zwei", "2.5", ""])

        assert demo_store.get("1002").price == 2.5
        assert demo_store.get("1002").name == "Rot"
        assert menu.MSG_NUMBERS_ONLY in capsys.readouterr().out

    def test_unknown_id_aborts(self, demo_store, capsys):
        assert run_state(demo_store, State.UPDATING, ["4711"]) is State.MAIN_MENU
        assert "article with ID 4711 does not exist" in capsys.readouterr().out


class TestSearching:
    """Tests for the search flow."""

    def test_cancel(self, demo_store, capsys):
        assert run_state(demo_store, State.SEARCHING, ["0"]) is State.MAIN_MENU
        assert articles.format_header() not in capsys.readouterr().out

    @pytest.mark.parametrize("selection", ["5", "x", "-1"])
    def test_invalid_selection(self, demo_store, capsys, selection):
        assert run_state(demo_store, State.SEARCHING, [selection]) is State.MAIN_MENU
        assert menu.MSG_SEARCH_RANGE in capsys.readouterr().out

    def test_search_by_price(self, demo_store, capsys):
        run_state(demo_store, State.SEARCHING, ["3", "2.99"])

        out = capsys.readouterr().out
        assert articles.format_header() in out
        assert articles.format_article(demo_store.get("1002")) in out
        assert "1001" not in out

    def test_search_by_name(self, demo_store, capsys):
        run_state(demo_store, State.SEARCHING, ["2", "Banane"])
        assert articles.format_article(demo_store.get("1003")) in capsys.readouterr().out

    def test_search_by_code(self, demo_store, capsys):
        run_state(demo_store, State.SEARCHING, ["4", "3456789012340"])
        assert articles.format_article(demo_store.get("1002")) in capsys.readouterr().out

    def test_search_by_id(self, demo_store, capsys):
        run_state(demo_store, State.SEARCHING, ["1", "1001"])
        assert articles.format_article(demo_store.get("1001")) in capsys.readouterr().out

    def test_no_match_prints_nothing(self, demo_store, capsys):
        run_state(demo_store, State.SEARCHING, ["2", "Kiwi"])
        out = capsys.readouterr().out
        assert articles.format_header() not in out

    def test_non_numeric_price(self, demo_store, capsys):
        assert run_state(demo_store, State.SEARCHING, ["3", "cheap"]) is State.MAIN_MENU
        out = capsys.readouterr().out
        assert menu.MSG_NUMBERS_ONLY in out
        assert articles.format_header() not in out


class TestDeleting:
    """Tests for the delete flow."""

    def test_delete(self, demo_store):
        run_state(demo_store, State.DELETING, ["1001"])
        assert "1001" not in demo_store
        assert len(demo_store) == 2

    def test_unknown_id(self, demo_store, capsys):
        run_state(demo_store, State.DELETING, ["1"])
        assert "article with ID 1 does not exist" in capsys.readouterr().out
        assert len(demo_store) == 3


class TestListing:
    """Tests for the list flow."""

    def test_empty_store_prints_header(self, capsys):
        run_state(ArticleStore(), State.LISTING, [])
        assert articles.format_header() in capsys.readouterr().out
