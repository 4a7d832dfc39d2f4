"""
Interactive text menu for the article store.

The dispatcher is a small finite-state machine: each state has a handler
that performs its prompts and returns the next state. Every state leads back
to the main menu except EXITING, which ends the session.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Callable

from .articles import (
    ArticleError,
    ArticleStore,
    NotFoundError,
    format_article,
    format_header,
    split_codes,
)
from .validation import is_in_range, is_integer, is_numeric

logger = logging.getLogger(__name__)

MAIN_MENU_TEXT = """
--- Article Management ---
  1 - create article
  2 - list articles
  3 - update article
  4 - search article
  5 - delete article
  0 - quit"""

SEARCH_MENU_TEXT = """\
  1 - search by id
  2 - search by name
  3 - search by price
  4 - search by ean/code
  0 - cancel"""

SELECT_PROMPT = "select > "

MSG_NUMBERS_ONLY = "❌ Invalid input: only numbers allowed."
MSG_MAIN_RANGE = "❌ Invalid input: only numbers between 0 and 5 allowed."
MSG_SEARCH_RANGE = "❌ Invalid input: only numbers 0 - 4 allowed."
MSG_DUPLICATE_ID = "❌ Invalid input: ID already exists."


class State(enum.Enum):
    MAIN_MENU = "main_menu"
    CREATING = "creating"
    LISTING = "listing"
    UPDATING = "updating"
    SEARCHING = "searching"
    DELETING = "deleting"
    EXITING = "exiting"


MAIN_MENU_CHOICES = {
    0: State.EXITING,
    1: State.CREATING,
    2: State.LISTING,
    3: State.UPDATING,
    4: State.SEARCHING,
    5: State.DELETING,
}

# Search sub-menu: selection -> (store field, value prompt)
SEARCH_CHOICES = {
    1: ("id", "ID:"),
    2: ("name", "NAME:"),
    3: ("price", "PRICE:"),
    4: ("code", "EAN:"),
}


def _not_found_message(article_id: str) -> str:
    return f"❌ Invalid input: article with ID {article_id} does not exist."


class MenuDispatcher:
    """Drive the article menus on stdin/stdout until the user quits."""

    def __init__(self, store: ArticleStore):
        self.store = store
        self.state = State.MAIN_MENU
        self._handlers: dict[State, Callable[[], State]] = {
            State.MAIN_MENU: self.main_menu,
            State.CREATING: self.create_article,
            State.LISTING: self.list_articles,
            State.UPDATING: self.update_article,
            State.SEARCHING: self.search_articles,
            State.DELETING: self.delete_article,
        }

    def _read(self, prompt: str = "") -> str:
        return input(prompt).strip()

    def run(self) -> int:
        """Run the menu loop. Returns the process exit code (always 0)."""
        self.state = State.MAIN_MENU
        while self.state is not State.EXITING:
            self.state = self.step()
        return 0

    def step(self) -> State:
        """Run the handler for the current state and return the next state."""
        handler = self._handlers[self.state]
        try:
            next_state = handler()
        except EOFError:
            logger.debug("End of input in state %s, exiting", self.state.value)
            return State.EXITING
        if next_state is not self.state:
            logger.debug("State %s -> %s", self.state.value, next_state.value)
        return next_state

    def print_articles(self, articles) -> None:
        print(format_header())
        for article in articles:
            print(format_article(article))

    def main_menu(self) -> State:
        print(MAIN_MENU_TEXT)
        selection = self._read(SELECT_PROMPT)
        if not is_integer(selection):
            print(MSG_NUMBERS_ONLY)
            return State.MAIN_MENU
        choice = int(selection)
        if not is_in_range(choice, range(0, 6)):
            print(MSG_MAIN_RANGE)
            return State.MAIN_MENU
        return MAIN_MENU_CHOICES[choice]

    def read_price(self, allow_empty: bool = False) -> str:
        """Prompt until a numeric price is typed (or an empty line, if allowed)."""
        while True:
            value = self._read("PRICE:")
            if allow_empty and not value:
                return value
            if is_numeric(value):
                return value
            print(MSG_NUMBERS_ONLY)

    def create_article(self) -> State:
        print("---- create article ----")
        article_id = self._read("ID:")
        if article_id in self.store:
            print(MSG_DUPLICATE_ID)
            return State.MAIN_MENU
        name = self._read("NAME:")
        price = self.read_price()
        codes = split_codes(self._read("EANS:"))
        try:
            self.store.create(article_id, name, price, codes)
        except ArticleError as e:
            print(f"❌ {e}")
        return State.MAIN_MENU

    def list_articles(self) -> State:
        print("---- list articles ----")
        self.print_articles(self.store.list_articles())
        return State.MAIN_MENU

    def update_article(self) -> State:
        print("---- update article ----")
        article_id = self._read("ID:")
        if article_id not in self.store:
            print(_not_found_message(article_id))
            return State.MAIN_MENU
        name = self._read("NAME:")
        price = self.read_price(allow_empty=True)
        codes = self._read("EANS:")
        try:
            self.store.update(article_id, name=name, price=price, codes=codes)
        except ArticleError as e:
            print(f"❌ {e}")
        return State.MAIN_MENU

    def search_articles(self) -> State:
        print("---- search article ----")
        print(SEARCH_MENU_TEXT)
        selection = self._read(SELECT_PROMPT)
        if not is_integer(selection) or not is_in_range(int(selection), range(0, 5)):
            print(MSG_SEARCH_RANGE)
            return State.MAIN_MENU
        choice = int(selection)
        if choice == 0:
            return State.MAIN_MENU

        field_name, prompt = SEARCH_CHOICES[choice]
        value = self._read(prompt)
        if field_name == "price" and not is_numeric(value):
            print(MSG_NUMBERS_ONLY)
            return State.MAIN_MENU

        try:
            matches = list(self.store.find_by(field_name, value))
        except ArticleError as e:
            print(f"❌ {e}")
            return State.MAIN_MENU
        if matches:
            self.print_articles(matches)
        return State.MAIN_MENU

    def delete_article(self) -> State:
        print("---- delete article ----")
        article_id = self._read("ID:")
        try:
            self.store.delete(article_id)
        except NotFoundError:
            print(_not_found_message(article_id))
        return State.MAIN_MENU
