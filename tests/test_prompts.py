"""
Tests for the console prompt helpers.
"""

import pytest


def test_ask_int_retries_until_in_range(make_console):
    console = make_console(["abc", "0", "2"])
    assert console.ask_int("Enter choice: ", 1, 3) == 2
    assert "Invalid input. Please enter a whole number." in console.output
    assert "Invalid input. Please enter a number between 1 and 3." in console.output


def test_ask_optional_blank_means_keep(make_console):
    console = make_console(["   ", " Town Hall "])
    assert console.ask_optional("Location: ") is None
    assert console.ask_optional("Location: ") == "Town Hall"


def test_ask_yes_no(make_console):
    console = make_console(["maybe", "Y"])
    assert console.ask_yes_no("Are you sure?") is True
    assert "Are you sure? (y/n): " in console.output


def test_menu_returns_chosen_index(make_console):
    console = make_console(["2"])
    assert console.menu("EventDesk", ["Login", "Register", "Exit"]) == 2
    assert console.output[:4] == ["\n=== EventDesk ===", "1. Login", "2. Register", "3. Exit"]


def test_end_of_input_propagates(make_console):
    with pytest.raises(EOFError):
        make_console([]).ask_text("Username: ")
