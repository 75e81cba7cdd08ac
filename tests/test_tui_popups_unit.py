import pytest
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from interface.tui_popups import Choice, ConfirmPopup, LineInputPopup, Popup

TAB = KeyPress(Keys.Tab, "\t")
ESC = KeyPress(Keys.Escape, "\x1b")
BACKSPACE = KeyPress(Keys.Backspace, "\x7f")


def _char(ch):
    return KeyPress(ch, ch)


def test_first_key_only_makes_popup_visible():
    """The first key only shows the popup."""
    popup = ConfirmPopup()
    popup.process_input("toggle-selection", TAB)
    assert popup.visible
    assert popup.choice is Choice.NO


def test_confirm_toggles_between_yes_and_no():
    """Toggle-selection flips the answer, other keys do not."""
    popup = ConfirmPopup()
    popup.set_question("Sure?")
    popup.process_input("save-request", _char("s"))
    popup.process_input("toggle-selection", TAB)
    assert popup.accepted()
    popup.process_input("toggle-selection", TAB)
    assert not popup.accepted()
    popup.process_input("quit", _char("q"))
    assert popup.choice is Choice.NO


def test_confirm_close_resets_everything():
    """Closing resets visibility, choice and question."""
    popup = ConfirmPopup()
    popup.set_question("Sure?")
    popup.process_input(None, _char("x"))
    popup.process_input("toggle-selection", TAB)
    popup.close()
    assert (popup.visible, popup.choice, popup.question) == (False, Choice.NO, "")


def test_line_input_collects_printable_keys():
    """Printable keys append, backspace removes one."""
    popup = LineInputPopup()
    popup.process_input("insert", _char("i"))
    for ch in "Home":
        popup.process_input(None, _char(ch))
    popup.process_input(None, KeyPress(Keys.Up))
    assert popup.value == "Home"
    popup.process_input("backspace", BACKSPACE)
    assert popup.value == "Hom"


def test_line_input_treats_bound_letters_as_text_once_visible():
    """Bound letters are text once the line input is open."""
    popup = LineInputPopup()
    popup.process_input("insert", _char("i"))
    popup.process_input("insert", _char("i"))
    popup.process_input("quit", _char("q"))
    assert popup.value == "iq"


def test_line_input_backspace_on_empty_and_escape():
    """Backspace on empty is harmless; escape closes and clears."""
    popup = LineInputPopup()
    popup.process_input("insert", _char("i"))
    popup.process_input("backspace", BACKSPACE)
    assert popup.value == ""
    popup.process_input(None, _char("x"))
    popup.process_input("back", ESC)
    assert not popup.visible
    assert popup.value == ""


def test_popup_base_cannot_be_instantiated():
    """Popup only defines the show-on-first-key protocol."""
    with pytest.raises(TypeError):
        Popup()
