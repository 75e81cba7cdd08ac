#!/usr/bin/env python3
"""TUI data models and constants."""

from enum import Enum


class InputMode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    DELETING = "DELETING"
    SAVING = "SAVING"
    QUITTING = "QUITTING"


CONFIRM_MODES = (InputMode.DELETING, InputMode.SAVING, InputMode.QUITTING)

SAVE_QUESTION = "Are you sure that you want to save?"
QUIT_QUESTION = "Do you want to save your changes before quitting?"
DELETE_QUESTION = "Are you sure that you want to delete?"
LINE_INPUT_TITLE = "Insert value here"
SAVED_MESSAGE = "Saved"
