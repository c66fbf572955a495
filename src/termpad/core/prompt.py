"""
Single-line prompt shown in the message bar.
"""

from enum import Enum

from .keys import Key, ctrl_key, is_printable


class PromptStatus(Enum):
    EDITING = 'editing'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class Prompt:
    """Collects a line of text one key at a time."""

    def __init__(self, template: str) -> None:
        self.template = template
        self.text = ""

    @property
    def message(self) -> str:
        return self.template.format(self.text)

    def feed(self, key: int) -> PromptStatus:
        """Apply one key and report whether the prompt is still open."""

        if key in (Key.DEL, Key.BACKSPACE, ctrl_key('h')):
            self.text = self.text[:-1]
            return PromptStatus.EDITING

        if key == Key.ESCAPE:
            return PromptStatus.CANCELLED

        if key == Key.ENTER:
            if self.text:
                return PromptStatus.CONFIRMED
            return PromptStatus.EDITING

        if is_printable(key):
            self.text += chr(key)

        return PromptStatus.EDITING
