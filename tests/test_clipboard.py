import pyperclip

from regionsnap.utils import clipboard
from regionsnap.utils.clipboard import copy_to_clipboard


def test_copies_text(monkeypatch):
    copied = []
    monkeypatch.setattr(clipboard.pyperclip, "copy", copied.append)
    assert copy_to_clipboard("/tmp/a.png") is True
    assert copied == ["/tmp/a.png"]


def test_empty_text_is_not_copied(monkeypatch):
    copied = []
    monkeypatch.setattr(clipboard.pyperclip, "copy", copied.append)
    assert copy_to_clipboard("") is False
    assert copied == []


def test_missing_clipboard_mechanism_is_reported(monkeypatch):
    def broken(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(clipboard.pyperclip, "copy", broken)
    assert copy_to_clipboard("x") is False
