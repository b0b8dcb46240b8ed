from core.commands import CommandIntent
from knowledge.help_catalog import HelpCatalog


def test_overview_lists_every_command():
    text = HelpCatalog().overview()
    assert text.startswith("Commands:")
    for keyword in ("add <title>;", "delete <index>", "edit <index>", "search <keyword>", "sync"):
        assert keyword in text
    assert "Reserved characters" in text


def test_lookup_without_topic_is_overview():
    catalog = HelpCatalog()
    assert catalog.lookup() == catalog.overview()


def test_topic_entry_lists_synonyms():
    text = HelpCatalog().lookup(CommandIntent.DELETE)
    assert text.startswith("DELETE")
    assert "Also accepted as: del, de, -, remove" in text


def test_edit_entry_lists_field_names():
    text = HelpCatalog().lookup(CommandIntent.UPDATE)
    assert text.startswith("EDIT")
    assert "NAME, TITLE, DESCRIPTION, DESC, START, END, DEADLINE" in text
    assert "update" in text


def test_display_entry_lists_kind_synonyms():
    text = HelpCatalog().lookup(CommandIntent.DISPLAY)
    assert "deadline: deadline, due" in text
    assert "timed: timedtask, timed, slot" in text


def test_single_word_commands_have_no_synonym_line():
    assert "Also accepted as" not in HelpCatalog().lookup(CommandIntent.UNDO)


def test_hotkeys_sheet():
    text = HelpCatalog().hotkeys()
    assert text.startswith("Shortcuts:")
    assert "find <keyword> search" in text
