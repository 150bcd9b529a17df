"""Tests for the action registry."""

from pathlib import Path

import pytest

from alsf.actions.models import Action, ActionKind, BuiltinKind
from alsf.actions.registry import ActionRegistry, create_default_registry
from alsf.errors import UnknownActionError

BUILTIN_TAB_TITLES = {
    "Close Tab",
    "Close Tabs to Left",
    "Close Tabs to Right",
    "Close Other Tabs",
    "Close Window",
}


def script_action(title: str, kind: ActionKind) -> Action:
    return Action(title=title, kind=kind, script_path=Path(f"/tmp/{title}.js"))


class TestBuiltins:
    """Tests for the built-in actions."""

    def test_default_registry_has_builtins(self):
        registry = create_default_registry()

        assert {a.title for a in registry.list_tab_actions()} == BUILTIN_TAB_TITLES
        assert [a.title for a in registry.list_url_actions()] == ["Open in Default Browser"]
        assert len(registry) == 6
        assert all(a.is_builtin for a in registry)

    def test_empty_registry(self):
        registry = ActionRegistry()

        assert len(registry) == 0
        assert registry.list_tab_actions() == []


class TestRegister:
    """Tests for registration."""

    def test_classes_are_separate_namespaces(self):
        registry = ActionRegistry()
        registry.register(script_action("Share", ActionKind.TAB))
        registry.register(script_action("Share", ActionKind.URL))

        assert registry.find_tab_action("Share").kind == ActionKind.TAB
        assert registry.find_url_action("Share").kind == ActionKind.URL
        assert len(registry) == 2

    def test_titles_unique_within_class(self):
        registry = ActionRegistry()
        first = script_action("Share", ActionKind.TAB)
        second = Action(title="Share", kind=ActionKind.TAB, script_path=Path("/other/Share.sh"))
        registry.register(first)
        registry.register(second)

        assert len(registry.list_tab_actions()) == 1
        assert registry.find_tab_action("Share") is second

    def test_script_shadows_builtin(self):
        registry = create_default_registry()
        script = script_action("Close Tab", ActionKind.TAB)
        registry.register(script)

        found = registry.find_tab_action("Close Tab")
        assert found is script
        assert not found.is_builtin
        assert len(registry.list_tab_actions()) == 5


class TestFind:
    """Tests for lookup by title."""

    def test_find_with_kind(self):
        registry = create_default_registry()

        action = registry.find("Open in Default Browser", ActionKind.URL)
        assert action.builtin == BuiltinKind.OPEN_URL

    def test_find_wrong_kind(self):
        registry = create_default_registry()

        with pytest.raises(UnknownActionError, match="Unknown action: Close Tab"):
            registry.find("Close Tab", ActionKind.URL)

    def test_find_without_kind_prefers_tab(self):
        registry = ActionRegistry()
        registry.register(script_action("Share", ActionKind.URL))
        registry.register(script_action("Share", ActionKind.TAB))

        assert registry.find("Share").kind == ActionKind.TAB

    def test_find_without_kind_falls_back_to_url(self):
        registry = create_default_registry()

        assert registry.find("Open in Default Browser").kind == ActionKind.URL

    def test_find_unknown(self):
        registry = create_default_registry()

        assert registry.find_tab_action("Nope") is None
        with pytest.raises(UnknownActionError) as exc:
            registry.find("Nope")
        assert exc.value.name == "Nope"


class TestLoadScripts:
    """Tests for registering discovered scripts."""

    def test_scripts_and_builtins(self, tmp_path, write_script):
        write_script(tmp_path / "tab" / "CloseAll", "#!/bin/sh\n", executable=True)
        write_script(tmp_path / "url" / "OpenInChrome.scpt")

        registry = create_default_registry()
        registry.load_scripts([tmp_path / "tab", tmp_path / "url"])

        tab_titles = {a.title for a in registry.list_tab_actions()}
        url_titles = {a.title for a in registry.list_url_actions()}
        assert tab_titles == BUILTIN_TAB_TITLES | {"CloseAll"}
        assert url_titles == {"OpenInChrome", "Open in Default Browser"}

    def test_blacklist_hides_from_lists_only(self, tmp_path, write_script):
        write_script(tmp_path / "tab" / "CloseAll", "#!/bin/sh\n", executable=True)

        registry = create_default_registry(blacklist={"CloseAll", "Close Window"})
        registry.load_scripts([tmp_path / "tab"])

        titles = {a.title for a in registry.list_tab_actions()}
        assert "CloseAll" not in titles
        assert "Close Window" not in titles
        assert registry.find_tab_action("CloseAll") is not None
        assert registry.find_tab_action("Close Window") is not None

    def test_later_directory_wins(self, tmp_path, write_script):
        bundled = write_script(tmp_path / "bundled" / "tab" / "Copy URL.js")
        user = write_script(tmp_path / "user" / "tab" / "Copy URL.sh")

        registry = ActionRegistry()
        registry.load_scripts([tmp_path / "bundled" / "tab", tmp_path / "user" / "tab"])

        assert registry.find_tab_action("Copy URL").script_path == user
        assert registry.find_tab_action("Copy URL").script_path != bundled

    def test_missing_directory_raises_after_loading_others(self, tmp_path, write_script):
        write_script(tmp_path / "url" / "OpenInChrome.scpt")

        registry = ActionRegistry()
        with pytest.raises(FileNotFoundError):
            registry.load_scripts([tmp_path / "missing", tmp_path / "url"])

        assert registry.find_url_action("OpenInChrome") is not None
