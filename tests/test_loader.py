"""Tests for script discovery."""

from pathlib import Path

import pytest

from alsf.actions.loader import discover_scripts, find_icon, is_script, script_kind
from alsf.actions.models import ActionKind
from alsf.icons import ICON_TAB, ICON_URL


class TestIsScript:
    """Tests for script detection."""

    @pytest.mark.parametrize("name", ["a.scpt", "a.js", "a.applescript", "a.sh", "a.ZSH"])
    def test_script_extensions(self, tmp_path, write_script, name):
        assert is_script(write_script(tmp_path / name))

    def test_plain_file_is_not_script(self, tmp_path, write_script):
        assert not is_script(write_script(tmp_path / "notes.txt"))

    def test_executable_file_is_script(self, tmp_path, write_script):
        assert is_script(write_script(tmp_path / "do-it", "#!/bin/sh\n", executable=True))


class TestScriptKind:
    """Tests for deciding a script's class from its location."""

    def test_parent_directory(self, tmp_path):
        root = tmp_path / "scripts"
        assert script_kind(root / "tab" / "x.js", root) == ActionKind.TAB
        assert script_kind(root / "url" / "x.js", root) == ActionKind.URL

    def test_falls_back_to_root(self, tmp_path):
        root = tmp_path / "url"
        assert script_kind(root / "misc" / "x.js", root) == ActionKind.URL

    def test_unknown(self, tmp_path):
        root = tmp_path / "scripts"
        assert script_kind(root / "x.js", root) is None


class TestFindIcon:
    """Tests for script icons."""

    def test_sibling_image(self, tmp_path, write_script):
        script = write_script(tmp_path / "Open in Chrome.scpt")
        icon = write_script(tmp_path / "Open in Chrome.png")

        assert find_icon(script, ActionKind.URL) == str(icon)

    def test_default_icon_for_class(self, tmp_path, write_script):
        script = write_script(tmp_path / "Copy URL.js")

        assert find_icon(script, ActionKind.TAB) == ICON_TAB
        assert find_icon(script, ActionKind.URL) == ICON_URL


class TestDiscoverScripts:
    """Tests for discover_scripts."""

    def test_discovers_tab_and_url_scripts(self, tmp_path, write_script):
        root = tmp_path / "scripts"
        write_script(root / "tab" / "Copy URL.js")
        write_script(root / "url" / "Open in Firefox.scpt")
        write_script(root / "url" / "Open in Chrome.sh")

        actions = discover_scripts(root)

        by_title = {a.title: a for a in actions}
        assert set(by_title) == {"Copy URL", "Open in Firefox", "Open in Chrome"}
        assert by_title["Copy URL"].kind == ActionKind.TAB
        assert by_title["Open in Firefox"].kind == ActionKind.URL
        assert by_title["Open in Chrome"].script_path == root / "url" / "Open in Chrome.sh"
        assert all(not a.is_builtin for a in actions)

    def test_skips_non_scripts(self, tmp_path, write_script):
        root = tmp_path / "tab"
        write_script(root / "README.txt")
        write_script(root / "Copy URL.png")
        write_script(root / "Copy URL.js")

        assert [a.title for a in discover_scripts(root)] == ["Copy URL"]

    def test_executable_without_extension(self, tmp_path, write_script):
        root = tmp_path / "url"
        write_script(root / "archive-page", "#!/bin/sh\n", executable=True)

        actions = discover_scripts(root)

        assert [a.title for a in actions] == ["archive-page"]
        assert actions[0].kind == ActionKind.URL

    def test_skips_scripts_outside_class_directory(self, tmp_path, write_script):
        root = tmp_path / "scripts"
        write_script(root / "stray.js")

        assert discover_scripts(root) == []

    def test_script_bundle_is_single_script(self, tmp_path, write_script):
        root = tmp_path / "tab"
        write_script(root / "Save Page.scptd" / "Contents" / "Resources" / "Scripts" / "main.scpt")

        actions = discover_scripts(root)

        assert [a.title for a in actions] == ["Save Page"]
        assert actions[0].script_path == root / "Save Page.scptd"

    def test_sorted_by_name(self, tmp_path, write_script):
        root = tmp_path / "tab"
        for name in ["b.js", "c.js", "a.js"]:
            write_script(root / name)

        assert [a.title for a in discover_scripts(root)] == ["a", "b", "c"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            discover_scripts(tmp_path / "nope")


class TestBundledScripts:
    """Tests for the scripts shipped in scripts/."""

    def test_bundled_actions(self):
        root = Path(__file__).resolve().parent.parent / "scripts"

        actions = discover_scripts(root)

        tab = {a.title for a in actions if a.kind == ActionKind.TAB}
        url = {a.title for a in actions if a.kind == ActionKind.URL}
        assert tab == {"Copy URL", "Copy URL as Markdown", "Reopen in New Window"}
        assert url == {"Open in Current Tab", "Open in New Safari Window", "Open in Private Window"}
