"""Tests for tree_merger.resolver module."""

from unittest.mock import MagicMock, patch

import pytest

from tree_merger.models import Action
from tree_merger.resolver import prompt_yes_no, resolve


@pytest.fixture
def identical_pair(temp_dir):
    src = temp_dir / "src.txt"
    dst = temp_dir / "dst.txt"
    src.write_text("same content")
    dst.write_text("same content")
    return src, dst


@pytest.fixture
def different_pair(temp_dir):
    src = temp_dir / "src.txt"
    dst = temp_dir / "dst.txt"
    src.write_text("new content")
    dst.write_text("old")
    return src, dst


def never_called(prompt):
    raise AssertionError(f"unexpected prompt: {prompt}")


class TestPromptYesNo:
    """Tests for prompt_yes_no function."""

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
    def test_yes(self, answer):
        with patch("builtins.input", return_value=answer):
            assert prompt_yes_no("Overwrite? ") is True

    @pytest.mark.parametrize("answer", ["", "n", "no", "maybe"])
    def test_anything_else_is_no(self, answer):
        with patch("builtins.input", return_value=answer):
            assert prompt_yes_no("Overwrite? ") is False

    def test_eof_is_no(self):
        with patch("builtins.input", side_effect=EOFError):
            assert prompt_yes_no("Overwrite? ") is False


class TestResolveNewFile:
    """Destination does not exist."""

    def test_always_proceeds(self, temp_dir, stats, make_config):
        src = temp_dir / "src.txt"
        src.write_text("x")

        for config in (make_config(), make_config(compare_existing=True, remove_identical=True)):
            action = resolve(src, temp_dir / "dst.txt", False, config, stats, never_called)
            assert action is Action.PROCEED
        assert stats.compared == 0


class TestResolveWithComparison:
    """Destination exists and comparison is enabled."""

    def test_identical_removed(self, identical_pair, stats, make_config):
        src, dst = identical_pair
        config = make_config(compare_existing=True, remove_identical=True)

        action = resolve(src, dst, True, config, stats, never_called)

        assert action is Action.SKIP_IDENTICAL_REMOVED
        assert stats.compared == 1

    def test_identical_kept(self, identical_pair, stats, make_config):
        src, dst = identical_pair

        action = resolve(src, dst, True, make_config(compare_existing=True), stats, never_called)

        assert action is Action.SKIP_IDENTICAL

    def test_identical_never_overwritten_with_force(self, identical_pair, stats, make_config):
        src, dst = identical_pair
        config = make_config(compare_existing=True, force=True)

        action = resolve(src, dst, True, config, stats, never_called)

        assert action is Action.SKIP_IDENTICAL

    def test_identical_never_prompts(self, identical_pair, stats, make_config):
        src, dst = identical_pair
        config = make_config(compare_existing=True, interactive=True)

        assert resolve(src, dst, True, config, stats, never_called) is Action.SKIP_IDENTICAL

    def test_different_without_force_skips(self, different_pair, stats, make_config):
        src, dst = different_pair
        config = make_config(compare_existing=True, remove_identical=True)

        action = resolve(src, dst, True, config, stats, never_called)

        assert action is Action.SKIP_NO_FORCE
        assert stats.compared == 1

    def test_different_with_force_proceeds(self, different_pair, stats, make_config):
        src, dst = different_pair
        config = make_config(compare_existing=True, force=True)

        assert resolve(src, dst, True, config, stats, never_called) is Action.PROCEED

    def test_unreadable_is_error(self, temp_dir, stats, make_config, capsys):
        src = temp_dir / "src.txt"
        src.write_text("x")
        missing = temp_dir / "gone.txt"
        config = make_config(compare_existing=True, remove_identical=True, force=True)

        action = resolve(src, missing, True, config, stats, never_called)

        assert action is Action.ERROR
        assert stats.errors == 1
        assert stats.failures[0].kind == "read"
        assert capsys.readouterr().err.startswith("Error:")


class TestResolvePolicy:
    """Destination exists and comparison is disabled."""

    def test_default_skips_even_if_identical(self, identical_pair, stats, make_config):
        src, dst = identical_pair

        action = resolve(src, dst, True, make_config(), stats, never_called)

        assert action is Action.SKIP_NO_FORCE
        assert stats.compared == 0

    def test_remove_identical_needs_compare(self, identical_pair, stats, make_config):
        src, dst = identical_pair

        action = resolve(src, dst, True, make_config(remove_identical=True), stats, never_called)

        assert action is Action.SKIP_NO_FORCE

    def test_force_proceeds(self, identical_pair, stats, make_config):
        src, dst = identical_pair

        assert resolve(src, dst, True, make_config(force=True), stats, never_called) is Action.PROCEED

    def test_interactive_yes(self, different_pair, stats, make_config):
        src, dst = different_pair
        confirm = MagicMock(return_value=True)

        action = resolve(src, dst, True, make_config(interactive=True), stats, confirm)

        assert action is Action.PROCEED
        prompt = confirm.call_args[0][0]
        assert str(src) in prompt and str(dst) in prompt

    def test_interactive_no(self, different_pair, stats, make_config):
        src, dst = different_pair
        confirm = MagicMock(return_value=False)

        action = resolve(src, dst, True, make_config(interactive=True), stats, confirm)

        assert action is Action.SKIP_USER_DECLINED
        confirm.assert_called_once()

    def test_force_overrides_interactive(self, different_pair, stats, make_config):
        src, dst = different_pair
        config = make_config(interactive=True, force=True)

        assert resolve(src, dst, True, config, stats, never_called) is Action.PROCEED

    def test_interactive_after_comparison(self, different_pair, stats, make_config):
        src, dst = different_pair
        config = make_config(interactive=True, compare_existing=True)

        with patch("builtins.input", return_value="y"):
            action = resolve(src, dst, True, config, stats)

        assert action is Action.PROCEED
        assert stats.compared == 1
