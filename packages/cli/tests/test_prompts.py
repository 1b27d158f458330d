"""Tests for the rich prompter."""

import io

import pytest
from rich.console import Console

from monoalign_cli.prompts import RichPrompter
from monoalign_common import OperationCancelled
from monoalign_sdk import ChoiceKind, Prompter, VersionPrompt


@pytest.fixture
def answer(monkeypatch):
    """Feed lines to the prompts through stdin."""

    def _answer(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _answer


@pytest.fixture
def prompter():
    return RichPrompter(console=Console(file=io.StringIO(), width=120))


def _output(prompter: RichPrompter) -> str:
    return prompter.console.file.getvalue()


@pytest.fixture
def usage():
    return {"^1.0.0": ["a"], "^2.0.0": ["b", "c"]}


class TestSelect:
    def test_by_number(self, prompter, answer):
        answer("2\n")
        assert prompter.select("Pick", [("x", "X"), ("y", "Y")]) == "y"

    def test_default(self, prompter, answer):
        answer("\n")
        assert prompter.select("Pick", [("x", "X"), ("y", "Y")], default=2) == "y"

    def test_out_of_range_asks_again(self, prompter, answer):
        answer("7\n1\n")
        assert prompter.select("Pick", [("x", "X"), ("y", "Y")]) == "x"

    def test_nothing_to_choose(self, prompter):
        with pytest.raises(OperationCancelled):
            prompter.select("Pick", [])


class TestMultiselect:
    @pytest.mark.parametrize("text,expected", [("1,3\n", ["a", "c"]), ("all\n", ["a", "b", "c"]), (" 3 , 3\n", ["c"])])
    def test_answers(self, prompter, answer, text, expected):
        answer(text)
        assert prompter.multiselect("Pick", [("a", "A"), ("b", "B"), ("c", "C")]) == expected

    def test_invalid_then_valid(self, prompter, answer):
        answer("9\n\n2\n")
        assert prompter.multiselect("Pick", [("a", "A"), ("b", "B")]) == ["b"]
        assert "Select at least one option" in _output(prompter)

    def test_empty_options(self, prompter):
        assert prompter.multiselect("Pick", []) == []


class TestTextAndConfirm:
    def test_required_text(self, prompter, answer):
        answer("\n  react \n")
        assert prompter.text("Package") == "react"

    def test_optional_text(self, prompter, answer):
        answer("\n")
        assert prompter.text("Notes", required=False) == ""

    def test_confirm(self, prompter, answer):
        answer("y\n")
        assert prompter.confirm("Apply?") is True

    def test_confirm_default(self, prompter, answer):
        answer("\n")
        assert prompter.confirm("Apply?", default=False) is False

    def test_end_of_input_cancels(self, prompter, answer):
        answer("")
        with pytest.raises(OperationCancelled):
            prompter.confirm("Apply?")


class TestChooseVersion:
    """Version prompts offered to the resolution engine"""

    def test_is_a_prompter(self, prompter):
        assert isinstance(prompter, Prompter)

    def test_use_version(self, prompter, answer, usage):
        answer("2\n")
        choice = prompter.choose_version(VersionPrompt("dep", usage))
        assert (choice.kind, choice.version) == (ChoiceKind.VERSION, "^2.0.0")
        assert "used in 2 workspaces" in _output(prompter)

    def test_latest_without_lookup(self, prompter, answer, usage):
        answer("3\n")
        assert prompter.choose_version(VersionPrompt("dep", usage)).kind is ChoiceKind.LATEST

    def test_custom(self, prompter, answer, usage):
        answer("4\n^3.0.0\n")
        choice = prompter.choose_version(VersionPrompt("dep", usage))
        assert (choice.kind, choice.version) == (ChoiceKind.CUSTOM, "^3.0.0")

    def test_skip(self, prompter, answer, usage):
        answer("5\n")
        assert prompter.choose_version(VersionPrompt("dep", usage)).kind is ChoiceKind.SKIP

    def test_detailed_with_registry_version(self, prompter, answer, usage):
        answer("3\n")
        prompt = VersionPrompt("dep", usage, latest_version="3.1.0", latest_is_newer=True, detailed=True)
        assert prompter.choose_version(prompt).kind is ChoiceKind.LATEST
        output = _output(prompter)
        assert "Conflict Resolution for dep" in output
        assert "newer than current versions" in output

    def test_detailed_without_registry_version(self, prompter, answer, usage):
        # no latest entry: custom is 3, skip is 4
        answer("4\n")
        prompt = VersionPrompt("dep", usage, detailed=True)
        assert prompter.choose_version(prompt).kind is ChoiceKind.SKIP


class TestMarkupInNames:
    """Names that look like rich markup are shown literally"""

    def test_bracketed_names(self, prompter, answer):
        answer("1\n")
        prompt = VersionPrompt("[legacy]", {"[bold]1.0.0": ["[apps]"], "^2.0.0": ["b"]}, detailed=True)
        choice = prompter.choose_version(prompt)
        assert choice.version == "[bold]1.0.0"
        output = _output(prompter)
        assert "Resolving: [legacy]" in output
        assert "[apps]" in output
        assert "[bold]1.0.0 (used in 1 workspace)" in output
