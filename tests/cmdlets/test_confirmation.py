"""
Tests for the confirmation gate shared by all mutating commands.
"""

from unittest.mock import MagicMock

from ssrs_admin.cmdlets import ConfirmationGate


def test_default_gate_always_proceeds():
    assert ConfirmationGate().should_process("/Reports", "Delete catalog item") is True


def test_what_if_never_proceeds_and_never_prompts(caplog):
    prompt = MagicMock()
    gate = ConfirmationGate(what_if=True, confirm=True, prompt=prompt)

    with caplog.at_level("INFO"):
        assert gate.should_process("/Reports", "Delete catalog item") is False

    prompt.assert_not_called()
    assert 'What if: Performing the operation "Delete catalog item" on target "/Reports".' in caplog.text


def test_confirm_yes_and_no():
    assert ConfirmationGate(confirm=True, prompt=lambda _: "Y").should_process("/a", "x") is True
    assert ConfirmationGate(confirm=True, prompt=lambda _: "yes").should_process("/a", "x") is True
    assert ConfirmationGate(confirm=True, prompt=lambda _: "N").should_process("/a", "x") is False
    assert ConfirmationGate(confirm=True, prompt=lambda _: "maybe").should_process("/a", "x") is False


def test_yes_to_all_stops_prompting():
    prompt = MagicMock(return_value="a")
    gate = ConfirmationGate(confirm=True, prompt=prompt)

    assert gate.should_process("/a", "x") is True
    assert gate.should_process("/b", "x") is True
    assert prompt.call_count == 1


def test_end_of_input_declines():
    prompt = MagicMock(side_effect=EOFError)

    assert ConfirmationGate(confirm=True, prompt=prompt).should_process("/a", "x") is False
