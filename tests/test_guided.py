# tests/test_guided.py
import pytest
from cms.errors import OperationCancelled
from cms.guided import CANCELLED, COMMITTED, CONFIRMING, PROMPTING, GuidedInput
from cms.validators import validate_id, validate_name


def test_ask_reprompts_until_valid(feed_input, capsys):
    feed_input("abc", "", "2301234")
    flow = GuidedInput("INSERT")
    assert flow.ask("id", "ID?", validate_id) == 2301234
    assert flow.state == PROMPTING
    assert flow.values == {"id": 2301234}
    assert capsys.readouterr().out.count("Ошибка") == 2


def test_ask_extra_check_keeps_same_field(feed_input, capsys):
    feed_input("2301234", "2401111")
    flow = GuidedInput("INSERT")
    value = flow.ask("id", "ID?", validate_id, check=lambda v: "занят" if v == 2301234 else None)
    assert value == 2401111
    assert "занят" in capsys.readouterr().out


def test_cancel_discards_collected_values(feed_input, capsys):
    feed_input("2301234", "q")
    flow = GuidedInput("INSERT")
    flow.ask("id", "ID?", validate_id)
    with pytest.raises(OperationCancelled):
        flow.ask("name", "Name?", validate_name)
    assert flow.state == CANCELLED
    assert flow.values == {}
    assert "отменена" in capsys.readouterr().out


def test_confirm_yes_commits(feed_input, capsys):
    feed_input("maybe", "Y")
    flow = GuidedInput("DELETE")
    assert flow.confirm("Sure?") is True
    assert flow.state == COMMITTED
    assert "Y' или 'N'" in capsys.readouterr().out


def test_confirm_no_cancels(feed_input):
    feed_input("n")
    flow = GuidedInput("DELETE")
    assert flow.confirm("Sure?") is False
    assert flow.state == CANCELLED


def test_confirm_ignores_cancel_sentinel(feed_input):
    feed_input("q", "y")
    flow = GuidedInput("UPDATE")
    assert flow.confirm("Sure?") is True


def test_states_progress_through_fields(monkeypatch):
    states = []
    answers = iter(["2301234", "Anna Lee", "y"])

    def mock_input(prompt=""):
        states.append((flow.state, flow.field))
        return next(answers)

    monkeypatch.setattr('builtins.input', mock_input)
    flow = GuidedInput("INSERT")
    flow.ask("id", "ID?", validate_id)
    flow.ask("name", "Name?", validate_name)
    flow.confirm("Sure?")
    assert states == [(PROMPTING, "id"), (PROMPTING, "name"), (CONFIRMING, None)]
    assert flow.state == COMMITTED
