import pytest

from apps.goals.logic.checklist import checklist_prompt, extract_json_from_raw, parse_checklist


def test_prompt_quotes_title():
    assert checklist_prompt("Grow tomatoes") == 'Generate a checklist for the goal: "Grow tomatoes" .'


def test_extracts_array_wrapped_in_prose():
    raw = 'Here you go:\n```json\n[{"text": "Buy seeds", "priority": "high", "completed": false}]\n```'

    assert extract_json_from_raw(raw) == [{"text": "Buy seeds", "priority": "high", "completed": False}]


@pytest.mark.parametrize("raw", ["no json here", "] backwards [", "[not json]"])
def test_extract_returns_none_without_array(raw):
    assert extract_json_from_raw(raw) is None


def test_parse_checklist_normalises_priority():
    entries = parse_checklist('[{"text": "Water", "priority": "High", "completed": false}]')

    assert [(e.text, e.priority, e.completed) for e in entries] == [("Water", "high", False)]


@pytest.mark.parametrize(
    "raw",
    [
        '[{"text": "Water", "priority": "high"}]',
        '[{"text": "Water", "priority": "high", "completed": "no"}]',
        '[{"text": 3, "priority": "high", "completed": false}]',
        '[{"text": "Water", "priority": "urgent", "completed": false}]',
        '["Water"]',
        "nothing",
    ],
)
def test_parse_checklist_rejects_malformed_items(raw):
    assert parse_checklist(raw) is None
