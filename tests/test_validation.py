import json

import pytest

from globetrotter.core.errors import (
    INVALID_FORMAT_MESSAGE,
    MalformedJSONError,
    NoValidEntriesError,
    UnexpectedShapeError,
)
from globetrotter.core.normalizer import normalize_suggestions, normalize_trip_plan
from globetrotter.core.validation import (
    Invalid,
    Valid,
    is_valid_suggestion,
    validate_suggestions,
    validate_trip_plan,
)


def _plan(**overrides):
    plan = {
        "overview": "Three days of museums and food.",
        "daily_itinerary": [
            {
                "day": 1,
                "title": "Arrival",
                "morning": {"time": "9:00 AM - 12:00 PM", "activities": ["Louvre"], "description": "Art"},
                "meals": {"breakfast": "Cafe", "lunch": "Bistro", "dinner": "Brasserie"},
                "estimated_cost": 120,
            }
        ],
        "travel_tips": ["Buy a museum pass"],
    }
    plan.update(overrides)
    return plan


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


def test_fenced_suggestion_is_returned_unchanged():
    raw = '```json\n[{"title":"Eiffel Tower","category":"activity","cost_est":25,"description":"Landmark"}]\n```'
    result = validate_suggestions(normalize_suggestions(raw))

    assert isinstance(result, Valid)
    assert result.value == [
        {"title": "Eiffel Tower", "category": "activity", "cost_est": 25, "description": "Landmark"}
    ]


def test_suggestion_without_description_is_tolerated():
    raw = 'Sure! Here\'s your list: [{"title":"A","category":"food","cost_est":10}] Hope that helps!'
    result = validate_suggestions(normalize_suggestions(raw))

    assert isinstance(result, Valid)
    assert result.value == [{"title": "A", "category": "food", "cost_est": 10}]


def test_entry_missing_title_yields_no_valid_entries():
    result = validate_suggestions('[{"category":"food","cost_est":10}]')

    assert isinstance(result, Invalid)
    assert isinstance(result.error, NoValidEntriesError)


def test_empty_array_yields_no_valid_entries():
    result = validate_suggestions("[]")
    assert isinstance(result, Invalid)
    assert isinstance(result.error, NoValidEntriesError)


def test_filter_keeps_valid_entries_in_input_order():
    items = [
        {"title": "First", "category": "activity", "cost_est": 5},
        {"title": "", "category": "food", "cost_est": 3},
        {"title": "Second", "category": "food", "cost_est": None},
        "just a string",
        {"title": "No cost", "category": "other"},
        None,
        {"title": "Third", "category": "other", "cost_est": 0},
        {"title": "No category", "category": None, "cost_est": 1},
    ]
    result = validate_suggestions(json.dumps(items))

    assert isinstance(result, Valid)
    assert [item["title"] for item in result.value] == ["First", "Second", "Third"]
    assert len(result.value) <= len(items)
    assert all(is_valid_suggestion(item) for item in result.value)


def test_open_category_values_pass_through():
    result = validate_suggestions('[{"title":"Spa","category":"wellness","cost_est":"varies"}]')
    assert isinstance(result, Valid)
    assert result.value[0]["category"] == "wellness"


def test_object_instead_of_array_is_unexpected_shape():
    result = validate_suggestions('{"title":"A","category":"food","cost_est":1}')

    assert isinstance(result, Invalid)
    assert isinstance(result.error, UnexpectedShapeError)
    assert result.error.reason == "not an array"


@pytest.mark.parametrize(
    "item, expected",
    [
        ({"title": "A", "category": "food", "cost_est": 1}, True),
        ({"title": "A", "category": "food", "cost_est": None}, True),
        ({"title": "A", "category": "food"}, False),
        ({"title": "A", "cost_est": 1}, False),
        ({"category": "food", "cost_est": 1}, False),
        ([], False),
        (7, False),
    ],
)
def test_is_valid_suggestion(item, expected):
    assert is_valid_suggestion(item) is expected


# ---------------------------------------------------------------------------
# Trip plan
# ---------------------------------------------------------------------------


def test_trip_plan_without_daily_itinerary_is_unexpected_shape():
    result = validate_trip_plan('{"overview":"x"}')

    assert isinstance(result, Invalid)
    assert isinstance(result.error, UnexpectedShapeError)
    assert result.error.reason == "invalid trip plan structure"


@pytest.mark.parametrize("value", ['"day one"', "{}", "null", "3"])
def test_trip_plan_with_non_list_itinerary_is_unexpected_shape(value):
    result = validate_trip_plan(f'{{"daily_itinerary": {value}}}')
    assert isinstance(result, Invalid)
    assert isinstance(result.error, UnexpectedShapeError)


def test_trip_plan_top_level_array_is_unexpected_shape():
    result = validate_trip_plan('[{"daily_itinerary": []}]')
    assert isinstance(result, Invalid)
    assert isinstance(result.error, UnexpectedShapeError)


def test_trip_plan_with_empty_itinerary_is_returned_unchanged():
    plan = {"overview": "x", "daily_itinerary": [], "extra": {"nested": True}}
    result = validate_trip_plan(json.dumps(plan))

    assert isinstance(result, Valid)
    assert result.value == plan


def test_trip_plan_days_are_not_inspected():
    plan = _plan(daily_itinerary=[{"day": 1}, "free day", {"title": "No blocks"}])
    result = validate_trip_plan(normalize_trip_plan("Here:\n" + json.dumps(plan) + "\nBon voyage"))

    assert isinstance(result, Valid)
    assert result.value == plan


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("validator", [validate_suggestions, validate_trip_plan])
def test_non_json_text_is_malformed(validator):
    result = validator("not json at all")

    assert isinstance(result, Invalid)
    assert isinstance(result.error, MalformedJSONError)
    assert result.error.message == INVALID_FORMAT_MESSAGE
    assert result.error.debug == "not json at all"


@pytest.mark.parametrize(
    "text",
    ["", "   ", "[", "{", "[1, 2,", '{"a": }', "\x00\x01", "[" * 100_000, "🙂 emoji", "NaNa"],
)
@pytest.mark.parametrize("validator", [validate_suggestions, validate_trip_plan])
def test_arbitrary_text_never_raises(validator, text):
    result = validator(text)
    assert isinstance(result, Invalid)


def test_debug_snippet_is_truncated_to_200_characters():
    text = "x" * 500
    result = validate_suggestions(text)

    assert isinstance(result, Invalid)
    assert result.error.debug == "x" * 200


@pytest.mark.parametrize(
    "validator, text",
    [
        (validate_suggestions, '[{"title":"A","category":"food","cost_est":NaN}]'),
        (validate_suggestions, '[{"title":"A","category":"food","cost_est":-Infinity}]'),
        (validate_trip_plan, '{"daily_itinerary": [], "estimated_budget": Infinity}'),
        (validate_trip_plan, '{"daily_itinerary": [{"estimated_cost": NaN}]}'),
    ],
)
def test_non_standard_number_literals_are_malformed(validator, text):
    result = validator(text)

    assert isinstance(result, Invalid)
    assert isinstance(result.error, MalformedJSONError)


@pytest.mark.parametrize(
    "value, expected",
    [
        ([], True),
        ({}, True),
        ("0", True),
        (0, False),
        (0.0, False),
        (False, False),
        ("", False),
        (None, False),
    ],
)
def test_title_presence_follows_json_truthiness(value, expected):
    assert is_valid_suggestion({"title": value, "category": "food", "cost_est": 1}) is expected
