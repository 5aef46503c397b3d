import pytest

from oncocare.safety import (
    CRISIS_HELPLINE_MESSAGE,
    CRISIS_KEYWORDS,
    MINDCARE_INTENTS,
    check_crisis,
    find_crisis_keyword,
    match_mindcare_intent,
)


@pytest.mark.parametrize("keyword", CRISIS_KEYWORDS)
def test_every_keyword_triggers(keyword):
    result = check_crisis(f"Lately I feel like {keyword.upper()}.")
    assert result.isCrisis
    assert result.message == CRISIS_HELPLINE_MESSAGE


def test_substring_match_has_no_negation_handling():
    # false positives are accepted
    assert find_crisis_keyword("I will never give up") == "give up"


def test_clean_message():
    result = check_crisis("I had a great day")
    assert not result.isCrisis
    assert result.message == ""


def test_mindcare_intent_priority():
    # "breathing exercise" outranks "sleep"
    reply = match_mindcare_intent("A breathing exercise before sleep?")
    assert reply == MINDCARE_INTENTS[0][1]


def test_mindcare_sleep_intent():
    assert match_mindcare_intent("I can't SLEEP") == MINDCARE_INTENTS[3][1]


def test_mindcare_no_intent():
    assert match_mindcare_intent("I'm feeling Sad.") is None
