import copy

from agent.core.knowledge_base import WEDDING_INFO
from agent.core.prompt import SYSTEM_PROMPT, build_system_prompt


def test_prompt_carries_persona_and_rules() -> None:
    assert "Your name is *SuSh* 💍" in SYSTEM_PROMPT
    assert "LANGUAGE RULES" in SYSTEM_PROMPT
    assert "Hinglish" in SYSTEM_PROMPT
    assert "WEB SEARCH TOOL:" in SYSTEM_PROMPT
    assert "web_search" in SYSTEM_PROMPT


def test_prompt_includes_wedding_facts() -> None:
    for fact in (
        "Surakshit",
        "Shreyaa",
        WEDDING_INFO["dates"]["day1"],
        WEDDING_INFO["dates"]["day2"],
        WEDDING_INFO["venues"]["stay"],
        WEDDING_INFO["venues"]["sangeet"],
        WEDDING_INFO["couple"]["hashtag"],
    ):
        assert fact in SYSTEM_PROMPT


def test_prompt_reflects_knowledge_base_edits() -> None:
    info = copy.deepcopy(WEDDING_INFO)
    info["couple"]["hashtag"] = "#TestHashtag"
    assert "#TestHashtag" in build_system_prompt(info)
    assert "#TestHashtag" not in SYSTEM_PROMPT


def test_search_rules_allow_live_weather() -> None:
    assert "*Live weather*" in SYSTEM_PROMPT
    assert "General Jaipur July weather" in SYSTEM_PROMPT
