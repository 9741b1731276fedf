"""Tests for the system prompt builder."""

import pytest

from prpanel_core.prompt import NO_COMMENT, SUPPORTED_LANGUAGES, build_system_prompt, language_instruction


@pytest.mark.parametrize("language", ["English", "Polish", "German", "French", "Spanish"])
def test_supported_languages(language):
    assert language in SUPPORTED_LANGUAGES
    assert f"Respond in {language} language" in language_instruction(language)


def test_unknown_language_falls_back_to_polish():
    assert "Polish" in language_instruction("Klingon")
    assert "Polish" in language_instruction(None)


def test_default_prompt_is_polish():
    assert "Respond in Polish" in build_system_prompt()


def test_sentinel_instruction_present():
    assert f"respond with {NO_COMMENT} only" in build_system_prompt()


def test_disabled_checks_are_omitted():
    prompt = build_system_prompt(check_for_bugs=False, check_for_performance=False, check_for_best_practices=False)
    assert "bugs" not in prompt
    assert "performance" not in prompt
    assert "best-practices" not in prompt


def test_additional_prompts_become_directives():
    prompt = build_system_prompt(additional_prompts=["Check SQL injection", "  ", "Prefer pathlib"])
    assert "- Check SQL injection" in prompt
    assert "- Prefer pathlib" in prompt
    assert "-   \n" not in prompt


def test_single_file_has_no_summary_table():
    prompt = build_system_prompt(number_of_files=1)
    assert "Feedback on files" not in prompt
    assert "high-level summary" not in prompt


def test_multiple_files_ask_for_summary_table():
    prompt = build_system_prompt(number_of_files=3)
    assert "Feedback on files" in prompt
    assert "high-level summary" in prompt
