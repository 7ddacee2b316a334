"""Tests for prompt management."""

import pytest
from racesignal.promptvault import PromptVault


@pytest.fixture
def vault():
    return PromptVault()


def test_race_analysis_prompt_generation(vault):
    """Test analysis prompt generation."""
    prompt = vault.race_analysis([2, 1, 4])

    assert "[2, 1, 4]" in prompt
    assert "oldest to newest" in prompt
    assert "3, 4, 5 and 6" in prompt
    assert "exactly 3 horses" in prompt
    assert "below 75%" in prompt
    assert "JSON" in prompt
    assert "recommended_horses" in prompt


def test_race_analysis_custom_watched(vault):
    prompt = vault.race_analysis([1, 1, 1], watched=[5], threshold=80)

    assert "horses 5." in prompt
    assert "below 80%" in prompt


def test_analysis_instructions(vault):
    """Test that the three analysis angles are requested."""
    prompt = vault.race_analysis([6, 6, 3])

    assert "Frequency" in prompt
    assert "overdue" in prompt
    assert "1-3-1" in prompt


def test_unknown_prompt(vault):
    with pytest.raises(KeyError):
        vault.get_prompt("missing")


def test_list_prompts(vault):
    assert vault.list_prompts() == ["race_analysis"]


def test_unknown_prompt_is_logged(vault, caplog):
    with caplog.at_level("WARNING", logger="racesignal.promptvault"):
        with pytest.raises(KeyError):
            vault.get_prompt("missing")

    assert "missing" in caplog.text
