"""Tests for configuration loading."""

from unittest.mock import MagicMock

from prpanel_core.config import github_token, load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["response_language"] == "Polish"
    assert config["max_tokens"] == 16384
    assert config["review_whole_diff_at_once"] is False
    assert config["add_cost_to_comments"] is False
    assert config["additional_prompts"] == []
    assert config["claude_prompt_tokens_price"] == 3.00
    assert config["claude_completion_tokens_price"] == 15.00
    assert config["openai_prompt_tokens_price"] == 2.50
    assert config["openai_completion_tokens_price"] == 10.00
    assert config["strict_replies"] is False


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("response_language: German\nmax_tokens: 4000\nreview_whole_diff_at_once: true\n")
    config = load_config(config_path=str(cfg))
    assert config["response_language"] == "German"
    assert config["max_tokens"] == 4000
    assert config["review_whole_diff_at_once"] is True


def test_additional_prompts_accept_comma_string(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("additional_prompts: 'Check naming, Check tests'\n")
    config = load_config(config_path=str(cfg))
    assert config["additional_prompts"] == ["Check naming", "Check tests"]


def test_additional_prompts_accept_list(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("additional_prompts:\n  - Check naming\n  - Check tests\n")
    config = load_config(config_path=str(cfg))
    assert config["additional_prompts"] == ["Check naming", "Check tests"]


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("response_language: German\n")
    config = load_config(config_path=str(cfg), cli_overrides={"response_language": "French"})
    assert config["response_language"] == "French"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("add_cost_to_comments: true\n")
    config = load_config(config_path=str(cfg), cli_overrides={"add_cost_to_comments": None})
    assert config["add_cost_to_comments"] is True


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"


def test_models_from_env_when_unset(monkeypatch, tmp_path):
    monkeypatch.setenv("CLAUDE_MODEL", "claude-env")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-env")
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text("openai_model: gpt-file\n")
    config = load_config(config_path=str(cfg))
    assert config["claude_model"] == "claude-env"
    assert config["openai_model"] == "gpt-file"


def test_additional_prompts_list_is_not_shared_reference(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["additional_prompts"].append("Check naming")
    assert config_b["additional_prompts"] == []


def test_quoted_prices_are_coerced_to_float(tmp_path):
    cfg = tmp_path / ".prpanel.yml"
    cfg.write_text('claude_prompt_tokens_price: "3.50"\nopenai_completion_tokens_price: "12"\n')
    config = load_config(config_path=str(cfg))
    assert config["claude_prompt_tokens_price"] == 3.5
    assert config["openai_completion_tokens_price"] == 12.0
    assert isinstance(config["openai_completion_tokens_price"], float)


def test_github_token_resolved_through_gh_session(monkeypatch, mocker, tmp_path):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    mocker.patch("prpanel_core.config.subprocess.run", return_value=MagicMock(returncode=0, stdout="gh-session\n"))
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-session"


class TestGithubToken:
    def test_env_var_wins(self, monkeypatch, mocker):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        run = mocker.patch("prpanel_core.config.subprocess.run")
        assert github_token() == "env-token"
        run.assert_not_called()

    def test_gh_not_logged_in(self, monkeypatch, mocker):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        mocker.patch("prpanel_core.config.subprocess.run", return_value=MagicMock(returncode=1, stdout=""))
        assert github_token() is None

    def test_gh_missing(self, monkeypatch, mocker):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        mocker.patch("prpanel_core.config.subprocess.run", side_effect=FileNotFoundError)
        assert github_token() is None
