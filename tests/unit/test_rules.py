from pathlib import Path

import pytest

from src.rules.loader import RULES_PATH_ENV, default_rules_path, load_rules


def test_load_valid_rules(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("""
social_share:
  site_id: 3
  environment: development
  meta_prefix: "acme_"
  rest_namespace: "/acme/v1/"
  sharing:
    providers: [twitter, native]
""")
    rules = load_rules(p)
    assert rules.site_id == 3
    assert rules.environment == "development"
    assert rules.meta_prefix == "acme_"
    assert rules.rest_namespace == "acme/v1"
    assert rules.sharing.providers == ["twitter", "native"]
    assert rules.shortener.token_env == "BITLY_ACCESS_TOKEN"


def test_load_rules_without_wrapper_key(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("site_url: https://blog.example.com\n")
    assert load_rules(p).site_url == "https://blog.example.com"


def test_load_rules_from_markdown_fence(tmp_path: Path) -> None:
    p = tmp_path / "rules.md"
    p.write_text("""# Rules

Some notes.

```yaml
social_share:
  site_id: 7
```

Trailing text.
""")
    assert load_rules(p).site_id == 7


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("")
    rules = load_rules(p)
    assert rules.site_id == 2
    assert rules.sharing.providers == ["twitter", "linkedin", "facebook", "native"]


def test_load_missing_rules(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nonexistent.yaml")


def test_load_invalid_yaml(tmp_path: Path) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text("social_share: [unclosed")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(p)


def test_unknown_key_rejected(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("social_share:\n  unknown_setting: 1\n")
    with pytest.raises(ValueError, match="validation failed"):
        load_rules(p)


def test_duplicate_providers_rejected(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("social_share:\n  sharing:\n    providers: [twitter, twitter]\n")
    with pytest.raises(ValueError, match="validation failed"):
        load_rules(p)


def test_empty_providers_rejected(tmp_path: Path) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("social_share:\n  sharing:\n    providers: []\n")
    with pytest.raises(ValueError):
        load_rules(p)


def test_project_rules_file(rules) -> None:
    assert rules.site_id == 2
    assert rules.meta_prefix == "undisclosed_"
    assert rules.rest_namespace == "undisclosed/v1"


def test_default_rules_path_from_env(monkeypatch) -> None:
    monkeypatch.setenv(RULES_PATH_ENV, "/etc/social_share/rules.yaml")
    assert default_rules_path() == Path("/etc/social_share/rules.yaml")

    monkeypatch.delenv(RULES_PATH_ENV)
    assert default_rules_path() == Path("rules.yaml")
