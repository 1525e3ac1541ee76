import pytest

from feedsnap.config import BuildConfig, Config, load_config, load_sources
from feedsnap.errors import ConfigurationError


def test_load_sources_normalizes_fields(sources_file):
    path = sources_file([
        {
            "id": "  a ",
            "company": " Acme ",
            "companyGroup": "rival",
            "type": "blog",
            "pageUrl": " https://acme.example/news ",
        },
        {
            "id": "b",
            "company": "Beta",
            "companyGroup": "competitor",
            "type": "facebook",
            "title": "  Beta   on  Facebook ",
            "pageUrl": "https://facebook.com/beta",
            "rssUrl": " https://beta.example/feed ",
        },
    ])

    sources = load_sources(path)

    assert [s.id for s in sources] == ["a", "b"]
    a, b = sources
    assert a.company == "Acme"
    assert a.company_group == "ours"
    assert a.type == "website"
    assert a.title == "Acme"
    assert a.page_url == "https://acme.example/news"
    assert a.rss_url == ""
    assert b.company_group == "competitor"
    assert b.type == "facebook"
    assert b.title == "Beta on Facebook"
    assert b.rss_url == "https://beta.example/feed"


def test_title_falls_back_to_id_when_company_and_title_missing():
    from feedsnap.config import normalize_source_record

    record = normalize_source_record({"id": "x", "pageUrl": "https://x"})
    assert record["title"] == "x"


def test_missing_required_fields_is_fatal(sources_file):
    path = sources_file([
        {"id": "a", "company": "Acme", "pageUrl": "https://acme.example"},
        {"id": "b", "company": "", "pageUrl": "https://b.example"},
        {"id": "c", "company": "C"},
    ])

    with pytest.raises(ConfigurationError) as excinfo:
        load_sources(path)

    message = str(excinfo.value)
    assert "missing id/company/pageUrl" in message
    assert '"id": "b"' in message
    assert '"id": "c"' in message
    assert '"id": "a"' not in message


def test_duplicate_source_id_is_fatal(sources_file):
    path = sources_file([
        {"id": "a", "company": "Acme", "pageUrl": "https://acme.example"},
        {"id": " a", "company": "Acme 2", "pageUrl": "https://acme2.example"},
    ])

    with pytest.raises(ConfigurationError, match="Duplicate source id: a"):
        load_sources(path)


def test_missing_sources_file_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError, match="Sources file not found"):
        load_sources(tmp_path / "nope.json")


def test_malformed_sources_document_is_fatal(tmp_path):
    path = tmp_path / "sources.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid sources file"):
        load_sources(path)


def test_sources_document_needs_top_level_list(tmp_path):
    path = tmp_path / "sources.json"
    path.write_text('{"items": []}', encoding="utf-8")

    with pytest.raises(ConfigurationError, match='top-level "sources" array'):
        load_sources(path)


def test_yaml_sources_document(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text(
        "sources:\n"
        "  - id: a\n"
        "    company: Acme\n"
        "    pageUrl: https://acme.example\n",
        encoding="utf-8",
    )

    assert [s.id for s in load_sources(path)] == ["a"]


def test_load_config_defaults_when_optional_file_missing(tmp_path):
    config = load_config(tmp_path / "feedsnap.yaml")

    assert config == BuildConfig()
    assert config.timeout == 20.0
    assert config.output_path == "docs/data/content.json"


def test_load_config_required_file_missing(tmp_path):
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_config(tmp_path / "feedsnap.yaml", required=True)


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "feedsnap.yaml"
    path.write_text(
        "timeout: 5\nfacebook_pages:\n  ours-facebook: acme\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.timeout == 5.0
    assert config.facebook_pages == {"ours-facebook": "acme"}


def test_load_config_rejects_invalid_values(tmp_path):
    path = tmp_path / "feedsnap.yaml"
    path.write_text("image_concurrency: 0\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path)


def test_override_keeps_unset_values(tmp_path):
    config = Config(tmp_path / "feedsnap.yaml", required=False)

    config.override(output_path=str(tmp_path / "out.json"), timeout=None)

    assert config.output_path == tmp_path / "out.json"
    assert config.config.timeout == 20.0


def test_override_validates(tmp_path):
    config = Config(tmp_path / "feedsnap.yaml", required=False)

    with pytest.raises(ConfigurationError):
        config.override(timeout=0.0)


def test_facebook_token_from_environment(monkeypatch, tmp_path):
    config = Config(tmp_path / "feedsnap.yaml", required=False)

    monkeypatch.delenv("FACEBOOK_ACCESS_TOKEN", raising=False)
    assert config.get_facebook_token() is None

    monkeypatch.setenv("FACEBOOK_ACCESS_TOKEN", " secret ")
    assert config.get_facebook_token() == "secret"
