from shareregistry.config import default_currency_code, get_settings, reload_settings


def test_defaults():
    settings = get_settings()

    assert settings.default_currency == "USD"
    assert settings.default_country == "United States"
    assert settings.locale == "en-US"
    assert settings.audit_export_limit == 10000
    assert settings.audit_page_size == 50


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_CURRENCY", " nzd ")
    monkeypatch.setenv("AUDIT_PAGE_SIZE", "25")

    settings = reload_settings()

    assert settings.currency_code == "NZD"
    assert settings.audit_page_size == 25
    assert default_currency_code() == "NZD"
    assert get_settings() is settings


def test_dotenv_file_is_read(tmp_path):
    # the autouse fixture runs each test inside tmp_path
    (tmp_path / ".env").write_text("DEFAULT_CURRENCY=GBP\n", encoding="utf-8")

    assert reload_settings().currency_code == "GBP"
