from blogcore.core.config import settings
from blogcore.core.env_manager import EnvManager
from blogcore.core.i18n import get_locale, resolve_locale, set_locale, use_locale


def test_resolve_locale_prefers_explicit_value():
    with use_locale("fr"):
        assert resolve_locale("de") == "de"
        assert resolve_locale() == "fr"


def test_ambient_locale_defaults_to_settings():
    assert get_locale() == settings.DEFAULT_LOCALE


def test_use_locale_restores_previous_value():
    with use_locale("fr"):
        with use_locale("pt_BR") as inner:
            assert inner == "pt-BR"
        assert get_locale() == "fr"
    assert get_locale() == settings.DEFAULT_LOCALE


def test_env_manager_reads_booleans(monkeypatch):
    monkeypatch.setenv("BLOG_FLAG", "Yes")
    assert EnvManager.get_bool("BLOG_FLAG") is True
    monkeypatch.setenv("BLOG_FLAG", "0")
    assert EnvManager.get_bool("BLOG_FLAG", True) is False
    monkeypatch.delenv("BLOG_FLAG")
    assert EnvManager.get_bool("BLOG_FLAG", True) is True
    assert EnvManager.get_env_variable("BLOG_MISSING", "fallback") == "fallback"


def test_set_locale_normalizes_and_clears():
    set_locale("en_GB")
    try:
        assert get_locale() == "en-GB"
    finally:
        set_locale(None)
    assert get_locale() == settings.DEFAULT_LOCALE
