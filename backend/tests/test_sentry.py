import logging

from golf_press.utils import sentry


def test_skips_sentry_without_dsn(monkeypatch, caplog):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    with caplog.at_level(logging.INFO):
        assert sentry._init_sentry() is False
    assert "skipping Sentry initialization" in caplog.text


def test_initialises_sentry_with_dsn(monkeypatch):
    calls = {}
    monkeypatch.setenv("SENTRY_DSN", "https://key@o0.ingest.sentry.io/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", "staging")
    monkeypatch.setenv("SENTRY_RELEASE", "golf-press@0.1.0")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.25")
    monkeypatch.delenv("SENTRY_PROFILES_SAMPLE_RATE", raising=False)
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: calls.update(kwargs))

    assert sentry._init_sentry() is True
    assert calls["environment"] == "staging"
    assert calls["release"] == "golf-press@0.1.0"
    assert calls["traces_sample_rate"] == 0.25
    assert calls["profiles_sample_rate"] == 0.0


def test_invalid_sample_rates_fall_back_to_zero(monkeypatch, caplog):
    monkeypatch.setenv("SENTRY_DSN", "https://key@o0.ingest.sentry.io/1")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "lots")
    monkeypatch.setenv("SENTRY_PROFILES_SAMPLE_RATE", "-1")
    with caplog.at_level(logging.WARNING):
        options = sentry._sentry_options()
    assert options["traces_sample_rate"] == 0.0
    assert options["profiles_sample_rate"] == 0.0
    assert "not a valid float" in caplog.text
    assert "cannot be negative" in caplog.text
