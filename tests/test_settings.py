import logging

from filespyder.logging import configure_logging, get_log_level, get_logger
from filespyder.settings import Settings


def test_settings(monkeypatch):
    settings = Settings()
    assert settings.log_level == "info"
    assert not settings.suppress_errors
    assert settings.strict
    assert settings.max_workers is None

    monkeypatch.setenv("FILESPYDER_MAX_WORKERS", "4")
    monkeypatch.setenv("FILESPYDER_STRICT", "false")
    monkeypatch.setenv("FILESPYDER_PARALLEL_DEPTH", "2")
    settings = Settings()
    assert settings.max_workers == 4
    assert not settings.strict
    assert settings.parallel_depth == 2


def test_logging(capsys):
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("WARNING") == logging.WARNING
    assert get_log_level("nonsense") == logging.INFO
    assert get_log_level(logging.ERROR) == logging.ERROR

    configure_logging(level="info", log_json=True)
    log = get_logger("filespyder.test")
    log.info("Hello", foo="bar")
    err = capsys.readouterr().err
    assert '"event": "Hello"' in err
    assert '"foo": "bar"' in err
