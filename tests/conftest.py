import pytest

from error_trigram_study.core.metrics import get_metrics

_STUDY_ENV = [
    "SE_SITE", "SE_TAGGED", "SE_BODY_FILTER", "SE_PAGESIZE", "SE_NUM_PAGES", "SE_SORT",
    "SE_API_KEY", "SE_TIMEOUT", "MOCK_MODE", "TOP_K", "SAMPLE_SIZE", "UNESCAPE_HTML",
    "CONFIG_DIR",
]


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep log files and stray env settings out of test runs
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENABLE_ROOT_LOGGER", "0")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("HTTP_RETRY_BASE_DELAY", "0")
    monkeypatch.setenv("HTTP_RETRY_JITTER", "0")
    for var in _STUDY_ENV:
        monkeypatch.delenv(var, raising=False)
    get_metrics().reset()
    yield
