import pytest


@pytest.fixture(autouse=True)
def isolate_user_environment(monkeypatch, tmp_path):
    """Keep the developer's own settings, API key and editor out of the tests.

    The settings file is pointed at a path that does not exist so the
    defaults apply, a dummy API key is provided, and the editor variables
    are removed.
    """
    monkeypatch.setenv("GITCM_CONFIG", str(tmp_path / "no-such-config.json"))
    monkeypatch.setenv("DEEPSEEK_API_KEY", "test-key")
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    yield
