import os

import pytest

from canonser.conf import get_settings

# tests that need a config file set it explicitly, see the `global_settings` fixture
os.environ.pop(get_settings.CONFIG_YAML_ENV_VAR, None)


@pytest.fixture(autouse=True)
def _reset_loaded_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(get_settings, '_loaded', None)
