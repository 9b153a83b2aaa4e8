# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from canonser.conf.settings import CodecSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'CANONSER_CONFIG_YAML'

# source reported when the env var is not set
DEFAULT_SOURCE = '<defaults>'


class _LoadedSettings(NamedTuple):
    source: str
    settings: CodecSettings


_loaded: Optional[_LoadedSettings] = None


def get_global_settings() -> CodecSettings:
    """ The settings used by `canonser.serialize` and `canonser.deserialize`.

    When the 'CANONSER_CONFIG_YAML' env var is set its YAML file is loaded, otherwise the defaults are used. Either is
    loaded on the first call only, pointing the env var to another file afterwards raises an exception.
    """
    source = os.environ.get(CONFIG_YAML_ENV_VAR, DEFAULT_SOURCE)

    global _loaded
    if _loaded is None:
        _loaded = _LoadedSettings(source, _load(source))
    elif _loaded.source != source:
        raise Exception('loading config twice with a different file')
    return _loaded.settings


def get_settings_source() -> str:
    """ The YAML file the settings were loaded from, or '<defaults>'.

    XXX: get_global_settings() must have been called before, this asserts it was.
    """
    assert _loaded is not None, 'get_global_settings() not called before'
    return _loaded.source


def _load(source: str) -> CodecSettings:
    logger.debug('loading settings', source=source)
    if source == DEFAULT_SOURCE:
        return CodecSettings()
    return CodecSettings.from_yaml(filepath=source)
