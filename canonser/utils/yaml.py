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

from pathlib import Path
from typing import Any, Union

import yaml

from canonser.utils.dict import deep_merged

EXTENDS_KEY = 'extends'


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """ Parse a YAML file whose top level is a mapping, an empty file is an empty dict.
    """
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{filepath}' is not a file")

    with path.open('r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """ Like `dict_from_yaml`, but a file can name another file in its `extends` key to use as its base.

    The path in `extends` is relative to the file that has it. A base can extend another file, the values closer to the
    file that was asked for win, nested mappings are merged key by key. A chain of files that loops back on itself is a
    `ValueError`. The `extends` key is not part of the result.
    """
    return _load_extended(Path(filepath), seen=())


def _load_extended(path: Path, *, seen: tuple[Path, ...]) -> dict[str, Any]:
    resolved = path.resolve()
    if resolved in seen:
        chain = ' -> '.join(str(p) for p in (*seen, resolved))
        raise ValueError(f"'{path}' is extended in a loop: {chain}")

    contents = dict_from_yaml(filepath=path)
    base_name = contents.pop(EXTENDS_KEY, None)
    if not base_name:
        return contents

    base_path = path.parent / str(base_name)
    if not base_path.is_file():
        raise ValueError(f"'{base_path}' is not a file")

    base = _load_extended(base_path, seen=(*seen, resolved))
    return deep_merged(base, contents)
