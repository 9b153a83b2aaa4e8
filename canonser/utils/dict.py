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

from typing import Any


def deep_merged(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """ A new dict with the keys of `base` updated by the keys of `override`, nested dicts are merged key by key.

    Neither argument is modified.

    >>> base = {'limits': {'depth': 10, 'length': 20}, 'name': 'base'}
    >>> deep_merged(base, {'limits': {'length': 5}, 'extra': True})
    {'limits': {'depth': 10, 'length': 5}, 'name': 'base', 'extra': True}
    >>> base['limits']
    {'depth': 10, 'length': 20}

    A value that is not a dict on either side replaces the other one entirely:

    >>> deep_merged({'limits': {'depth': 10}}, {'limits': None})
    {'limits': None}
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merged(current, value)
        else:
            result[key] = value
    return result
