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
from typing import Union

from pydantic import Field

from canonser.serialization.consts import MAX_CONTAINER_DEPTH, MAX_CONTAINER_DEPTH_LIMIT, MAX_SEQUENCE_LENGTH
from canonser.utils.pydantic import BaseModel
from canonser.utils.yaml import dict_from_extended_yaml


class CodecSettings(BaseModel):
    # Maximum number of nested structs, tuple structs and enums, both when encoding and when decoding
    MAX_CONTAINER_DEPTH: int = Field(MAX_CONTAINER_DEPTH, ge=1, le=MAX_CONTAINER_DEPTH_LIMIT)

    # Maximum number of elements of a sequence, map or set, and of bytes of a string or byte blob
    MAX_SEQUENCE_LENGTH: int = Field(MAX_SEQUENCE_LENGTH, ge=1, le=MAX_SEQUENCE_LENGTH)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
