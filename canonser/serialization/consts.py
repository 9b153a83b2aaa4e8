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

# largest value a ULEB128 length or variant tag can carry (u32)
MAX_U32 = 2**32 - 1

# a u32 needs at most ceil(32 / 7) = 5 groups of 7 bits
ULEB128_MAX_BYTES = 5

# maximum number of elements in a sequence/map/set, and of bytes in a string or byte blob
MAX_SEQUENCE_LENGTH = 2**31 - 1

# default maximum nesting of named containers (structs, tuple structs and enums) on encode and decode
MAX_CONTAINER_DEPTH = 100

# the configured depth can only be lowered, each level costs several interpreter frames
MAX_CONTAINER_DEPTH_LIMIT = 100
