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

"""
Leaf encoders: each submodule handles one kind of value that doesn't contain other values (booleans, fixed-size ints,
floats, chars, ULEB128 lengths and tags, byte blobs and strings).

Every submodule `x` exposes a pair of functions with the same shape:

    def encode_x(serializer: Serializer, value: X, *, <parameters>) -> None: ...
    def decode_x(deserializer: Deserializer, *, <parameters>) -> X: ...

Parameters are plain values (a byte length, a signedness flag), never other encoders, those belong in
`compound_encoding`.

Each value has exactly one encoding: decoders reject any byte pattern that is not the one the encoder would write, even
if its meaning would be clear.
"""
