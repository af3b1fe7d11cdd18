"""Transport codec for structured data blocks.

The server encodes lists and dictionaries as a small subset of YAML::

    ---
    - default
    - jobs

    ---
    current-jobs-ready: 0
    current-jobs-reserved: 1
"""

from __future__ import annotations

from typing import Dict, List

from ..protocol import fields
from ..protocol.errors import ProtocolError


_HEADER = "---"
_ITEM = "- "
_SEPARATOR = ": "


def _lines(block: bytes) -> List[str]:
    try:
        text = block.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"structured block is not valid UTF-8: {exc}") from exc

    lines = []
    for line in text.splitlines():
        if line.strip() == "" or line.startswith(_HEADER):
            continue
        lines.append(line)
    return lines


def decode_list(block: bytes) -> List[str]:
    """Return the items of a list block, in the order the server sent them."""

    items = []
    for line in _lines(block):
        if not line.startswith(_ITEM):
            raise ProtocolError(f"malformed list item: {line!r}")
        items.append(line[len(_ITEM):].strip())
    return items


def decode_map(block: bytes) -> Dict[str, str]:
    """Return the pairs of a map block. Later duplicates replace earlier ones."""

    pairs: Dict[str, str] = {}
    for line in _lines(block):
        key, separator, value = line.partition(_SEPARATOR)
        if separator == "":
            # A key with an empty value has nothing after the colon.
            if line.rstrip().endswith(":"):
                key, value = line.rstrip()[:-1], ""
            else:
                raise ProtocolError(f"malformed map entry: {line!r}")
        pairs[key.strip()] = value.strip()
    return pairs


def decode(shape: str, block: bytes):
    """Decode *block* according to the reply *shape*."""

    if shape == fields.BYTES:
        return block
    if shape == fields.LIST:
        return decode_list(block)
    if shape == fields.MAP:
        return decode_map(block)

    raise ValueError(f"no data block for reply shape {shape!r}")
