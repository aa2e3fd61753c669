# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: Cuong CT, 6/12/2025
# Change Description: using eth_utils library for implement some formatter utilities

from typing import Any, List, Optional

from eth_utils import to_checksum_address as eth_to_normalized_address
from eth_utils import to_int

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")


def hex_to_dec(hex_string: str | int | None) -> int | None:
    """
    Converts a hex string to decimal integer. Integers pass through untouched,
    since web3.py already decodes receipt quantities.
    """
    if hex_string is None:
        return None
    if isinstance(hex_string, int):
        return hex_string
    try:
        return to_int(hexstr=hex_string)
    except (ValueError, TypeError):
        logger.warning(f"Invalid hex string for conversion: {hex_string}")
        return None


def to_hex_str(value: Any) -> Optional[str]:
    """
    Renders HexBytes / bytes as a 0x-prefixed string.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to its checksum form.
    Safe-guards against None or invalid types to maintain backward compatibility.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return eth_to_normalized_address(address)
    except ValueError:
        return address.lower()


def parse_index_list(index_str: str) -> List[int]:
    """
    Parses a comma-separated list of signer indices, e.g. "1,2".
    """
    indices = []
    for part in index_str.split(","):
        part = part.strip()
        if not part:
            continue
        indices.append(int(part))
    return indices
