"""
Binary layout of a compressed container.

    offset 0      2 bytes   big endian table end offset T
    offset 2..T   table     entries of ASCII '0'/'1' code, b'\\n', symbol byte
    offset T      8 bytes   big endian number of symbols in the original data
    offset T+8    payload   packed codes, zero padded to a whole byte
"""

import logging
import struct
from typing import Dict, NamedTuple

from .errors import InternalConsistencyError, MalformedContainerError
from .huffman import invert_codes

logger = logging.getLogger(__name__)

TABLE_OFFSET_FORMAT = ">H"
SYMBOL_COUNT_FORMAT = ">Q"
TABLE_START = struct.calcsize(TABLE_OFFSET_FORMAT)
SYMBOL_COUNT_SIZE = struct.calcsize(SYMBOL_COUNT_FORMAT)
MAX_TABLE_END = 0xFFFF
DELIMITER = 0x0A
CODE_CHARS = {ord("0"), ord("1")}


class Container(NamedTuple):
    decode_table: Dict[str, int]
    symbol_count: int
    payload: bytes
    table_end: int


def encode_table(codes: Dict[int, str]) -> bytes:
    """
    Serializes the code table, entries sorted by code string so equal
    tables always produce equal bytes.
    """
    decode_map = invert_codes(codes)
    if len(decode_map) != len(codes):
        raise InternalConsistencyError("Two symbols share the same code.")

    table = bytearray()
    for code, symbol in sorted(decode_map.items()):
        table.extend(code.encode("ascii"))
        table.append(DELIMITER)
        table.append(symbol)
    return bytes(table)


def pack_container(codes: Dict[int, str], symbol_count: int, payload: bytes) -> bytes:
    """
    Assembles the full container.

    Parameters:
    codes (dict): symbol -> bit string used to produce ``payload``.
    symbol_count (int): Length of the original data.
    payload (bytes): The packed codes.

    Returns:
    bytes: header, table, symbol count and payload.
    """
    table = encode_table(codes)
    table_end = TABLE_START + len(table)
    if table_end > MAX_TABLE_END:
        raise InternalConsistencyError(
            f"Code table ends at byte {table_end}, beyond the 16 bit offset limit."
        )
    logger.debug("Table region ends at %d, symbol count %d", table_end, symbol_count)
    return b"".join([
        struct.pack(TABLE_OFFSET_FORMAT, table_end),
        table,
        struct.pack(SYMBOL_COUNT_FORMAT, symbol_count),
        payload,
    ])


def parse_table(data: bytes, table_end: int) -> Dict[str, int]:
    """
    Parses the table region ``data[2:table_end]`` into bit string -> symbol.

    Raises MalformedContainerError when an entry is cut short, a code holds
    anything other than '0'/'1', or a code appears twice.
    """
    table = {}
    position = TABLE_START
    while position < table_end:
        delimiter = data.find(DELIMITER, position, table_end)
        if delimiter == -1:
            raise MalformedContainerError(
                f"Missing delimiter for the table entry starting at byte {position}."
            )
        if delimiter + 1 >= table_end:
            raise MalformedContainerError(
                f"Missing symbol byte after the delimiter at byte {delimiter}."
            )
        raw_code = data[position:delimiter]
        if any(char not in CODE_CHARS for char in raw_code):
            raise MalformedContainerError(
                f"Invalid code characters in the table entry at byte {position}."
            )
        code = raw_code.decode("ascii")
        if code in table:
            raise MalformedContainerError(f"Duplicate code {code!r} in the table.")
        table[code] = data[delimiter + 1]
        position = delimiter + 2

    if "" in table and len(table) > 1:
        raise MalformedContainerError("The empty code must be the only table entry.")
    return table


def unpack_container(data: bytes) -> Container:
    """
    Splits container bytes back into the decoding table, the symbol count
    and the payload.
    """
    if len(data) < TABLE_START:
        raise MalformedContainerError("Container is too short for the table offset header.")

    (table_end,) = struct.unpack_from(TABLE_OFFSET_FORMAT, data, 0)
    if table_end < TABLE_START:
        raise MalformedContainerError(f"Table end offset {table_end} overlaps the header.")
    if table_end > len(data):
        raise MalformedContainerError(
            f"Table end offset {table_end} points past the end of the {len(data)} byte buffer."
        )
    if table_end + SYMBOL_COUNT_SIZE > len(data):
        raise MalformedContainerError("Container is too short for the symbol count header.")

    table = parse_table(data, table_end)
    (symbol_count,) = struct.unpack_from(SYMBOL_COUNT_FORMAT, data, table_end)
    if symbol_count and not table:
        raise MalformedContainerError(
            f"Empty code table for {symbol_count} declared symbols."
        )

    logger.debug("Read %d table entries, symbol count %d", len(table), symbol_count)
    return Container(
        decode_table=table,
        symbol_count=symbol_count,
        payload=bytes(data[table_end + SYMBOL_COUNT_SIZE:]),
        table_end=table_end,
    )
