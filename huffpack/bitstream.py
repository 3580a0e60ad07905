"""
Packing of Huffman codes into bytes and the reverse walk.

Bits are written most significant first inside every output byte; the last
byte is padded with zero bits.
"""

import logging
from typing import Dict, Tuple

from bitarray import bitarray

from .errors import InternalConsistencyError, TruncatedPayloadError

logger = logging.getLogger(__name__)


class BitEncoder:
    """Concatenates the code of every input byte into a dense bit stream."""

    def encode(self, data: bytes, codes: Dict[int, str]) -> Tuple[bytes, int]:
        """
        Encodes ``data`` with the given code table.

        Parameters:
        data (bytes): The original buffer.
        codes (dict): symbol -> bit string of '0'/'1' characters.

        Returns:
        tuple: (packed payload bytes, number of symbols encoded)
        """
        code_bits = {symbol: bitarray(code, endian="big") for symbol, code in codes.items()}

        output_buffer = bitarray(endian="big")
        for symbol in data:
            try:
                output_buffer.extend(code_bits[symbol])
            except KeyError:
                raise InternalConsistencyError(
                    f"Symbol {symbol} has no entry in the code table."
                ) from None

        bit_length = len(output_buffer)
        # fill the buffer with zeros if the number of bits is not a multiple of 8
        output_buffer.fill()
        logger.debug("Encoded %d symbols into %d bits", len(data), bit_length)
        return output_buffer.tobytes(), len(data)


class BitDecoder:
    """Walks a packed bit stream and maps accumulated bits back to symbols."""

    def decode(self, payload: bytes, decode_table: Dict[str, int], symbol_count: int) -> bytes:
        """
        Decodes exactly ``symbol_count`` symbols from ``payload``.

        Padding after the last symbol is never looked at.

        Parameters:
        payload (bytes): The packed codes.
        decode_table (dict): bit string -> symbol, prefix free.
        symbol_count (int): Number of symbols to produce.

        Returns:
        bytes: The decoded buffer.
        """
        if symbol_count == 0:
            return b""
        if not decode_table:
            raise TruncatedPayloadError("No codes available to decode the payload.")

        # A single distinct symbol is coded with the empty string and takes no bits.
        if "" in decode_table:
            return bytes([decode_table[""]]) * symbol_count

        max_code_length = max(len(code) for code in decode_table)

        bits = bitarray(endian="big")
        bits.frombytes(payload)

        decoded = bytearray()
        remaining = symbol_count
        buffer = ""
        for bit in bits.to01():
            buffer += bit
            symbol = decode_table.get(buffer)
            if symbol is None:
                if len(buffer) >= max_code_length:
                    raise TruncatedPayloadError(
                        f"Bit sequence {buffer!r} does not match any code."
                    )
                continue
            decoded.append(symbol)
            buffer = ""
            remaining -= 1
            if remaining == 0:
                break

        if remaining:
            raise TruncatedPayloadError(
                f"Payload exhausted with {remaining} of {symbol_count} symbols left to decode."
            )
        logger.debug("Decoded %d symbols from %d payload bytes", symbol_count, len(payload))
        return bytes(decoded)
