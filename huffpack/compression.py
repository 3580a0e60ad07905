from .bitstream import BitDecoder, BitEncoder
from .container import pack_container, unpack_container
from .huffman import build_tree, count_frequencies, generate_codes, render_tree
import logging

logger = logging.getLogger(__name__)

# Buffers this short are stored as they are, with no table or headers.
TRIVIAL_INPUT_LENGTH = 2


class HuffmanCompressor:
        # Compression Block: turns a byte buffer into a self describing container
        # (code table, symbol count, packed codes) and back. The whole input and
        # output live in memory at once, so inputs are limited by available RAM.
        def __init__(self, print_tree: bool = False, print_text_char: bool = True):
            """
            Initializes the compressor.

            Parameters:
            print_tree (bool): Log the Huffman tree at INFO level while compressing.
            print_text_char (bool): Draw tree symbols as characters, else as byte values.
            """
            self.print_tree = print_tree
            self.print_text_char = print_text_char
            self.encoder = BitEncoder()
            self.decoder = BitDecoder()

        def compress(self, data: bytes) -> bytes:
            """
            Compresses the given buffer.

            Parameters:
            data (bytes): The buffer to compress.

            Returns:
            bytes: The container, or a copy of ``data`` when it is 2 bytes or shorter.
            """
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise TypeError("Input data must be bytes-like.")
            data = bytes(data)
            if len(data) <= TRIVIAL_INPUT_LENGTH:
                return data

            frequencies = count_frequencies(data)
            logger.debug("Found %d distinct symbols in %d bytes", len(frequencies), len(data))
            root = build_tree(frequencies)
            if self.print_tree:
                logger.info("Huffman code tree:\n%s", render_tree(root, printable=self.print_text_char))
            codes = generate_codes(root)

            payload, symbol_count = self.encoder.encode(data, codes)
            return pack_container(codes, symbol_count, payload)

        def decompress(self, data: bytes) -> bytes:
            """
            Restores the original buffer from a container.

            Parameters:
            data (bytes): Bytes produced by ``compress``.

            Returns:
            bytes: The original buffer.
            """
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise TypeError("Input data must be bytes-like.")
            data = bytes(data)
            if len(data) <= TRIVIAL_INPUT_LENGTH:
                return data

            container = unpack_container(data)
            return self.decoder.decode(
                container.payload, container.decode_table, container.symbol_count
            )


def compress(data: bytes, print_tree: bool = False) -> bytes:
    return HuffmanCompressor(print_tree=print_tree).compress(data)


def decompress(data: bytes) -> bytes:
    return HuffmanCompressor().decompress(data)
