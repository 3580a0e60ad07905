import logging
import random

import pytest

import huffpack
from huffpack.compression import HuffmanCompressor
from huffpack.errors import MalformedContainerError, TruncatedPayloadError


def _random_bytes(n, seed=0):
	rng = random.Random(seed)
	return bytes(rng.getrandbits(8) for _ in range(n))


@pytest.mark.parametrize("data", [
	b"",
	b"x",
	b"xy",
	b"aabc",
	b"abc",
	bytes(range(256)),
	bytes(range(256)) * 3,
	b"This is a test" * 100,
	b"\n\n\n\x00\n",
	_random_bytes(10 * 1024),
	_random_bytes(4096, seed=5)[:1000] * 7,
], ids=[
	"empty", "one-byte", "two-bytes", "aabc", "three-distinct", "all-bytes-once",
	"all-bytes-thrice", "text", "delimiter-bytes", "random-10kb", "repeated-block",
])
def test_roundtrip(data):
	svc = HuffmanCompressor()
	assert svc.decompress(svc.compress(data)) == data


@pytest.mark.parametrize("data", [b"", b"\x00", b"\xff\x01"])
def test_trivial_input_passthrough(data):
	svc = HuffmanCompressor()
	compressed = svc.compress(data)
	assert compressed == data
	assert svc.decompress(compressed) == data


def test_single_distinct_symbol_300_times():
	# Single distinct symbol: code is the empty string and the payload is empty.
	data = b"\x41" * 300
	svc = HuffmanCompressor()
	compressed = svc.compress(data)
	assert compressed == b"\x00\x04\nA" + (300).to_bytes(8, "big")
	out = svc.decompress(compressed)
	assert out == data
	assert len(out) == 300


def test_single_distinct_symbol_three_bytes():
	assert huffpack.decompress(huffpack.compress(b"zzz")) == b"zzz"


def test_aabc_container():
	compressed = HuffmanCompressor().compress(bytes([0x61, 0x61, 0x62, 0x63]))
	assert compressed == (
		b"\x00\x0d"
		+ b"0\na10\nb11\nc"
		+ (4).to_bytes(8, "big")
		+ bytes([0b00101100])
	)
	assert HuffmanCompressor().decompress(compressed) == bytes([0x61, 0x61, 0x62, 0x63])


def test_compress_is_deterministic():
	data = _random_bytes(2048, seed=3)
	assert HuffmanCompressor().compress(data) == HuffmanCompressor().compress(data)


def test_compressible_input_shrinks():
	data = b"a" * 900 + b"b" * 90 + b"c" * 10
	assert len(HuffmanCompressor().compress(data)) < len(data) // 4


def test_accepts_bytearray_and_memoryview():
	data = b"hello huffman"
	svc = HuffmanCompressor()
	assert svc.compress(bytearray(data)) == svc.compress(data)
	assert svc.decompress(memoryview(svc.compress(data))) == data


def test_rejects_text():
	with pytest.raises(TypeError):
		HuffmanCompressor().compress("not bytes")
	with pytest.raises(TypeError):
		HuffmanCompressor().decompress("not bytes")


def test_truncated_stream():
	compressed = HuffmanCompressor().compress(b"This is a test" * 100)
	with pytest.raises(TruncatedPayloadError):
		HuffmanCompressor().decompress(compressed[:-3])


def test_corrupted_header():
	compressed = bytearray(HuffmanCompressor().compress(b"Hello World" * 50))
	compressed[0] ^= 0xFF
	with pytest.raises(MalformedContainerError):
		HuffmanCompressor().decompress(bytes(compressed))


def test_malformed_errors_are_value_errors():
	with pytest.raises(ValueError):
		HuffmanCompressor().decompress(b"\x00\x05010")


def test_print_tree_logs_tree(caplog):
	with caplog.at_level(logging.DEBUG, logger="huffpack.compression"):
		HuffmanCompressor(print_tree=True).compress(b"aabc")
	assert "Huffman code tree" in caplog.text
	assert "|- 'a' 2  0" in caplog.text


def test_tree_not_logged_by_default(caplog):
	with caplog.at_level(logging.DEBUG, logger="huffpack.compression"):
		HuffmanCompressor().compress(b"aabc")
	assert "Huffman code tree" not in caplog.text


def test_module_level_helpers():
	data = b"module level helpers"
	assert huffpack.decompress(huffpack.compress(data)) == data


def test_print_tree_byte_values(caplog):
	with caplog.at_level(logging.INFO, logger="huffpack.compression"):
		HuffmanCompressor(print_tree=True, print_text_char=False).compress(b"aabc")
	assert "|-  97 2  0" in caplog.text
