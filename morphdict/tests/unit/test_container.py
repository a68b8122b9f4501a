# Path: morphdict/tests/unit/test_container.py
"""
Unit Tests for the Compressed Container Codec

Tests:
- Header layout and 16-byte alignment
- Container detection (what is and is not a container)
- Decompression of every algorithm, and corrupt streams
"""

import struct

import pytest

from morphdict.constants import (
    CONTAINER_HEADER_FORMAT,
    CONTAINER_HEADER_SIZE,
    CONTAINER_MAGIC,
    CompressionAlgorithm,
)
from morphdict.models.error import ContainerFormatError, DecompressionError
from morphdict.process.compression import (
    CompressedContainer,
    align_up,
    aligned_copy,
    compress,
    decompress,
    encode,
)


PAYLOAD = 'すもももももももものうち'.encode('utf-8') * 20


def make_header(payload_length, magic=CONTAINER_MAGIC, version=1, algorithm=0, reserved=0):
    return struct.pack(CONTAINER_HEADER_FORMAT, magic, version, algorithm, reserved, payload_length)


class TestAlignment:
    """Test alignment helpers."""

    @pytest.mark.parametrize('size,expected', [(0, 0), (1, 16), (16, 16), (17, 32), (31, 32)])
    def test_align_up(self, size, expected):
        assert align_up(size) == expected

    def test_aligned_copy_pads_with_zeros(self):
        buf = aligned_copy(b'abc')
        assert len(buf) == 16
        assert bytes(buf[:3]) == b'abc'
        assert not any(buf[3:])

    def test_aligned_copy_does_not_alias_input(self):
        source = bytearray(b'x' * 20)
        buf = aligned_copy(source)
        source[0] = ord('y')
        assert buf[0] == ord('x')


class TestContainerLayout:
    """Test serialized container layout."""

    @pytest.mark.parametrize('algorithm', list(CompressionAlgorithm))
    def test_encoded_length_is_aligned(self, algorithm):
        blob = encode(PAYLOAD, algorithm)
        assert len(blob) % 16 == 0

    def test_header_fields(self):
        blob = encode(PAYLOAD, CompressionAlgorithm.ZLIB)
        magic, version, algorithm, reserved, length = struct.unpack_from(CONTAINER_HEADER_FORMAT, blob)

        assert magic == CONTAINER_MAGIC
        assert version == 1
        assert algorithm == CompressionAlgorithm.ZLIB
        assert reserved == 0
        assert CONTAINER_HEADER_SIZE + length <= len(blob)

    def test_from_bytes_recovers_algorithm_and_payload(self):
        container = compress(PAYLOAD, CompressionAlgorithm.GZIP)
        parsed = CompressedContainer.from_bytes(container.to_bytes())
        assert parsed == container

    def test_empty_payload(self):
        blob = encode(b'', CompressionAlgorithm.RAW)
        assert len(blob) == CONTAINER_HEADER_SIZE
        assert decompress(CompressedContainer.from_bytes(blob)) == b''

    def test_missing_padding_is_tolerated(self):
        container = CompressedContainer(CompressionAlgorithm.RAW, b'12345')
        blob = container.to_bytes()
        unpadded = blob[:CONTAINER_HEADER_SIZE + 5]
        assert CompressedContainer.from_bytes(unpadded) == container


class TestContainerDetection:
    """Test rejection of data that is not a container."""

    def test_short_data(self):
        with pytest.raises(ContainerFormatError):
            CompressedContainer.from_bytes(CONTAINER_MAGIC)

    def test_empty_data(self):
        with pytest.raises(ContainerFormatError):
            CompressedContainer.from_bytes(b'')

    def test_bad_magic(self):
        with pytest.raises(ContainerFormatError, match='magic'):
            CompressedContainer.from_bytes(make_header(0, magic=b'NOPE'))

    def test_unknown_version(self):
        with pytest.raises(ContainerFormatError, match='version'):
            CompressedContainer.from_bytes(make_header(0, version=9))

    def test_unknown_algorithm(self):
        with pytest.raises(ContainerFormatError, match='algorithm'):
            CompressedContainer.from_bytes(make_header(0, algorithm=42))

    def test_reserved_must_be_zero(self):
        with pytest.raises(ContainerFormatError, match='reserved'):
            CompressedContainer.from_bytes(make_header(0, reserved=1))

    def test_payload_longer_than_buffer(self):
        with pytest.raises(ContainerFormatError, match='exceeds'):
            CompressedContainer.from_bytes(make_header(1000) + b'\x00' * 16)

    def test_trailing_bytes(self):
        blob = encode(PAYLOAD, CompressionAlgorithm.DEFLATE)
        with pytest.raises(ContainerFormatError, match='follow'):
            CompressedContainer.from_bytes(blob + b'\x00' * 16)

    def test_non_zero_padding(self):
        blob = bytearray(make_header(3) + b'abc' + b'\x00' * 13)
        blob[-1] = 1
        with pytest.raises(ContainerFormatError, match='padding'):
            CompressedContainer.from_bytes(bytes(blob))


class TestDecompression:
    """Test payload decompression."""

    @pytest.mark.parametrize('algorithm', list(CompressionAlgorithm))
    def test_round_trip(self, algorithm):
        container = CompressedContainer.from_bytes(encode(PAYLOAD, algorithm))
        assert decompress(container) == PAYLOAD

    def test_compression_shrinks_repetitive_data(self):
        assert len(compress(PAYLOAD, CompressionAlgorithm.DEFLATE).payload) < len(PAYLOAD)

    def test_gzip_output_is_reproducible(self):
        assert encode(PAYLOAD, CompressionAlgorithm.GZIP) == encode(PAYLOAD, CompressionAlgorithm.GZIP)

    def test_corrupt_stream(self):
        container = CompressedContainer(CompressionAlgorithm.ZLIB, b'\x00garbage-not-zlib')
        with pytest.raises(DecompressionError):
            decompress(container)

    def test_truncated_stream(self):
        good = compress(PAYLOAD, CompressionAlgorithm.DEFLATE)
        truncated = CompressedContainer(good.algorithm, good.payload[:len(good.payload) // 2])
        with pytest.raises(DecompressionError, match='truncated'):
            decompress(truncated)

    def test_trailing_data_after_stream(self):
        good = compress(PAYLOAD, CompressionAlgorithm.ZLIB)
        padded = CompressedContainer(good.algorithm, good.payload + b'extra')
        with pytest.raises(DecompressionError, match='after end'):
            decompress(padded)

    def test_algorithm_mismatch(self):
        good = compress(PAYLOAD, CompressionAlgorithm.GZIP)
        relabelled = CompressedContainer(CompressionAlgorithm.DEFLATE, good.payload)
        with pytest.raises(DecompressionError):
            decompress(relabelled)


class TestAlgorithmNames:
    """Test CompressionAlgorithm.from_name."""

    def test_case_insensitive(self):
        assert CompressionAlgorithm.from_name(' Deflate ') == CompressionAlgorithm.DEFLATE

    def test_unknown_name(self):
        with pytest.raises(ValueError, match='lz4'):
            CompressionAlgorithm.from_name('lz4')
