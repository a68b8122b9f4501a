# Path: morphdict/process/compression/container.py
"""
Compressed Container

Self-describing record wrapping one compressed artifact.

Layout (little-endian, 16-byte aligned):
    offset 0   magic           4s  b"MDCC"
    offset 4   version         u8
    offset 5   algorithm       u8  (CompressionAlgorithm)
    offset 6   reserved        u16 (zero)
    offset 8   payload_length  u64
    offset 16  payload         payload_length bytes
               padding         zeros up to the next multiple of 16

Example:
    blob = encode(data, CompressionAlgorithm.DEFLATE)
    container = CompressedContainer.from_bytes(blob)
    assert decompress(container) == data
"""

import gzip
import struct
import zlib
from dataclasses import dataclass

from ...constants import (
    CONTAINER_ALIGNMENT,
    CONTAINER_HEADER_FORMAT,
    CONTAINER_HEADER_SIZE,
    CONTAINER_MAGIC,
    CONTAINER_VERSION,
    DEFAULT_COMPRESSION_LEVEL,
    DEFLATE_WBITS,
    GZIP_WBITS,
    ZLIB_WBITS,
    CompressionAlgorithm,
)
from ...models.error import ContainerFormatError, DecompressionError

_HEADER = struct.Struct(CONTAINER_HEADER_FORMAT)

_WBITS = {
    CompressionAlgorithm.DEFLATE: DEFLATE_WBITS,
    CompressionAlgorithm.ZLIB: ZLIB_WBITS,
    CompressionAlgorithm.GZIP: GZIP_WBITS,
}


def align_up(size: int, alignment: int = CONTAINER_ALIGNMENT) -> int:
    """Round size up to the next multiple of alignment."""
    return (size + alignment - 1) // alignment * alignment


def aligned_copy(data: bytes, alignment: int = CONTAINER_ALIGNMENT) -> memoryview:
    """
    Copy data into a scratch buffer whose length is a multiple of alignment.

    The tail is zero-filled. Parsing always works on this copy, never on
    the caller's buffer.
    """
    scratch = bytearray(align_up(len(data), alignment))
    scratch[:len(data)] = data
    return memoryview(scratch)


@dataclass(frozen=True)
class CompressedContainer:
    """
    One decoded container record.

    Attributes:
        algorithm: Compression algorithm of the payload
        payload: Compressed bytes
    """
    algorithm: CompressionAlgorithm
    payload: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> 'CompressedContainer':
        """
        Deserialize a container record.

        Raises:
            ContainerFormatError: If data is not a well-formed container
        """
        if len(data) < CONTAINER_HEADER_SIZE:
            raise ContainerFormatError(
                f"{len(data)} bytes is shorter than the {CONTAINER_HEADER_SIZE}-byte header"
            )

        buf = aligned_copy(data)
        magic, version, algorithm_tag, reserved, payload_length = _HEADER.unpack_from(buf, 0)

        if magic != CONTAINER_MAGIC:
            raise ContainerFormatError(f"bad magic {bytes(magic)!r}")
        if version != CONTAINER_VERSION:
            raise ContainerFormatError(f"unsupported container version {version}")
        try:
            algorithm = CompressionAlgorithm(algorithm_tag)
        except ValueError:
            raise ContainerFormatError(f"unknown algorithm tag {algorithm_tag}") from None
        if reserved != 0:
            raise ContainerFormatError(f"reserved field is 0x{reserved:04X}, expected 0")

        payload_end = CONTAINER_HEADER_SIZE + payload_length
        record_size = align_up(payload_end)
        if record_size > len(buf):
            raise ContainerFormatError(
                f"payload length {payload_length} exceeds buffer of {len(data)} bytes"
            )
        if len(data) > record_size:
            raise ContainerFormatError(
                f"{len(data) - record_size} bytes follow the container record"
            )
        if any(buf[payload_end:record_size]):
            raise ContainerFormatError('non-zero padding after payload')

        return cls(algorithm, bytes(buf[CONTAINER_HEADER_SIZE:payload_end]))

    def to_bytes(self) -> bytes:
        """Serialize with header and zero padding to the alignment boundary."""
        header = _HEADER.pack(
            CONTAINER_MAGIC, CONTAINER_VERSION, int(self.algorithm), 0, len(self.payload)
        )
        body = header + self.payload
        return body + bytes(align_up(len(body)) - len(body))


def compress(
    data: bytes,
    algorithm: CompressionAlgorithm,
    level: int = DEFAULT_COMPRESSION_LEVEL,
) -> CompressedContainer:
    """Compress data into a container record."""
    data = bytes(data)
    if algorithm == CompressionAlgorithm.RAW:
        payload = data
    elif algorithm == CompressionAlgorithm.GZIP:
        # mtime=0 keeps bundles reproducible
        payload = gzip.compress(data, compresslevel=level, mtime=0)
    else:
        compressor = zlib.compressobj(level, zlib.DEFLATED, _WBITS[algorithm])
        payload = compressor.compress(data) + compressor.flush()
    return CompressedContainer(algorithm, payload)


def decompress(container: CompressedContainer) -> bytes:
    """
    Decompress a container payload.

    Raises:
        DecompressionError: If the stream is corrupt, truncated, or
            followed by trailing bytes
    """
    if container.algorithm == CompressionAlgorithm.RAW:
        return container.payload

    decompressor = zlib.decompressobj(_WBITS[container.algorithm])
    try:
        data = decompressor.decompress(container.payload)
    except zlib.error as e:
        raise DecompressionError(f"{container.algorithm.name.lower()} stream: {e}") from e

    if not decompressor.eof:
        raise DecompressionError(f"{container.algorithm.name.lower()} stream is truncated")
    if decompressor.unused_data:
        raise DecompressionError(
            f"{len(decompressor.unused_data)} bytes after end of "
            f"{container.algorithm.name.lower()} stream"
        )
    return data


def encode(
    data: bytes,
    algorithm: CompressionAlgorithm,
    level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """Compress data and serialize the resulting container."""
    return compress(data, algorithm, level).to_bytes()


__all__ = [
    'CompressedContainer',
    'align_up',
    'aligned_copy',
    'compress',
    'decompress',
    'encode',
]
