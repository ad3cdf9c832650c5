"""Minimal Opus packet stream container, its wire format and coder settings."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

_COUNT = struct.Struct("<i")
_SAMPLE_BYTES = 2  # 16-bit PCM


@dataclass
class OpusMinimalStream:
    """Compressed Opus packets stored back to back with their sizes."""

    packet_sizes: list[int] = field(default_factory=list)
    compressed_bytes: bytes = b""


@dataclass
class OpusCoderSettings:
    """Settings shared by the encoder and decoder of a stream."""

    sample_rate: int = 16000
    channels: int = 1
    bit_rate: int = 24000
    max_packet_size: int = 3 * 1276
    frame_size_ms: int = 60
    reset_between_encoding: bool = True
    application_voip: bool = True
    lowest_possible_latency: bool = False

    @property
    def frame_size(self) -> int:
        """Samples per channel in one frame."""
        return (self.sample_rate * self.frame_size_ms) // 1000

    @property
    def max_frame_size(self) -> int:
        return self.frame_size * 6

    @property
    def bytes_per_frame(self) -> int:
        """Bytes of 16-bit interleaved PCM in one frame."""
        return self.frame_size * self.channels * _SAMPLE_BYTES


def serialize_minimal(stream: OpusMinimalStream) -> bytes:
    """Pack a stream as: int32 packet count, int16 sizes, compressed bytes."""
    count = len(stream.packet_sizes)
    try:
        sizes = struct.pack(f"<{count}h", *stream.packet_sizes)
    except struct.error as exc:
        raise ValueError(f"packet size does not fit in 16 bits: {exc}") from exc
    return _COUNT.pack(count) + sizes + bytes(stream.compressed_bytes)


def deserialize_minimal(data: bytes | bytearray | memoryview) -> OpusMinimalStream:
    """Unpack bytes written by :func:`serialize_minimal`."""
    data = bytes(data)
    if len(data) < _COUNT.size:
        raise ValueError("serialized stream is shorter than its packet count header")
    (count,) = _COUNT.unpack_from(data)
    if count < 0:
        raise ValueError(f"negative packet count: {count}")
    sizes_end = _COUNT.size + count * 2
    if len(data) < sizes_end:
        raise ValueError(f"serialized stream too short for {count} packet sizes")
    sizes = list(struct.unpack_from(f"<{count}h", data, _COUNT.size))
    return OpusMinimalStream(packet_sizes=sizes, compressed_bytes=data[sizes_end:])


def split_pcm_frames(pcm: bytes | bytearray | memoryview, bytes_per_frame: int) -> Iterator[bytes]:
    """Yield frames of ``bytes_per_frame`` bytes; the last one is zero padded."""
    if bytes_per_frame <= 0:
        raise ValueError("bytes_per_frame must be positive")
    pcm = bytes(pcm)
    for offset in range(0, len(pcm), bytes_per_frame):
        frame = pcm[offset:offset + bytes_per_frame]
        yield frame.ljust(bytes_per_frame, b"\x00")