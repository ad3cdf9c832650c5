"""Conversions between raw bytes and strings, WAV audio, transforms and images."""

from __future__ import annotations

import enum
import getpass
import hashlib
import io
import logging
import struct
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from PIL import Image, UnidentifiedImageError

from .cityhash import city_hash32

logger = logging.getLogger(__name__)

_PCM_BITS = 16
_RIFF_HEADER = struct.Struct("<4sI4s")
_CHUNK_HEADER = struct.Struct("<4sI")
_FMT_BODY = struct.Struct("<HHIIHH")


# ---------------------------------------------------------------- strings


def bytes_to_string(data: bytes | bytearray | memoryview) -> str:
    """Decode text bytes, honouring a UTF-16 or UTF-8 byte order mark."""
    data = bytes(data)
    if data.startswith(b"\xff\xfe"):
        return data[2:].decode("utf-16-le", errors="replace")
    if data.startswith(b"\xfe\xff"):
        return data[2:].decode("utf-16-be", errors="replace")
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]
    return data.decode("utf-8", errors="replace")


def string_to_bytes(text: str) -> bytes:
    """Encode ``text`` as UTF-8 without a terminator."""
    return text.encode("utf-8")


# ---------------------------------------------------------------- wave audio


@dataclass(frozen=True)
class WaveInfo:
    """Header values and sample data of a RIFF/WAVE file."""

    format_tag: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    sample_data: bytes

    @property
    def data_size(self) -> int:
        return len(self.sample_data)

    @property
    def duration(self) -> float:
        """Length of the audio in seconds, 0.0 if the header gives no rate."""
        divisor = self.channels * self.bits_per_sample * self.sample_rate
        if not divisor:
            return 0.0
        return self.data_size * 8.0 / divisor


def pcm_to_wav(pcm: bytes | bytearray | memoryview, sample_rate: int, channels: int) -> bytes:
    """Wrap 16-bit interleaved PCM in a canonical WAV header."""
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if channels <= 0:
        raise ValueError(f"channels must be positive, got {channels}")
    pcm = bytes(pcm)
    block_align = channels * _PCM_BITS // 8
    byte_rate = sample_rate * block_align
    fmt = _FMT_BODY.pack(1, channels, sample_rate, byte_rate, block_align, _PCM_BITS)
    body = (
        b"WAVE"
        + _CHUNK_HEADER.pack(b"fmt ", len(fmt))
        + fmt
        + _CHUNK_HEADER.pack(b"data", len(pcm))
        + pcm
    )
    return b"RIFF" + struct.pack("<I", len(body)) + body


def read_wave_info(data: bytes | bytearray | memoryview) -> WaveInfo:
    """Parse a WAV file; raises ValueError when it is not a readable wave."""
    data = bytes(data)
    if len(data) < _RIFF_HEADER.size:
        raise ValueError("data too short for a RIFF header")
    riff, _, wave = _RIFF_HEADER.unpack_from(data)
    if riff != b"RIFF":
        raise ValueError("missing RIFF tag")
    if wave != b"WAVE":
        raise ValueError("missing WAVE tag")

    fmt: tuple[int, ...] | None = None
    sample_data: bytes | None = None
    offset = _RIFF_HEADER.size
    while offset + _CHUNK_HEADER.size <= len(data):
        tag, size = _CHUNK_HEADER.unpack_from(data, offset)
        start = offset + _CHUNK_HEADER.size
        end = start + size
        if end > len(data):
            raise ValueError(f"chunk {tag!r} runs past the end of the data")
        if tag == b"fmt ":
            if size < _FMT_BODY.size:
                raise ValueError("fmt chunk too short")
            fmt = _FMT_BODY.unpack_from(data, start)
        elif tag == b"data":
            sample_data = data[start:end]
        offset = end + (size & 1)

    if fmt is None:
        raise ValueError("missing fmt chunk")
    if sample_data is None:
        raise ValueError("missing data chunk")
    format_tag, channels, sample_rate, byte_rate, block_align, bits = fmt
    return WaveInfo(
        format_tag=format_tag,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits,
        sample_data=sample_data,
    )


# ---------------------------------------------------------------- transforms


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Rotator:
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass(frozen=True)
class Transform:
    rotation: Rotator = field(default_factory=Rotator)
    translation: Vector = field(default_factory=Vector)
    scale: Vector = field(default_factory=lambda: Vector(1.0, 1.0, 1.0))


def _float_view(data: bytes | bytearray | memoryview) -> tuple[float, ...]:
    data = bytes(data)
    count = len(data) // 4
    return struct.unpack_from(f"<{count}f", data)


def compact_bytes_to_transforms(data: bytes | bytearray | memoryview) -> list[Transform]:
    """Read float32 records [pitch, yaw, roll, x, y, z, sx, sy, sz]."""
    floats = _float_view(data)
    if len(floats) % 9:
        raise ValueError("float array is not divisible by 9")
    records = (floats[i:i + 9] for i in range(0, len(floats), 9))
    return [
        Transform(Rotator(*rec[0:3]), Vector(*rec[3:6]), Vector(*rec[6:9]))
        for rec in records
    ]


def compact_position_bytes_to_transforms(data: bytes | bytearray | memoryview) -> list[Transform]:
    """Read float32 records [x, y, z] as translation-only transforms."""
    floats = _float_view(data)
    if len(floats) % 3:
        raise ValueError("float array is not divisible by 3")
    return [Transform(translation=Vector(*floats[i:i + 3])) for i in range(0, len(floats), 3)]


# ---------------------------------------------------------------- images


class ImageFormat(enum.IntEnum):
    """Compressed image formats understood by :func:`image_to_bytes`."""

    PNG = 0
    JPEG = 1
    GRAYSCALE_JPEG = 2
    BMP = 3
    ICO = 4
    EXR = 5
    ICNS = 6
    INVALID = 254


_PIL_FORMATS = {
    ImageFormat.PNG: ("PNG", "RGBA"),
    ImageFormat.JPEG: ("JPEG", "RGB"),
    ImageFormat.GRAYSCALE_JPEG: ("JPEG", "L"),
    ImageFormat.BMP: ("BMP", "RGBA"),
    ImageFormat.ICO: ("ICO", "RGBA"),
    ImageFormat.ICNS: ("ICNS", "RGBA"),
}


def bytes_to_image(data: bytes | bytearray | memoryview) -> Image.Image:
    """Decode compressed image bytes, detecting the format, into an RGBA image."""
    try:
        with Image.open(io.BytesIO(bytes(data))) as image:
            image.load()
            return image.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"invalid image format, cannot decode: {exc}") from exc


def image_to_bytes(image: Image.Image, image_format: ImageFormat = ImageFormat.PNG) -> bytes:
    """Compress ``image`` in the given format."""
    if image is None:
        raise ValueError("no image given")
    try:
        pil_format, mode = _PIL_FORMATS[ImageFormat(image_format)]
    except (KeyError, ValueError):
        raise ValueError(f"unsupported image format: {image_format!r}") from None
    buffer = io.BytesIO()
    image.convert(mode).save(buffer, format=pil_format)
    return buffer.getvalue()


# ---------------------------------------------------------------- misc


def now_utc_string() -> str:
    """Current UTC time as ``YYYY.MM.DD-HH.MM.SS``."""
    return datetime.now(timezone.utc).strftime("%Y.%m.%d-%H.%M.%S")


def get_login_id() -> str:
    """A stable hex identifier for the current user on this machine."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = ""
    seed = f"{uuid.getnode():012x}:{user}".encode("utf-8")
    return hashlib.md5(seed).hexdigest()


def to_hash_code(text: str) -> int:
    """Signed 32-bit CityHash of the ANSI form of ``text``."""
    value = city_hash32(text.encode("ascii", errors="replace"))
    return value - (1 << 32) if value >= (1 << 31) else value