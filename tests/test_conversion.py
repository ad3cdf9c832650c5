import re
import struct
from datetime import datetime, timedelta, timezone

import pytest
from PIL import Image

from cuutils.cityhash import city_hash32
from cuutils.conversion import (
    ImageFormat,
    Rotator,
    Transform,
    Vector,
    WaveInfo,
    bytes_to_image,
    bytes_to_string,
    compact_bytes_to_transforms,
    compact_position_bytes_to_transforms,
    get_login_id,
    image_to_bytes,
    now_utc_string,
    pcm_to_wav,
    read_wave_info,
    string_to_bytes,
    to_hash_code,
)


def _sample_image():
    image = Image.new("RGBA", (4, 3))
    for x in range(4):
        for y in range(3):
            image.putpixel((x, y), (x * 60, y * 80, 100, 255))
    return image


def test_string_round_trip_unicode():
    text = "héllo wörld ✓"
    assert bytes_to_string(string_to_bytes(text)) == text


def test_string_to_bytes_is_utf8():
    assert string_to_bytes("é") == "é".encode("utf-8")


def test_bytes_to_string_handles_boms():
    assert bytes_to_string(b"\xef\xbb\xbfabc") == "abc"
    assert bytes_to_string(b"\xff\xfe" + "abc".encode("utf-16-le")) == "abc"
    assert bytes_to_string(b"\xfe\xff" + "abc".encode("utf-16-be")) == "abc"


def test_pcm_to_wav_header_layout():
    pcm = bytes(range(8))
    wav = pcm_to_wav(pcm, 16000, 1)
    assert wav[0:4] == b"RIFF"
    assert wav[8:12] == b"WAVE"
    assert wav[12:16] == b"fmt "
    assert wav[36:40] == b"data"
    assert len(wav) == 44 + len(pcm)
    assert wav[44:] == pcm
    assert struct.unpack_from("<I", wav, 4)[0] == len(wav) - 8


def test_wav_round_trip():
    pcm = bytes(range(200)) * 2
    info = read_wave_info(pcm_to_wav(pcm, 22050, 2))
    assert info.sample_data == pcm
    assert info.channels == 2
    assert info.sample_rate == 22050
    assert info.bits_per_sample == 16
    assert info.format_tag == 1
    assert info.block_align == 4
    assert info.byte_rate == 22050 * 4
    assert info.data_size == len(pcm)


def test_wave_duration():
    pcm = bytes(32000)
    info = read_wave_info(pcm_to_wav(pcm, 16000, 1))
    assert info.duration == pytest.approx(1.0)


def test_wave_duration_zero_when_no_rate():
    info = WaveInfo(1, 0, 0, 0, 0, 16, b"\x00\x00")
    assert info.duration == 0.0


@pytest.mark.parametrize(
    "data",
    [b"", b"RIFX\x00\x00\x00\x00WAVE", b"RIFF\x04\x00\x00\x00WAVX", b"RIFF\x04\x00\x00\x00WAVE"],
)
def test_read_wave_info_rejects_bad_data(data):
    with pytest.raises(ValueError):
        read_wave_info(data)


def test_read_wave_info_rejects_truncated_chunk():
    wav = pcm_to_wav(bytes(100), 8000, 1)
    with pytest.raises(ValueError):
        read_wave_info(wav[:-10])


@pytest.mark.parametrize("rate, channels", [(0, 1), (16000, 0), (-1, 2)])
def test_pcm_to_wav_rejects_bad_settings(rate, channels):
    with pytest.raises(ValueError):
        pcm_to_wav(b"", rate, channels)


def test_compact_bytes_to_transforms():
    values = [1.5, 2.5, -3.0, 10.0, 20.0, 30.0, 1.0, 2.0, 0.5]
    second = [0.0, 90.0, 180.0, -1.0, -2.0, -3.0, 4.0, 4.0, 4.0]
    data = struct.pack("<18f", *values, *second)
    transforms = compact_bytes_to_transforms(data)
    assert transforms == [
        Transform(Rotator(1.5, 2.5, -3.0), Vector(10.0, 20.0, 30.0), Vector(1.0, 2.0, 0.5)),
        Transform(Rotator(0.0, 90.0, 180.0), Vector(-1.0, -2.0, -3.0), Vector(4.0, 4.0, 4.0)),
    ]


def test_compact_bytes_to_transforms_rejects_partial_record():
    with pytest.raises(ValueError):
        compact_bytes_to_transforms(struct.pack("<8f", *range(8)))


def test_compact_bytes_empty():
    assert compact_bytes_to_transforms(b"") == []
    assert compact_position_bytes_to_transforms(b"") == []


def test_compact_position_bytes_to_transforms():
    data = struct.pack("<6f", 1.0, 2.0, 3.0, -4.5, 0.25, 8.0)
    transforms = compact_position_bytes_to_transforms(data)
    assert [t.translation for t in transforms] == [Vector(1.0, 2.0, 3.0), Vector(-4.5, 0.25, 8.0)]
    assert all(t.rotation == Rotator() for t in transforms)
    assert all(t.scale == Vector(1.0, 1.0, 1.0) for t in transforms)


def test_compact_position_bytes_rejects_partial_record():
    with pytest.raises(ValueError):
        compact_position_bytes_to_transforms(struct.pack("<4f", 1, 2, 3, 4))


def test_png_round_trip_exact_pixels():
    original = _sample_image()
    data = image_to_bytes(original, ImageFormat.PNG)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    decoded = bytes_to_image(data)
    assert decoded.size == original.size
    assert decoded.mode == "RGBA"
    assert list(decoded.getdata()) == list(original.getdata())


def test_default_format_is_png():
    assert image_to_bytes(_sample_image()).startswith(b"\x89PNG")


def test_jpeg_and_bmp_signatures():
    image = _sample_image()
    assert image_to_bytes(image, ImageFormat.JPEG).startswith(b"\xff\xd8")
    assert image_to_bytes(image, ImageFormat.BMP).startswith(b"BM")


def test_grayscale_jpeg_decodes_gray():
    decoded = bytes_to_image(image_to_bytes(_sample_image(), ImageFormat.GRAYSCALE_JPEG))
    assert decoded.size == (4, 3)
    assert all(r == g == b for r, g, b, _ in decoded.getdata())


@pytest.mark.parametrize("fmt", [ImageFormat.EXR, ImageFormat.INVALID, 99])
def test_image_to_bytes_rejects_unsupported(fmt):
    with pytest.raises(ValueError):
        image_to_bytes(_sample_image(), fmt)


def test_image_to_bytes_rejects_missing_image():
    with pytest.raises(ValueError):
        image_to_bytes(None)


def test_bytes_to_image_rejects_garbage():
    with pytest.raises(ValueError):
        bytes_to_image(b"not an image at all")


def test_now_utc_string_is_current_utc_time():
    value = now_utc_string()
    parsed = datetime.strptime(value, "%Y.%m.%d-%H.%M.%S")
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    assert abs(now - parsed) < timedelta(seconds=5)


def test_login_id_is_stable_hex():
    first = get_login_id()
    assert first == get_login_id()
    assert re.fullmatch(r"[0-9a-f]{32}", first)


def test_to_hash_code_matches_city_hash_signed():
    for text in ["", "a", "hello", "a longer string of text used for hashing"]:
        signed = to_hash_code(text)
        assert -(1 << 31) <= signed < (1 << 31)
        assert signed & 0xFFFFFFFF == city_hash32(text.encode("ascii"))


def test_to_hash_code_replaces_non_ascii():
    assert to_hash_code("caf\u00e9") == to_hash_code("caf?")


def test_to_hash_code_is_deterministic():
    assert to_hash_code("socket.io") == to_hash_code("socket.io")
    assert to_hash_code("abc") != to_hash_code("abd")