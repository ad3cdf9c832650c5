"""32-bit CityHash (version 1.1) over raw bytes."""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593
_MUR_ADD = 0xE6546B64


def _rotate(value: int, shift: int) -> int:
    """Rotate a 32-bit value right by ``shift`` bits."""
    if shift == 0:
        return value
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def _mur(a: int, h: int) -> int:
    a = (a * _C1) & _MASK
    a = _rotate(a, 17)
    a = (a * _C2) & _MASK
    h ^= a
    h = _rotate(h, 19)
    return (h * 5 + _MUR_ADD) & _MASK


def _fetch(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 4], "little")


def _bswap(value: int) -> int:
    return int.from_bytes(value.to_bytes(4, "little"), "big")


def _hash_len_0_to_4(data: bytes) -> int:
    b = 0
    c = 9
    for byte in data:
        signed = byte - 256 if byte >= 128 else byte
        b = (b * _C1 + signed) & _MASK
        c ^= b
    return _fmix(_mur(b, _mur(len(data), c)))


def _hash_len_5_to_12(data: bytes) -> int:
    length = len(data)
    a = length
    b = length * 5
    c = 9
    d = b
    a = (a + _fetch(data, 0)) & _MASK
    b = (b + _fetch(data, length - 4)) & _MASK
    c = (c + _fetch(data, (length >> 1) & 4)) & _MASK
    return _fmix(_mur(c, _mur(b, _mur(a, d))))


def _hash_len_13_to_24(data: bytes) -> int:
    length = len(data)
    a = _fetch(data, (length >> 1) - 4)
    b = _fetch(data, 4)
    c = _fetch(data, length - 8)
    d = _fetch(data, length >> 1)
    e = _fetch(data, 0)
    f = _fetch(data, length - 4)
    h = length
    return _fmix(_mur(f, _mur(e, _mur(d, _mur(c, _mur(b, _mur(a, h)))))))


def _scramble(value: int) -> int:
    return (_rotate((value * _C1) & _MASK, 17) * _C2) & _MASK


def _step(h: int, shift: int) -> int:
    return (_rotate(h, shift) * 5 + _MUR_ADD) & _MASK


def city_hash32(data: bytes | bytearray | memoryview) -> int:
    """Return the unsigned 32-bit CityHash of ``data``."""
    if isinstance(data, str):
        raise TypeError("city_hash32 expects bytes, not str")
    data = bytes(data)
    length = len(data)
    if length <= 4:
        return _hash_len_0_to_4(data)
    if length <= 12:
        return _hash_len_5_to_12(data)
    if length <= 24:
        return _hash_len_13_to_24(data)

    h = length
    g = (_C1 * length) & _MASK
    f = g
    a0 = _scramble(_fetch(data, length - 4))
    a1 = _scramble(_fetch(data, length - 8))
    a2 = _scramble(_fetch(data, length - 16))
    a3 = _scramble(_fetch(data, length - 12))
    a4 = _scramble(_fetch(data, length - 20))
    h = _step(h ^ a0, 19)
    h = _step(h ^ a2, 19)
    g = _step(g ^ a1, 19)
    g = _step(g ^ a3, 19)
    f = _step((f + a4) & _MASK, 19)

    iterations = (length - 1) // 20
    for block in range(iterations):
        offset = block * 20
        a0 = _scramble(_fetch(data, offset))
        a1 = _fetch(data, offset + 4)
        a2 = _scramble(_fetch(data, offset + 8))
        a3 = _scramble(_fetch(data, offset + 12))
        a4 = _fetch(data, offset + 16)
        h = _step(h ^ a0, 18)
        f = (f + a1) & _MASK
        f = (_rotate(f, 19) * _C1) & _MASK
        g = _step((g + a2) & _MASK, 18)
        h = _step(h ^ ((a3 + a1) & _MASK), 19)
        g ^= a4
        g = (_bswap(g) * 5) & _MASK
        h = (h + a4 * 5) & _MASK
        h = _bswap(h)
        f = (f + a0) & _MASK
        f, h, g = g, f, h

    g = (_rotate(g, 11) * _C1) & _MASK
    g = (_rotate(g, 17) * _C1) & _MASK
    f = (_rotate(f, 11) * _C1) & _MASK
    f = (_rotate(f, 17) * _C1) & _MASK
    h = _rotate((h + g) & _MASK, 19)
    h = (h * 5 + _MUR_ADD) & _MASK
    h = (_rotate(h, 17) * _C1) & _MASK
    h = _rotate((h + f) & _MASK, 19)
    h = (h * 5 + _MUR_ADD) & _MASK
    h = (_rotate(h, 17) * _C1) & _MASK
    return h