"""Byte, WAV, Opus packet container, image, hashing, file, timing and threading utilities."""

__version__ = "0.1.0"

__all__ = ["cityhash", "conversion", "files", "opus_stream", "runnable", "timer"]