# cuutils

Helpers for networked game clients: byte and string conversion, WAV headers,
compact transform decoding, a minimal Opus packet container, image encoding
and decoding, CityHash32, named timers, byte-file helpers and thread
dispatch utilities.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Conversion (`cuutils.conversion`)

```python
from cuutils.conversion import (
    bytes_to_string, string_to_bytes, pcm_to_wav, read_wave_info,
    compact_bytes_to_transforms, compact_position_bytes_to_transforms,
    bytes_to_image, image_to_bytes, ImageFormat, to_hash_code,
)

data = string_to_bytes("héllo")      # UTF-8 bytes, no terminator
text = bytes_to_string(data)         # honours UTF-8 / UTF-16 byte order marks

wav = pcm_to_wav(pcm, 16000, 1)      # 16-bit PCM wrapped in a WAV header
info = read_wave_info(wav)           # WaveInfo; raises ValueError on bad data
print(info.channels, info.sample_rate, info.duration)

transforms = compact_bytes_to_transforms(packed)          # 9 float32 per Transform
positions = compact_position_bytes_to_transforms(packed_xyz)  # 3 float32 per Transform

image = bytes_to_image(png_bytes)    # format detected, returned as an RGBA Pillow image
jpeg = image_to_bytes(image, ImageFormat.JPEG)

code = to_hash_code("player-name")   # signed 32-bit CityHash32
```

- `compact_bytes_to_transforms` reads records of
  `[pitch, yaw, roll, x, y, z, sx, sy, sz]` into `Transform(Rotator, Vector, Vector)`;
  it raises `ValueError` when the float count is not a multiple of 9 (3 for
  the position variant).
- `image_to_bytes` supports PNG, JPEG, GRAYSCALE_JPEG, BMP, ICO and ICNS;
  any other `ImageFormat` raises `ValueError`.
- `now_utc_string()` returns the current UTC time as `YYYY.MM.DD-HH.MM.SS`;
  `get_login_id()` returns a hex digest built from the machine's node id and
  the current user name.

## Opus packet container (`cuutils.opus_stream`)

`OpusMinimalStream` holds packet sizes and the compressed bytes of a stream.
`serialize_minimal` writes it as a little-endian int32 packet count, the
int16 packet sizes, then the compressed bytes; `deserialize_minimal` reads it
back and raises `ValueError` on truncated or malformed input.
`OpusCoderSettings` carries sample rate, channels, bitrate and frame length,
and derives `frame_size`, `max_frame_size` and `bytes_per_frame`.
`split_pcm_frames(pcm, bytes_per_frame)` yields fixed-size frames, zero
padding the last one.

## Hashing (`cuutils.cityhash`)

`city_hash32(data)` returns the unsigned 32-bit CityHash (v1.1) of a byte string.

## Timing (`cuutils.timer`)

```python
from cuutils.timer import MeasureTimer, ScopeTimer, measure_timer_start, measure_timer_stop

measure_timer_start("load")
...
elapsed_ms = measure_timer_stop("load", True)   # logs and returns milliseconds

with ScopeTimer("decode") as scope:
    ...
print(scope.elapsed)
```

Stopping a category that was never started logs a warning and returns 0.0.
A `MeasureTimer` instance keeps its own set of categories.

## Files (`cuutils.files`)

- `split_full_path(path)` → `(directory, file_name)`, split at the last `/`
  (or the last double backslash); `("", "")` when neither is found.
- `project_relative_path(full_path, project_dir)` → text after `project_dir`.
- `save_bytes_to_file(data, directory, file_name, log_save)` and
  `save_bytes_to_path(data, path, log_save)` create directories as needed and
  return the absolute path written; failures raise `OSError`.
- `read_bytes_from_file(directory, file_name)` and `read_bytes_from_path(path)`
  return the file's bytes.
- `delete_file_at_path(path)` returns whether a file was deleted.
- `ProjectPaths(root)` gives `contents_directory` (`Content`),
  `saved_directory` and `external_save_directory` (both `Saved`).

## Threading (`cuutils.runnable`)

`run_on_background_thread` and `run_on_thread_pool` return futures.
`set_timeout(on_done, duration, dispatcher)` calls `on_done` after a delay,
queued on the dispatcher if one is given. A `GameThreadDispatcher` queues
callables that its creating thread runs with `pump()`.
`call_function_on_thread(target, function_name, thread_type, dispatcher, latent_action)`
calls a named method on the chosen `CallbackType`: `GAME_THREAD` runs it at
once on the owning thread or posts it to the dispatcher; both background
types use the shared thread pool. A `LatentAction` is marked called when the
method finishes, or straight away when the target or method is missing.

## What this package does not do

It contains no Opus encoder or decoder: it only stores, serializes and
frames Opus packet data, so there is no WAV-to-Opus or Opus-to-WAV
conversion. It has no engine texture or sound objects; images are Pillow
images and audio is plain WAV bytes.