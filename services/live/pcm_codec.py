"""16-bit PCM conversion for live audio frames.

Audio travels as mono signed 16-bit little-endian PCM at 16 kHz. Capture
samples are floats in [-1, 1]; they are clamped, scaled by 0x7FFF and
truncated toward zero, so -1.0 maps to -32767 rather than -32768. The SDK
base64-encodes the raw PCM when it sends a realtime-input blob.
"""

from __future__ import annotations

import numpy as np

SAMPLE_RATE = 16000
FRAME_SAMPLES = 4096
PCM_SCALE = 0x7FFF
PCM_MIME_TYPE = f"audio/pcm;rate={SAMPLE_RATE}"


def float_to_pcm16(samples) -> bytes:
	"""Quantize float samples to little-endian int16 PCM bytes."""
	floats = np.asarray(samples, dtype=np.float32)
	# NaN is silence; infinities clamp to full scale below
	floats = np.clip(np.nan_to_num(floats, nan=0.0, posinf=1.0, neginf=-1.0), -1.0, 1.0)
	return (floats * PCM_SCALE).astype("<i2").tobytes()


def pcm16_to_float(pcm: bytes) -> np.ndarray:
	"""Convert little-endian int16 PCM bytes to float32 samples."""
	if len(pcm) % 2:
		# Odd trailing byte cannot form a sample
		pcm = pcm[:-1]
	ints = np.frombuffer(pcm, dtype="<i2")
	return ints.astype(np.float32) / PCM_SCALE


def samples_from_bytes(raw: bytes) -> np.ndarray:
	"""Read a frame of little-endian float32 samples sent by the browser."""
	if len(raw) % 4:
		raise ValueError("Audio frame length must be a multiple of 4 bytes.")
	return np.frombuffer(raw, dtype="<f4")


def samples_to_bytes(samples: np.ndarray) -> bytes:
	"""Serialize float samples as little-endian float32 bytes."""
	return np.asarray(samples, dtype="<f4").tobytes()
