"""
Plot the PCM levels of a cassette WAV over time.

Meant for eyeballing the output of p6towav: the carrier tone, the start bit
of each frame and the 1200/2400 Hz bit cells are easy to tell apart once
the view is cropped to a few milliseconds.

Usage:
  python plot_tape_wave.py game.wav --start 1.999 --end 2.012
  python plot_tape_wave.py game.wav --save carrier.png --end 0.005
"""

from __future__ import annotations

import argparse
import os
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np
import scipy.io.wavfile as wav


def read_tape_wav(path: str) -> Tuple[np.ndarray, np.ndarray, int]:
	"""Read a WAV file.

	Returns:
	  (times_seconds, samples, rate)
	where times start at 0 for the first sample. Only the first channel is
	kept for multi-channel files.
	"""
	if not os.path.isfile(path):
		raise FileNotFoundError(f"Input file does not exist: {path}")

	rate, samples = wav.read(path)
	if samples.ndim > 1:
		samples = samples[:, 0]
	if samples.size == 0:
		raise ValueError("WAV file contains no samples.")

	times_seconds = np.arange(samples.size) / float(rate)
	return times_seconds, samples, rate


def plot_tape_wave(
	times_seconds: np.ndarray,
	samples: np.ndarray,
	title: str,
	save_path: str | None = None,
) -> None:
	plt.figure(figsize=(11, 4))
	plt.plot(times_seconds * 1000.0, samples, drawstyle="steps-post", linewidth=0.8)
	plt.xlabel("Time (ms)")
	plt.ylabel("Level")
	plt.title(title)
	plt.grid(True, linestyle=":", alpha=0.5)
	plt.tight_layout()

	if save_path:
		plt.savefig(save_path, dpi=150)
		plt.close()
		print(f"Saved plot to: {save_path}")
	else:
		plt.show()


def crop_time_range(
	times_seconds: np.ndarray,
	samples: np.ndarray,
	start_s: float | None,
	end_s: float | None,
) -> Tuple[np.ndarray, np.ndarray]:
	"""Return a time-cropped view of the data. Keeps points where start_s <= t <= end_s.

	If start_s or end_s is None, the corresponding bound is unbounded.
	"""
	if start_s is not None and end_s is not None and start_s > end_s:
		raise ValueError(f"Invalid range: start ({start_s}) must be <= end ({end_s}).")

	mask = np.ones(times_seconds.shape, dtype=bool)
	if start_s is not None:
		mask &= times_seconds >= start_s
	if end_s is not None:
		mask &= times_seconds <= end_s
	if not mask.any():
		raise ValueError("No samples fall within the requested time range.")

	return times_seconds[mask], samples[mask]


def main() -> None:
	parser = argparse.ArgumentParser(description="Plot the levels of a cassette WAV over time.")
	parser.add_argument("input_file", help="Path to the WAV file.")
	parser.add_argument(
		"--save",
		dest="save",
		default=None,
		help="Optional path to save the plot instead of displaying it.",
	)
	parser.add_argument(
		"--start",
		dest="start",
		type=float,
		default=None,
		help="Start time in seconds for cropping (inclusive).",
	)
	parser.add_argument(
		"--end",
		dest="end",
		type=float,
		default=None,
		help="End time in seconds for cropping (inclusive).",
	)
	args = parser.parse_args()

	times_seconds, samples, rate = read_tape_wav(args.input_file)
	if args.start is not None or args.end is not None:
		times_seconds, samples = crop_time_range(times_seconds, samples, args.start, args.end)
		range_str = (
			f" [t in {args.start if args.start is not None else 0}-{args.end if args.end is not None else 'end'} s]"
		)
	else:
		range_str = ""

	title = f"{os.path.basename(args.input_file)} @ {rate} Hz{range_str}"
	plot_tape_wave(times_seconds, samples, title=title, save_path=args.save)


if __name__ == "__main__":
	main()
