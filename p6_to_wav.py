"""
Convert a PC-6001 cassette image (.p6) into an 8-bit mono WAV file.

Usage:
  p6towav game.p6 game.wav
  python p6_to_wav.py game.p6 game.wav

The WAV plays back the 1200 baud FSK signal the tape interface expects, so
it can be fed to real hardware or an emulator's cassette input.
"""

from __future__ import annotations

import argparse
import io
import os
import sys
from typing import List, Optional, Tuple

import numpy as np
import scipy.io.wavfile as wav

from tape_audio import SAMPLE_RATE, block_sample_count, encode_block
from tape_format import Block, TapeKind, classify, describe, plan_blocks


def expected_sample_count(buffer: bytes, blocks: Optional[List[Block]] = None) -> int:
    if blocks is None:
        blocks = plan_blocks(buffer)
    return sum(
        block_sample_count(len(block.payload), block.use_short_header)
        for block in blocks
    )


def encode_tape(buffer: bytes) -> Tuple[TapeKind, np.ndarray]:
    """Classify `buffer` and render every planned block, in order.

    Returns the classification and the uint8 samples of all blocks back to
    back. The output array is sized from the plan up front and each block is
    rendered into its slice.
    """
    kind = classify(buffer)
    blocks = plan_blocks(buffer, kind)
    samples = np.empty(expected_sample_count(buffer, blocks), dtype=np.uint8)
    pos = 0
    for block in blocks:
        rendered = encode_block(block.payload, block.use_short_header)
        samples[pos:pos + len(rendered)] = rendered
        pos += len(rendered)
    if pos != len(samples):
        raise RuntimeError(f"Rendered {pos} samples, planned {len(samples)}")
    return kind, samples


def write_container(samples: np.ndarray, target) -> None:
    # uint8 mono data gives the plain 44-byte PCM header (fmt size 16,
    # byte rate == sample rate, block align 1, 8 bits per sample).
    wav.write(target, SAMPLE_RATE, np.asarray(samples, dtype=np.uint8))


def container_bytes(samples: np.ndarray) -> bytes:
    buf = io.BytesIO()
    write_container(samples, buf)
    return buf.getvalue()


def convert_file(input_path: str, output_path: str) -> TapeKind:
    with open(input_path, "rb") as f:
        buffer = f.read()

    kind, samples = encode_tape(buffer)
    print(describe(kind), file=sys.stderr)

    # Render fully before touching the output. An output that cannot be
    # opened is left as it was; one that fails mid-write is removed.
    data = container_bytes(samples)
    f = open(output_path, "wb")
    try:
        with f:
            f.write(data)
    except OSError:
        os.remove(output_path)
        raise

    print(f"Wrote {output_path}")
    print(f"Image: {len(buffer)} bytes  |  Samples: {len(samples)}  |  Duration: {len(samples) / SAMPLE_RATE:.2f} s")
    return kind


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="p6towav",
        description="Convert a PC-6001 tape image to an 8-bit mono WAV.",
    )
    parser.add_argument("input", help="Input tape image (.p6)")
    parser.add_argument("output", help="Output WAV path")
    args = parser.parse_args(argv)

    try:
        convert_file(args.input, args.output)
    except OSError as e:
        print(f"p6towav: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
