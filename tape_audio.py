# Square-wave FSK synthesis for PC-6001 style cassette audio.
# Bytes are sent UART style (1 start bit, 8 data bits LSB first, 3 stop bits)
# at 1200 baud, each bit rendered as a burst of square wave at one of two
# tones. Everything here produces unsigned 8-bit PCM samples as numpy arrays.
import numpy as np

# Constants matching the PC-6001 tape interface
SAMPLE_RATE = 19200
TAPE_BAUD = 1200
BIT0_FREQ = TAPE_BAUD       # Logic 0 (long wave)
BIT1_FREQ = TAPE_BAUD * 2   # Logic 1 (short wave), also the carrier tone
BIT_SAMPLES = SAMPLE_RATE // TAPE_BAUD
STOP_BITS = 3
FRAME_BITS = 1 + 8 + STOP_BITS

LONG_HEADER_MS = 2000
SHORT_HEADER_MS = 500

HIGH = 0xFF
LOW = 0x00

if SAMPLE_RATE % (TAPE_BAUD * 2) != 0:
    raise ValueError("SAMPLE_RATE should be a multiple of TAPE_BAUD * 2")


# This function generates a square wave of exactly sample_count samples.
# The level starts HIGH and flips every SAMPLE_RATE // (2 * frequency)
# samples; a trailing partial half-cycle is cut off, not rounded.
def generate_square_wave(frequency, sample_count):
    if frequency <= 0 or frequency * 2 > SAMPLE_RATE:
        raise ValueError(f"Frequency {frequency} Hz cannot be sampled at {SAMPLE_RATE} Hz")
    if sample_count < 0:
        raise ValueError(f"Negative sample count: {sample_count}")
    samples_per_half = SAMPLE_RATE // (frequency * 2)
    half_cycle = np.arange(sample_count) // samples_per_half
    return np.where(half_cycle % 2 == 0, HIGH, LOW).astype(np.uint8)


# One bit period of tone. The phase restarts HIGH for every bit.
def encode_bit(bit):
    freq = BIT1_FREQ if bit else BIT0_FREQ
    return generate_square_wave(freq, BIT_SAMPLES)


def byte_to_bits(byte):
    """Frame bits for one byte: start bit, data bits LSB first, stop bits."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Not a byte value: {byte}")
    return [0] + [(byte >> i) & 1 for i in range(8)] + [1] * STOP_BITS


def encode_byte(byte):
    return np.concatenate([encode_bit(bit) for bit in byte_to_bits(byte)])


# Every possible frame, indexed by byte value, so whole payloads can be
# rendered with a single fancy-indexing lookup.
FRAME_TABLE = np.stack([encode_byte(b) for b in range(256)])


def preamble_samples(use_short_header=False):
    header_ms = SHORT_HEADER_MS if use_short_header else LONG_HEADER_MS
    return SAMPLE_RATE * header_ms // 1000


def block_sample_count(payload_len, use_short_header=False):
    return preamble_samples(use_short_header) + payload_len * FRAME_BITS * BIT_SAMPLES


def encode_block(payload, use_short_header=False):
    """Render one tape block: carrier tone followed by back-to-back byte frames.

    `payload` is any bytes-like object. The carrier runs for 500 ms with a
    short header and 2000 ms otherwise, converted to samples with floor
    division.
    """
    carrier = generate_square_wave(BIT1_FREQ, preamble_samples(use_short_header))
    data = np.frombuffer(bytes(payload), dtype=np.uint8)
    frames = FRAME_TABLE[data].reshape(-1)
    return np.concatenate([carrier, frames])
