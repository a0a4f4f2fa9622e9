import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
import scipy.io.wavfile as wav

from plot_tape_wave import crop_time_range, plot_tape_wave, read_tape_wav
from tape_audio import SAMPLE_RATE, encode_block


@pytest.fixture
def tape_wav(tmp_path):
    path = tmp_path / "tape.wav"
    wav.write(str(path), SAMPLE_RATE, encode_block(b"\x42", use_short_header=True))
    return path


def test_read_tape_wav(tape_wav):
    times, samples, rate = read_tape_wav(str(tape_wav))
    assert rate == SAMPLE_RATE
    assert len(times) == len(samples) == 9600 + 192
    assert times[0] == 0.0
    assert times[1] == pytest.approx(1.0 / SAMPLE_RATE)


def test_read_tape_wav_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_tape_wav(str(tmp_path / "missing.wav"))


def test_read_tape_wav_empty(tmp_path):
    path = tmp_path / "empty.wav"
    wav.write(str(path), SAMPLE_RATE, np.zeros(0, dtype=np.uint8))
    with pytest.raises(ValueError):
        read_tape_wav(str(path))


def test_crop_time_range():
    times = np.arange(10) / 10.0
    samples = np.arange(10, dtype=np.uint8)
    t, s = crop_time_range(times, samples, 0.2, 0.5)
    assert s.tolist() == [2, 3, 4, 5]
    t, s = crop_time_range(times, samples, None, 0.1)
    assert s.tolist() == [0, 1]


def test_crop_time_range_errors():
    times = np.arange(10) / 10.0
    samples = np.arange(10, dtype=np.uint8)
    with pytest.raises(ValueError):
        crop_time_range(times, samples, 0.5, 0.2)
    with pytest.raises(ValueError):
        crop_time_range(times, samples, 5.0, None)


def test_plot_tape_wave_saves(tape_wav, tmp_path, capsys):
    times, samples, _ = read_tape_wav(str(tape_wav))
    out = tmp_path / "plot.png"
    plot_tape_wave(times, samples, title="tape", save_path=str(out))
    assert out.exists() and out.stat().st_size > 0
    assert "Saved plot to" in capsys.readouterr().out
