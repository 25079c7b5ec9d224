import random

import pytest

from pingpong.animations_motion import effective_size
from pingpong.animations_signal import (
    BACKBONE_CHARS,
    MUTATION,
    generate_dna_animation,
    generate_waveform_animation,
)


class _ZeroRandom:
    def getrandbits(self, k):
        return 0


@pytest.mark.parametrize("width,height", [(44, 26), (3, 3), (80, 40), (44, 7)])
def test_dna_dimensions(width, height):
    eff_w, eff_h = effective_size(width, height)
    lines = generate_dna_animation(1.3, width, height, 30.0, random.Random(1)).split("\n")
    assert len(lines) == eff_h
    assert all(len(line) == eff_w for line in lines)


def test_dna_stable_status():
    lines = generate_dna_animation(0.0, 44, 26, 10.0).split("\n")
    assert "DNA:STABLE RTT:10.0ms" in lines[-1]


def test_dna_degraded_status_without_mutations():
    output = generate_dna_animation(0.0, 44, 26, 100.0)
    assert "DNA:DEGRADED" in output.split("\n")[-1]
    assert MUTATION not in output


def test_dna_mutations_use_rng():
    lines = generate_dna_animation(0.0, 44, 26, 200.0, _ZeroRandom()).split("\n")
    assert lines[0][0] == MUTATION
    assert "DNA:MUTATING" in lines[-1]


def test_dna_reproducible_with_seeded_rng():
    first = generate_dna_animation(2.0, 60, 30, 250.0, random.Random(7))
    second = generate_dna_animation(2.0, 60, 30, 250.0, random.Random(7))
    assert first == second


def test_dna_nan_rtt_formats_like_source():
    lines = generate_dna_animation(0.0, 44, 26, float("nan")).split("\n")
    assert "RTT:NaNms" in lines[-1]


def test_dna_draws_backbone():
    output = generate_dna_animation(0.4, 44, 26, 20.0)
    assert any(char in output for char in BACKBONE_CHARS)


@pytest.mark.parametrize("width,height", [(44, 26), (3, 3), (80, 40)])
def test_waveform_dimensions(width, height):
    eff_w, eff_h = effective_size(width, height)
    lines = generate_waveform_animation(0.9, width, height, 80.0).split("\n")
    assert len(lines) == eff_h
    assert all(len(line) == eff_w for line in lines)


def test_waveform_status_lines():
    lines = generate_waveform_animation(0.0, 44, 26, 10.0).split("\n")
    assert "SIG:STRONG 0kHz" in lines[0]
    assert "RTT:10.0ms 100Hz" in lines[-1]


def test_waveform_weak_signal_label():
    lines = generate_waveform_animation(0.0, 44, 26, 400.0).split("\n")
    assert "SIG:WEAK" in lines[0]


def test_waveform_nan_rtt_uses_floor_frequency():
    lines = generate_waveform_animation(0.0, 44, 26, float("nan")).split("\n")
    assert "RTT:NaNms 1000Hz" in lines[-1]


def test_waveform_draws_trace():
    output = generate_waveform_animation(1.5, 44, 26, 60.0)
    assert any(char in output for char in "█▓▒░")


@pytest.mark.parametrize("width,height", [(44, 8), (10, 26)])
def test_waveform_too_small_raises(width, height):
    with pytest.raises(ValueError):
        generate_waveform_animation(0.0, width, height, 50.0)


def test_waveform_deterministic():
    frames = {generate_waveform_animation(3.0, 50, 30, 120.0) for _ in range(3)}
    assert len(frames) == 1
    (frame,) = frames
    lines = frame.split("\n")
    assert len(lines) == 24
    assert "SIG:MEDIUM" in lines[0]
    assert "RTT:120.0ms 8Hz" in lines[-1]