"""Procedural noise for the cosmos dust texture.

Each octave is a coarse lattice of sequence draws, upsampled to the
canvas with quintic-smoothed bilinear weights.
"""

import numpy as np


def _smoothstep5(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def _axis(length, cell):
    """Lattice index and smoothed weight for every pixel along one axis."""
    pos = np.arange(length, dtype=np.float64) / cell
    index = pos.astype(int)
    return index, _smoothstep5(pos - index)


def _upsample(lattice, height, width, cell):
    """Interpolate a lattice of values onto a height x width grid."""
    rows, ty = _axis(height, cell)
    cols, tx = _axis(width, cell)

    top = lattice[rows]
    bottom = lattice[rows + 1]
    ty = ty[:, None]
    blend = top + (bottom - top) * ty
    left = blend[:, cols]
    right = blend[:, cols + 1]
    return left + (right - left) * tx[None, :]


def fbm_2d(height, width, seq, octaves=4, cell=64.0, gain=0.5, min_cell=2.0):
    """Fractal noise: octaves of lattice noise, each at half the cell size.

    Args:
        height: Output height in pixels.
        width: Output width in pixels.
        seq: SeededSequence the lattice values are drawn from.
        octaves: Maximum number of octaves.
        cell: Lattice spacing of the first octave, in pixels.
        gain: Amplitude ratio between successive octaves.
        min_cell: Octaves finer than this are skipped.

    Returns:
        Array of shape (height, width) with values in [0, 1].
    """
    total = np.zeros((height, width), dtype=np.float64)
    weight = 0.0
    amplitude = 1.0

    for octave in range(octaves):
        spacing = cell / 2 ** octave
        if spacing < min_cell:
            break
        spacing = max(spacing, 1.0)
        shape = (int(np.ceil(height / spacing)) + 2,
                 int(np.ceil(width / spacing)) + 2)
        total += amplitude * _upsample(seq.sample(shape), height, width,
                                       spacing)
        weight += amplitude
        amplitude *= gain

    if weight == 0:
        return np.full((height, width), 0.5)
    return total / weight
