"""NeuQuant colour quantization.

A Kohonen self-organising map over RGB space: a one-dimensional chain of
neurons starts as a grey ramp and is pulled toward sampled pixels. The winning
neuron for each sample (chosen with a frequency bias so rarely-winning neurons
still get used) and its neighbours within a shrinking radius move toward the
sample, with both the learning rate and the radius decaying over the run.

After training the network is frozen into a palette of RGB triples which is
used to classify pixels by nearest colour.
"""

import numpy as np

# Sampling steps; the first one that does not divide the pixel count is used,
# so stepping through the buffer visits every pixel before repeating.
PRIMES = (499, 487, 491, 503)

# Below this many pixels every pixel is sampled regardless of sample_factor
MIN_PIXELS = 3 * PRIMES[-1]

DEFAULT_SAMPLE_FACTOR = 10
MIN_SAMPLE_FACTOR = 1
MAX_SAMPLE_FACTOR = 30

MIN_CYCLES = 100
GAMMA = 1024.0
BETA = 1.0 / 1024.0
BETA_GAMMA = BETA * GAMMA
INIT_ALPHA = 1 << 10
RADIUS_BIAS_SHIFT = 6
RADIUS_DEC = 30

_CLASSIFY_CHUNK = 4096


def _neighbourhood(bias_radius: int) -> int:
    rad = bias_radius >> RADIUS_BIAS_SHIFT
    return 0 if rad <= 1 else rad


class NeuQuant:
    """Palette of at most ``colors`` entries learned from an RGBA buffer.

    Args:
        colors: number of neurons, i.e. the upper bound on the palette size.
        pixels: anything reshapeable to ``(n, 4)`` uint8 RGBA. Alpha is ignored.
        sample_factor: 1 samples every pixel; higher values sample sparser
            and train faster at some cost in accuracy.
    """

    def __init__(self, colors: int, pixels, sample_factor: int = DEFAULT_SAMPLE_FACTOR):
        if colors < 1:
            raise ValueError(f"colors must be at least 1, got {colors}")
        if not MIN_SAMPLE_FACTOR <= sample_factor <= MAX_SAMPLE_FACTOR:
            raise ValueError(
                f"sample_factor must be in [{MIN_SAMPLE_FACTOR}, {MAX_SAMPLE_FACTOR}], got {sample_factor}"
            )
        self.size = colors
        self.sample_factor = sample_factor

        ramp = np.arange(colors, dtype=np.float64) * 256.0 / colors
        self.network = np.repeat(ramp[:, np.newaxis], 3, axis=1)  # (colors, 3) r, g, b
        self.freq = np.full(colors, 1.0 / colors)
        self.bias = np.zeros(colors)

        rgba = np.asarray(pixels, dtype=np.uint8).reshape(-1, 4)
        if len(rgba):
            self._learn(rgba[:, :3].astype(np.float64))
        self.palette = self._freeze()

    def _contest(self, pixel: np.ndarray) -> int:
        """Pick the winning neuron for a sample and update the frequency bias.

        Returns the neuron with the lowest biased distance, while the neuron
        that is actually closest has its frequency raised.
        """
        dist = np.abs(self.network - pixel).sum(axis=1)
        best = int(np.argmin(dist))
        best_biased = int(np.argmin(dist - self.bias))

        self.freq -= BETA * self.freq
        self.bias += BETA_GAMMA * self.freq
        self.freq[best] += BETA
        self.bias[best] -= BETA_GAMMA
        return best_biased

    def _alter_single(self, rate: float, i: int, pixel: np.ndarray) -> None:
        self.network[i] -= rate * (self.network[i] - pixel)

    def _alter_neighbours(self, rate: float, rad: int, i: int, pixel: np.ndarray) -> None:
        lo = max(i - rad, -1)
        hi = min(i + rad, self.size)
        q = np.arange(rad)
        rates = rate * (rad * rad - q * q) / (rad * rad)

        above = i + 1 + q
        keep = above < hi
        idx = above[keep]
        self.network[idx] -= rates[keep][:, np.newaxis] * (self.network[idx] - pixel)

        below = i - 1 - q
        keep = below > lo
        idx = below[keep]
        self.network[idx] -= rates[keep][:, np.newaxis] * (self.network[idx] - pixel)

    def _learn(self, pixels: np.ndarray) -> None:
        count = len(pixels)
        sample_factor = 1 if count < MIN_PIXELS else self.sample_factor
        alpha_dec = 30 + (sample_factor - 1) // 3
        samples = count // sample_factor
        cycles = max(MIN_CYCLES, self.size >> 1)
        delta = samples // cycles or 1

        alpha = INIT_ALPHA
        bias_radius = (self.size >> 3) << RADIUS_BIAS_SHIFT
        rad = _neighbourhood(bias_radius)
        step = next((p for p in PRIMES if count % p), PRIMES[-1])

        pos = 0
        for i in range(1, samples + 1):
            pixel = pixels[pos]
            winner = self._contest(pixel)
            rate = alpha / INIT_ALPHA
            self._alter_single(rate, winner, pixel)
            if rad:
                self._alter_neighbours(rate, rad, winner, pixel)

            pos = (pos + step) % count
            if i % delta == 0:
                alpha -= alpha // alpha_dec
                bias_radius -= bias_radius // RADIUS_DEC
                rad = _neighbourhood(bias_radius)

    def _freeze(self) -> np.ndarray:
        """Round the network to 8-bit colours, dropping repeats (first one wins)."""
        colours = np.clip(np.floor(self.network + 0.5), 0, 255).astype(np.uint8)
        _, first = np.unique(colours, axis=0, return_index=True)
        return colours[np.sort(first)]

    def __len__(self) -> int:
        return len(self.palette)

    def index_of(self, pixel) -> int:
        """Index of the palette entry nearest to an RGB or RGBA pixel."""
        rgb = np.asarray(pixel[:3], dtype=np.int64)
        dist = ((self.palette.astype(np.int64) - rgb) ** 2).sum(axis=1)
        return int(np.argmin(dist))

    def classify(self, pixels) -> np.ndarray:
        """Vectorised ``index_of`` over an ``(..., 4)`` or ``(..., 3)`` array.

        Returns an int array shaped like ``pixels`` without its last axis.
        Ties go to the lowest palette index.
        """
        arr = np.asarray(pixels)
        shape = arr.shape[:-1]
        rgb = arr.reshape(-1, arr.shape[-1])[:, :3].astype(np.int64)
        palette = self.palette.astype(np.int64)
        palette_norm = (palette**2).sum(axis=1)

        out = np.empty(len(rgb), dtype=np.intp)
        for start in range(0, len(rgb), _CLASSIFY_CHUNK):
            chunk = rgb[start : start + _CLASSIFY_CHUNK]
            # |p - c|^2 without the |p|^2 term, which is constant per pixel
            dist = palette_norm[np.newaxis, :] - 2 * chunk @ palette.T
            out[start : start + len(chunk)] = np.argmin(dist, axis=1)
        return out.reshape(shape)

    def hex_colour(self, index: int) -> str:
        r, g, b = (int(v) for v in self.palette[index])
        return f"#{r:02x}{g:02x}{b:02x}"
