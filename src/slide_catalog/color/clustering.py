"""K-means clustering over RGB triples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

RGB = tuple[float, float, float]


@dataclass
class Cluster:
    center: RGB
    count: int


def _sq_dist(a: Sequence[float], b: Sequence[float]) -> float:
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


def kmeans(pixels: Sequence[RGB], k: int = 5, iterations: int = 10) -> list[Cluster]:
    """Cluster pixels into at most k groups, largest first.

    Seeds are spread evenly over the input order and the loop runs a fixed
    number of iterations, so results are deterministic for a given input.
    """
    n = len(pixels)
    if n == 0:
        return []
    if n <= k:
        return [Cluster(center=tuple(p), count=1) for p in pixels]

    step = n // k
    centroids: list[RGB] = [tuple(pixels[i * step]) for i in range(k)]
    assignments = [0] * n

    for _ in range(iterations):
        for i, p in enumerate(pixels):
            best, best_dist = 0, math.inf
            for c, centroid in enumerate(centroids):
                d = _sq_dist(p, centroid)
                if d < best_dist:
                    best, best_dist = c, d
            assignments[i] = best

        sums = [[0.0, 0.0, 0.0, 0] for _ in centroids]
        for p, c in zip(pixels, assignments):
            s = sums[c]
            s[0] += p[0]
            s[1] += p[1]
            s[2] += p[2]
            s[3] += 1
        # Empty clusters collapse to black and are dropped below
        centroids = [
            (s[0] / s[3], s[1] / s[3], s[2] / s[3]) if s[3] else (0.0, 0.0, 0.0) for s in sums
        ]

    counts = [0] * len(centroids)
    for c in assignments:
        counts[c] += 1
    clusters = [Cluster(center=ctr, count=cnt) for ctr, cnt in zip(centroids, counts) if cnt > 0]
    clusters.sort(key=lambda cl: cl.count, reverse=True)
    return clusters


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    return "#" + "".join(f"{max(0, min(255, _round_half_up(v))):02x}" for v in rgb[:3])


def luminance(rgb: Sequence[float]) -> float:
    """Relative luminance in [0, 1] using Rec. 601 weights."""
    return (0.299 * rgb[0] + 0.587 * rgb[1] + 0.114 * rgb[2]) / 255


def center_variance(clusters: Sequence[Cluster]) -> float:
    """Mean squared distance of cluster centers from their average."""
    if not clusters:
        return 0.0
    n = len(clusters)
    avg = [sum(c.center[ch] for c in clusters) / n for ch in range(3)]
    return sum(_sq_dist(c.center, avg) for c in clusters) / n
