"""Point generators and assertions shared by the test modules."""

import numpy as np


def get_jittered_grid(width: float, height: float, spacing: float, seed: int = 0) -> np.ndarray:
    """
    Jittered square grid: a regular grid with every point moved by up to
    45% of the spacing, which avoids the cocircular ties of a perfect grid.
    """
    rng = np.random.default_rng(seed)
    radius = spacing / 2
    jittering = radius * 0.9

    points = []
    y = radius
    while y < height:
        x = radius
        while x < width:
            points.append([x + rng.uniform(-jittering, jittering),
                           y + rng.uniform(-jittering, jittering)])
            x += spacing
        y += spacing
    return np.array(points)


def is_rotation(seq, expected) -> bool:
    """True if ``seq`` is a cyclic rotation of ``expected``."""
    seq = [int(i) for i in seq]
    expected = [int(i) for i in expected]
    if len(seq) != len(expected):
        return False
    if not seq:
        return True
    if expected[0] not in seq:
        return False
    k = seq.index(expected[0])
    return seq[k:] + seq[:k] == expected


def missing_points(tri) -> list:
    """
    Indices of distinct input points that no triangle uses; of several equal
    points only the first is expected in the mesh.
    """
    _, first = np.unique(tri.points, axis=0, return_index=True)
    used = set(tri.triangles.tolist())
    return sorted(int(i) for i in first if int(i) not in used)
