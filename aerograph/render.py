import numpy as np


def density_to_rgba(density, color=(255, 255, 255)):
    """
    Colour every cell with the smoke colour and use density as alpha.

    `density` is the padded [y, x] grid. Alpha saturates at 255, which is
    the only place density gets clamped.
    """
    h, w = density.shape
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[..., :3] = color
    rgba[..., 3] = np.clip(density, 0, 255).astype(np.uint8)
    return rgba


def composite(rgba, background=(0, 0, 0)):
    """Alpha-blend an RGBA image over a flat background, returning RGB uint8."""
    alpha = rgba[..., 3:4].astype(np.float32) / 255.0
    bg = np.asarray(background, dtype=np.float32)
    rgb = rgba[..., :3].astype(np.float32) * alpha + bg * (1.0 - alpha)
    return np.clip(rgb + 0.5, 0, 255).astype(np.uint8)
