"""
On-screen preview of a rendered surface with matplotlib.
"""

import matplotlib.pyplot as plt

from bonsai.surface import NRGBASurface, RGBASurface


def render_surface(
    surface: NRGBASurface | RGBASurface,
    figsize: tuple = (8, 4.5),
    background: str = "#000000",
) -> tuple[plt.Figure, plt.Axes]:
    """
    Show a surface in a matplotlib figure.

    Straight-alpha surfaces are converted to premultiplied first, the
    same way the terminal display flattens line-mode output.

    Returns:
        (figure, axes) tuple
    """
    if isinstance(surface, NRGBASurface):
        surface = surface.to_premultiplied()

    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(background)
    ax.set_facecolor(background)
    # Premultiplied RGB over black is just the RGB channels
    ax.imshow(surface.pix[..., :3], interpolation="nearest")
    ax.set_xlim(-0.5, surface.width - 0.5)
    ax.set_ylim(surface.height - 0.5, -0.5)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig, ax
