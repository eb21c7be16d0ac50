"""
Top-down 2D map of generated regions using matplotlib.

Draws each region's border triangulation, the locations of the assets it
spawned (colored by coalition) and its airspace circle.
"""

from io import BytesIO
from typing import Dict, Optional, Sequence, Tuple

import matplotlib.patches as patches
import matplotlib.pyplot as plt
import numpy as np

from ..classes.assets import AirspaceAsset
from ..classes.enums import Coalition
from ..misc.logger import create_logger
from ..misc.math_utils import to_horizontal


class RegionMapVisualizer:
    """
    Static map of regions and their spawned assets.

    Example:
        >>> theater.generate()
        >>> viz = RegionMapVisualizer(theater.regions)
        >>> viz.save("regions.png")
    """

    def __init__(self, regions: Sequence, figsize: Tuple[int, int] = (12, 12), dpi: int = 150,
                 title: Optional[str] = None, verbose: bool = False):
        self.regions = list(regions)
        self.figsize = figsize
        self.dpi = dpi
        self.title = title
        self.logger = create_logger(verbose=verbose, name="RegionMap")

        self.colors = {
            'border': '#404040',
            'triangle': '#A0A0A0',
            'airspace': '#1F4E79',
            Coalition.NEUTRAL: '#808080',
            Coalition.RED: '#CC0000',
            Coalition.BLUE: '#0066CC',
        }

    def _draw_border(self, ax, region):
        border = region.border
        if border is None:
            return
        for triangle in border.triangles:
            ax.add_patch(patches.Polygon(
                np.array(triangle), closed=True, fill=False,
                edgecolor=self.colors['triangle'], linewidth=0.5, alpha=0.6, zorder=2,
            ))
        outline = np.array(border.vertices + border.vertices[:1])
        ax.plot(outline[:, 0], outline[:, 1], color=self.colors['border'], linewidth=1.5, zorder=3)

    def _draw_assets(self, ax, region, labeled: Dict[Coalition, bool]):
        for asset in region.assets:
            if isinstance(asset, AirspaceAsset):
                ax.add_patch(patches.Circle(
                    to_horizontal(asset.center),
                    asset.radius, fill=False, linestyle='--',
                    edgecolor=self.colors['airspace'], alpha=0.5, zorder=4,
                ))
                continue
            location = asset.get_location()
            if location is None:
                continue
            x, y = to_horizontal(location)
            coalition = asset.template.coalition
            ax.scatter(
                x, y, s=60, c=self.colors[coalition], edgecolors='black', linewidth=0.8,
                label=coalition.name.title() if not labeled.get(coalition) else "",
                zorder=6,
            )
            labeled[coalition] = True

    def _draw(self):
        fig, ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
        labeled: Dict[Coalition, bool] = {}
        for region in self.regions:
            self._draw_border(ax, region)
            self._draw_assets(ax, region, labeled)
            if region.location is not None:
                ax.annotate(region.name, to_horizontal(region.location), fontsize=9, fontweight='bold', zorder=7)

        ax.set_xlabel('X (meters)', fontsize=12)
        ax.set_ylabel('Z (meters)', fontsize=12)
        ax.set_title(self.title or f'Regions ({len(self.regions)})', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal')
        ax.autoscale_view()
        if labeled:
            ax.legend(loc='upper right', framealpha=0.9, fontsize=10)
        plt.tight_layout()
        return fig

    def save(self, filename: str) -> str:
        """Render the map to an image file and return its path."""
        fig = self._draw()
        fig.savefig(filename, dpi=self.dpi, bbox_inches='tight')
        plt.close(fig)
        self.logger.info(f"✓ Region map saved to {filename}")
        return filename

    def get_bytes(self, format: str = 'PNG') -> bytes:
        fig = self._draw()
        buffer = BytesIO()
        fig.savefig(buffer, format=format.lower(), dpi=self.dpi, bbox_inches='tight')
        plt.close(fig)
        image_bytes = buffer.getvalue()
        buffer.close()
        return image_bytes


def save_region_map(regions: Sequence, filename: str, **kwargs) -> str:
    """
    Convenience function to quickly save a region map.

    Args:
        regions: Regions to draw (usually Theater.regions after generate())
        filename: Output filename
        **kwargs: Additional arguments passed to RegionMapVisualizer

    Returns:
        Path to saved file
    """
    return RegionMapVisualizer(regions, **kwargs).save(filename)
