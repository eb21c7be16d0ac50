"""
Visualization module for pytheater.

2D region maps rendered with matplotlib:
- Provides: RegionMapVisualizer, save_region_map
"""

from .region_map import RegionMapVisualizer, save_region_map

__all__ = ['RegionMapVisualizer', 'save_region_map']
