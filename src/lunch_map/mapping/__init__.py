"""
Map markers for the visible restaurant list
"""

from .markers import InfoPanel, MapView, Marker, MarkerStyle, marker_style

__all__ = ['InfoPanel', 'MapView', 'Marker', 'MarkerStyle', 'marker_style']
