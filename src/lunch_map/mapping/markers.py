"""
Marker management for the restaurant map

A MapView keeps exactly one marker per visible restaurant. The page that
opens the view injects the "view details" callback and closes the view
when it is done, which destroys every marker it created.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from jinja2 import Environment

from ..config import config
from ..core.display import crowdedness_display, cuisine_glyph, open_display, price_display
from ..core.restaurant import Restaurant, RestaurantPhoto
from ..errors import NotFound

logger = logging.getLogger(__name__)

ViewDetailsCallback = Callable[[int], Any]
ActionUrlBuilder = Callable[[int], str]

OPEN_OPACITY = 1.0
CLOSED_OPACITY = 0.7
VIEW_DETAILS_LABEL = '店舗詳細を見る'
POPULAR_MENU_LABEL = '人気メニュー'

_jinja = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

_INFO_PANEL_TEMPLATE = _jinja.from_string("""\
<div class="popup-content-v2">
{% if photo %}
  <div class="restaurant-photo">
    <img src="{{ photo.url }}" alt="{{ photo.alt }}" loading="lazy">
    <div class="photo-overlay">
{% if rating %}
      <div class="rating-badge">
        <span class="rating-score">★{{ rating }}</span>
        <span class="review-count">({{ review_count or 0 }})</span>
      </div>
{% endif %}
    </div>
  </div>
{% endif %}
  <div class="restaurant-info">
    <h3 class="restaurant-name">{{ name }}</h3>
    <div class="restaurant-tags">
{% for label, css_class in tags %}
      <span class="tag {{ css_class }}">{{ label }}</span>
{% endfor %}
    </div>
{% if features %}
    <p class="restaurant-description">{{ features }}</p>
{% endif %}
{% if popular_menu %}
    <div class="popular-menu">
      <span class="menu-label">{{ menu_label }}</span>
      <span class="menu-text">{{ popular_menu }}</span>
    </div>
{% endif %}
{% if access_info %}
    <div class="access-info">
      <span class="access-icon">🚶</span>
      <span class="access-text">{{ access_info }}</span>
    </div>
{% endif %}
{% if action_url %}
    <form method="post" action="{{ action_url }}">
      <button type="submit" class="view-detail-btn" data-restaurant-id="{{ restaurant_id }}">{{ action_label }}</button>
    </form>
{% else %}
    <button type="button" class="view-detail-btn" data-restaurant-id="{{ restaurant_id }}">{{ action_label }}</button>
{% endif %}
  </div>
</div>
""")


@dataclass(frozen=True)
class MarkerStyle:
    """Visual state of a marker, derived from the restaurant alone"""
    css_class: str
    opacity: float
    color: str
    glyph: str


def marker_style(restaurant: Restaurant) -> MarkerStyle:
    return MarkerStyle(
        css_class=open_display(restaurant.is_open).css_class,
        opacity=OPEN_OPACITY if restaurant.is_open else CLOSED_OPACITY,
        color=crowdedness_display(restaurant.crowdedness_level).color,
        glyph=cuisine_glyph(restaurant.cuisine_type)
    )


@dataclass(frozen=True)
class InfoPanel:
    """Content of the popup bound to a marker"""
    restaurant_id: int
    name: str
    tags: Tuple[Tuple[str, str], ...]
    photo: Optional[RestaurantPhoto] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    features: Optional[str] = None
    popular_menu: Optional[str] = None
    access_info: Optional[str] = None
    action_url: Optional[str] = None
    action_label: str = VIEW_DETAILS_LABEL

    @classmethod
    def for_restaurant(cls, restaurant: Restaurant, action_url: Optional[str] = None) -> 'InfoPanel':
        status = open_display(restaurant.is_open)
        tags = (
            (restaurant.cuisine_type, 'cuisine-tag'),
            (price_display(restaurant.price_range).label, 'price-tag'),
            (status.label, f'status-tag {status.css_class}'),
        )
        return cls(
            restaurant_id=restaurant.id,
            name=restaurant.name,
            tags=tags,
            photo=restaurant.main_photo,
            rating=restaurant.rating,
            review_count=restaurant.review_count,
            features=restaurant.features,
            popular_menu=restaurant.popular_menu,
            access_info=restaurant.access_info,
            action_url=action_url
        )

    def render(self) -> str:
        """HTML for the Leaflet popup; every field is escaped"""
        return _INFO_PANEL_TEMPLATE.render(
            restaurant_id=self.restaurant_id,
            name=self.name,
            tags=self.tags,
            photo=self.photo,
            rating=self.rating,
            review_count=self.review_count,
            features=self.features,
            popular_menu=self.popular_menu,
            access_info=self.access_info,
            menu_label=POPULAR_MENU_LABEL,
            action_url=self.action_url,
            action_label=self.action_label
        )


class Marker:
    """One restaurant pinned on a MapView"""

    def __init__(self, map_view: 'MapView', restaurant: Restaurant, info_panel: InfoPanel):
        self._map_view = map_view
        self.restaurant_id = restaurant.id
        self.position = (restaurant.latitude, restaurant.longitude)
        self.title = restaurant.name
        self.style = marker_style(restaurant)
        self.info_panel = info_panel
        self.removed = False

    def view_details(self) -> Any:
        """Run the map's "view details" callback for this marker's restaurant"""
        if self.removed:
            raise RuntimeError(f"Marker for restaurant {self.restaurant_id} was removed from its map")
        return self._map_view._on_view_details(self.restaurant_id)

    def remove(self):
        self.removed = True
        self._map_view = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.restaurant_id,
            'position': list(self.position),
            'title': self.title,
            'css_class': self.style.css_class,
            'opacity': self.style.opacity,
            'color': self.style.color,
            'glyph': self.style.glyph,
            'popup_html': self.info_panel.render()
        }


class MapView:
    """
    Marker registry of one rendered map, keyed by restaurant identity

    Args:
        on_view_details: Called with a restaurant id when its "view details"
            action is triggered
        action_url: Builds the URL the popup button submits to; without it
            the button carries only a ``data-restaurant-id`` attribute
        center: Initial (latitude, longitude); defaults to configuration
        zoom: Initial zoom level; defaults to configuration
    """

    def __init__(self, on_view_details: ViewDetailsCallback,
                 action_url: Optional[ActionUrlBuilder] = None,
                 center: Optional[Tuple[float, float]] = None,
                 zoom: Optional[int] = None):
        if not callable(on_view_details):
            raise TypeError('on_view_details must be callable')
        self._on_view_details = on_view_details
        self._action_url = action_url
        self.center = center or (config.map.center_latitude, config.map.center_longitude)
        self.zoom = zoom or config.map.zoom
        self._markers: Dict[int, Marker] = {}
        self.closed = False

    def __enter__(self) -> 'MapView':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __len__(self) -> int:
        return len(self._markers)

    @property
    def marker_ids(self) -> Set[int]:
        return set(self._markers)

    @property
    def markers(self) -> List[Marker]:
        return list(self._markers.values())

    def marker(self, restaurant_id: int) -> Marker:
        try:
            return self._markers[restaurant_id]
        except KeyError:
            raise NotFound(f"No marker for restaurant {restaurant_id}")

    def _build_marker(self, restaurant: Restaurant) -> Marker:
        action_url = self._action_url(restaurant.id) if self._action_url else None
        return Marker(self, restaurant, InfoPanel.for_restaurant(restaurant, action_url))

    def _clear_markers(self):
        for marker in self._markers.values():
            marker.remove()
        self._markers = {}

    def sync(self, restaurants: Iterable[Restaurant]) -> List[Marker]:
        """
        Replace the marker set with one marker per restaurant

        Every previously added marker is removed first. A restaurant listed
        twice still gets a single marker.

        Returns:
            Markers in list order
        """
        if self.closed:
            raise RuntimeError('Cannot render markers on a closed map view')

        self._clear_markers()
        for restaurant in restaurants:
            if restaurant.id in self._markers:
                logger.warning(f"Restaurant {restaurant.id} listed twice; keeping one marker")
                continue
            self._markers[restaurant.id] = self._build_marker(restaurant)

        logger.debug(f"Map view now shows {len(self._markers)} markers")
        return self.markers

    def view_details(self, restaurant_id: int) -> Any:
        """Trigger the "view details" action of the marker for ``restaurant_id``"""
        return self.marker(restaurant_id).view_details()

    def close(self):
        """Tear the view down, destroying every marker it owns"""
        if self.closed:
            return
        self._clear_markers()
        self.closed = True

    def to_leaflet(self) -> Dict[str, Any]:
        """JSON-ready description of the map for the page script"""
        return {
            'center': list(self.center),
            'zoom': self.zoom,
            'tile_url': config.map.tile_url,
            'attribution': config.map.attribution,
            'markers': [marker.to_dict() for marker in self._markers.values()]
        }
