"""
Per-session state of the map page: active filters, visible list, selection
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..errors import InvalidInput
from .filters import FilterCriteria, filter_restaurants
from .restaurant import Restaurant

logger = logging.getLogger(__name__)

VisibleListListener = Callable[[List[Restaurant]], None]


class MapViewModel:
    """
    Holds the active criteria and the restaurants currently passing them

    The base collection is the full snapshot loaded from the store and is
    never modified. Every criteria change re-derives the visible list from
    that base, so filters do not accumulate across calls.
    """

    def __init__(self, base: Sequence[Restaurant], criteria: Optional[FilterCriteria] = None,
                 selected_id: Optional[int] = None):
        self._base = tuple(base)
        self._criteria = criteria or FilterCriteria()
        self._visible = filter_restaurants(self._base, self._criteria)
        self._selected: Optional[Restaurant] = None
        self._listeners: List[VisibleListListener] = []

        if selected_id is not None:
            self.select_restaurant(selected_id)

    @property
    def base(self) -> tuple:
        return self._base

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def visible(self) -> List[Restaurant]:
        return list(self._visible)

    @property
    def selected(self) -> Optional[Restaurant]:
        return self._selected

    def subscribe(self, listener: VisibleListListener) -> Callable[[], None]:
        """
        Register a listener called with the new visible list after each change

        The listener is called once immediately with the current list.

        Returns:
            Function removing the listener again
        """
        self._listeners.append(listener)
        listener(self.visible)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self):
        for listener in list(self._listeners):
            listener(self.visible)

    def _set_visible(self, visible: List[Restaurant]):
        self._visible = visible
        if self._selected is not None and all(r.id != self._selected.id for r in visible):
            logger.debug(f"Selected restaurant {self._selected.id} is no longer visible")
            self._selected = None
        self._publish()

    def apply_filters(self, criteria: Optional[FilterCriteria]) -> List[Restaurant]:
        """
        Replace the active criteria and recompute the visible list

        Args:
            criteria: Complete new criteria (not merged with the old ones)

        Returns:
            The new visible list
        """
        self._criteria = criteria or FilterCriteria()
        self._set_visible(filter_restaurants(self._base, self._criteria))
        logger.info(f"Applied filters {self._criteria.to_dict()}: {len(self._visible)} of {len(self._base)} visible")
        return self.visible

    def clear(self) -> List[Restaurant]:
        """Drop all filters and show the full base collection"""
        return self.apply_filters(FilterCriteria())

    def select_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        """
        Select a restaurant from the visible list

        Returns:
            The restaurant, or None when it is not visible (selection unchanged)
        """
        for restaurant in self._visible:
            if restaurant.id == restaurant_id:
                self._selected = restaurant
                return restaurant
        logger.debug(f"Restaurant {restaurant_id} is not in the visible list")
        return None

    def to_session(self) -> Dict[str, Any]:
        return {
            'criteria': self._criteria.to_dict(),
            'selected_id': self._selected.id if self._selected else None
        }

    @classmethod
    def from_session(cls, base: Sequence[Restaurant], data: Optional[Mapping[str, Any]]) -> 'MapViewModel':
        """Rebuild the view state stored by ``to_session``"""
        data = data or {}
        if not isinstance(data, Mapping):
            raise InvalidInput(f"Stored map state must be a mapping, got {type(data).__name__}")
        return cls(
            base,
            criteria=FilterCriteria.from_dict(data.get('criteria')),
            selected_id=data.get('selected_id')
        )
