"""Entity lookup helpers for Iman Tracker tests."""

from homeassistant.core import HomeAssistant, State
from homeassistant.helpers import entity_registry as er

from custom_components.iman_tracker import const


def get_sensor_state(hass: HomeAssistant, unique_id: str) -> State:
    """Return the state of an Iman Tracker sensor by unique id."""
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, unique_id
    )
    assert entity_id is not None, f"No sensor with unique id {unique_id}"
    state = hass.states.get(entity_id)
    assert state is not None, f"No state for {entity_id}"
    return state
