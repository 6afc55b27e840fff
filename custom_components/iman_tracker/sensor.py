# File: sensor.py
"""Sensors for the Iman Tracker integration.

Per config entry (signed-in user):
    - Overall Iman score
    - One section score per goal category
    - One streak sensor per streak type
    - Qada (missed prayers to make up) total
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import ImanTrackerCoordinator
from .entity import ImanTrackerCoordinatorEntity
from .utils import dt_utils


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for Iman Tracker integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: ImanTrackerCoordinator = data[const.COORDINATOR]

    entities: list[SensorEntity] = [OverallScoreSensor(coordinator, entry)]
    entities.extend(
        SectionScoreSensor(coordinator, entry, category)
        for category in const.GOAL_CATEGORIES
    )
    entities.extend(
        StreakSensor(coordinator, entry, streak_type)
        for streak_type in const.STREAK_TYPES
    )
    entities.append(QadaSensor(coordinator, entry))

    async_add_entities(entities)


class OverallScoreSensor(ImanTrackerCoordinatorEntity, SensorEntity):
    """Overall Iman score: weighted average of the capped section scores."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_OVERALL_SCORE
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:star-crescent"

    def __init__(self, coordinator: ImanTrackerCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_OVERALL_SCORE}"

    @property
    def native_value(self) -> float:
        """Return the overall score."""
        return self.coordinator.overall_score

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose capped section scores and the last sync time."""
        return {
            const.ATTR_USER_ID: self.coordinator.user_id,
            const.ATTR_SECTION_SCORES: {
                category: score.capped if score is not None else None
                for category, score in self.coordinator.section_scores.items()
            },
            const.ATTR_LAST_SYNCED: self.coordinator.meta.get(
                const.DATA_META_LAST_SYNCED
            ),
        }


class SectionScoreSensor(ImanTrackerCoordinatorEntity, SensorEntity):
    """Score of one goal category.

    The state may exceed 100 when dhikr goes past its target; the capped value
    used for the overall score is exposed as an attribute. Unknown when every
    goal of the category is disabled.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_SECTION_SCORE
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(
        self, coordinator: ImanTrackerCoordinator, entry: ConfigEntry, category: str
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._category = category
        self._attr_unique_id = (
            f"{entry.entry_id}_{category}{const.SENSOR_UID_SUFFIX_SECTION_SCORE}"
        )
        self._attr_translation_placeholders = {const.ATTR_CATEGORY: category.title()}

    @property
    def native_value(self) -> float | None:
        """Return the display score of the category."""
        score = self.coordinator.section_scores.get(self._category)
        return score.value if score is not None else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the capped score, goal completion and the raw record.

        Weekly goals count from the Monday given in `week_start`.
        """
        score = self.coordinator.section_scores.get(self._category)
        attributes: dict[str, Any] = {
            const.ATTR_CATEGORY: self._category,
            const.ATTR_CAPPED_SCORE: score.capped if score is not None else None,
            const.ATTR_GOALS: self.coordinator.goals.get(self._category, {}),
            const.ATTR_WEEK_START: dt_utils.start_of_week(
                dt_utils.dt_today_local()
            ).isoformat(),
        }
        attributes.update(self.coordinator.get_goal_completion(self._category))
        return attributes


class StreakSensor(ImanTrackerCoordinatorEntity, SensorEntity):
    """Current streak (days) of one streak type."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_STREAK
    _attr_native_unit_of_measurement = UnitOfTime.DAYS
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:fire"

    def __init__(
        self, coordinator: ImanTrackerCoordinator, entry: ConfigEntry, streak_type: str
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._streak_type = streak_type
        self._attr_unique_id = (
            f"{entry.entry_id}_{streak_type}{const.SENSOR_UID_SUFFIX_STREAK}"
        )
        self._attr_translation_placeholders = {
            const.ATTR_STREAK_TYPE: streak_type.title()
        }

    @property
    def native_value(self) -> int:
        """Return the current streak."""
        record = self.coordinator.streaks.get(self._streak_type, {})
        return record.get(const.DATA_STREAK_CURRENT, const.DEFAULT_ZERO)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the streak record and its state for today."""
        record = self.coordinator.streaks.get(self._streak_type, {})
        return {
            const.ATTR_STREAK_TYPE: self._streak_type,
            const.ATTR_STREAK_STATE: self.coordinator.get_streak_state(
                self._streak_type
            ),
            const.DATA_STREAK_LONGEST: record.get(
                const.DATA_STREAK_LONGEST, const.DEFAULT_ZERO
            ),
            const.DATA_STREAK_TOTAL_DAYS: record.get(
                const.DATA_STREAK_TOTAL_DAYS, const.DEFAULT_ZERO
            ),
            const.DATA_STREAK_LAST_ACTIVE: record.get(const.DATA_STREAK_LAST_ACTIVE),
            const.DATA_STREAK_START: record.get(const.DATA_STREAK_START),
        }


class QadaSensor(ImanTrackerCoordinatorEntity, SensorEntity):
    """Total prayers left to make up, with per-prayer counts as attributes."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_QADA
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:counter"

    def __init__(self, coordinator: ImanTrackerCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_QADA}"

    @property
    def native_value(self) -> int:
        """Return the total of all qada counters."""
        return sum(self.coordinator.qada.values())

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose each prayer's counter."""
        return dict(self.coordinator.qada)
