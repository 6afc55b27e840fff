# File: const.py
"""Constants for the Iman Tracker integration.

This file centralizes configuration keys, defaults, storage categories, goal
component definitions, streak types, service names and event names for
consistency across the integration.
"""

import logging
from zoneinfo import ZoneInfo

from homeassistant.const import Platform

from .utils import dt_utils


def set_default_timezone(hass):
    """Set the default timezone based on the Home Assistant configuration."""
    dt_utils.set_default_timezone(ZoneInfo(hass.config.time_zone))


# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
IMAN_TRACKER_TITLE = "Iman Tracker"

# Integration Domain
DOMAIN = "iman_tracker"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_VERSION = 1

# Update Intervals
DEFAULT_SCORE_INTERVAL = 30  # seconds
DEFAULT_SYNC_INTERVAL = 5  # minutes
MIN_SCORE_INTERVAL = 10
MAX_SCORE_INTERVAL = 3600
MIN_SYNC_INTERVAL = 1
MAX_SYNC_INTERVAL = 1440

# Remote sync
DEFAULT_REMOTE_TABLE = "iman_tracker_goals"
SYNC_TIMEOUT = 10  # seconds
SUPABASE_REST_PATH = "/rest/v1/"

# Float precision for score rounding
DATA_FLOAT_PRECISION = 2

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------

# ConfigFlow Steps
CONFIG_FLOW_STEP_USER = "user"

# OptionsFlow Steps
OPTIONS_FLOW_STEP_INIT = "init"

# Config entry data
CONF_USER_ID = "user_id"
CONF_NAME = "name"
CONF_SUPABASE_URL = "supabase_url"
CONF_SUPABASE_KEY = "supabase_key"
CONF_REMOTE_TABLE = "remote_table"
CONF_NOTIFY_SERVICE = "notify_service"

# Config entry options
CONF_SCORE_INTERVAL = "score_interval"
CONF_SYNC_INTERVAL = "sync_interval"
CONF_DECAY_ENABLED = "decay_enabled"
CONF_WEIGHT_PRAYER = "weight_prayer"
CONF_WEIGHT_DHIKR = "weight_dhikr"
CONF_WEIGHT_QURAN = "weight_quran"
CONF_WEIGHT_FASTING = "weight_fasting"

# Flow errors
CFOF_ERROR_INVALID_URL = "invalid_url"
CFOF_ERROR_KEY_REQUIRED = "supabase_key_required"
CFOF_ERROR_USER_ID_REQUIRED = "user_id_required"
CFOF_ABORT_ALREADY_CONFIGURED = "already_configured"

# ------------------------------------------------------------------------------------------------
# Storage Categories
# ------------------------------------------------------------------------------------------------

# Goal categories
CATEGORY_PRAYER = "prayer"
CATEGORY_DHIKR = "dhikr"
CATEGORY_QURAN = "quran"
CATEGORY_FASTING = "fasting"

GOAL_CATEGORIES = [
    CATEGORY_PRAYER,
    CATEGORY_DHIKR,
    CATEGORY_QURAN,
    CATEGORY_FASTING,
]

# Streak types
STREAK_TYPE_GENERAL = "general"
STREAK_TYPE_PRAYER = "prayer"
STREAK_TYPE_QURAN = "quran"
STREAK_TYPE_WORKOUT = "workout"

STREAK_TYPES = [
    STREAK_TYPE_GENERAL,
    STREAK_TYPE_PRAYER,
    STREAK_TYPE_QURAN,
    STREAK_TYPE_WORKOUT,
]

# Blob names (one storage file per blob per user)
STORAGE_BLOB_GOALS_PREFIX = "goals_"
STORAGE_BLOB_STREAK_PREFIX = "streak_"
STORAGE_BLOB_QADA = "qada"
STORAGE_BLOB_META = "meta"

STORAGE_BLOBS = (
    [f"{STORAGE_BLOB_GOALS_PREFIX}{category}" for category in GOAL_CATEGORIES]
    + [f"{STORAGE_BLOB_STREAK_PREFIX}{streak}" for streak in STREAK_TYPES]
    + [STORAGE_BLOB_QADA, STORAGE_BLOB_META]
)

# ------------------------------------------------------------------------------------------------
# Data Keys
# ------------------------------------------------------------------------------------------------

# PRAYER
PRAYER_FAJR = "fajr"
PRAYER_DHUHR = "dhuhr"
PRAYER_ASR = "asr"
PRAYER_MAGHRIB = "maghrib"
PRAYER_ISHA = "isha"

FARD_PRAYERS = [
    PRAYER_FAJR,
    PRAYER_DHUHR,
    PRAYER_ASR,
    PRAYER_MAGHRIB,
    PRAYER_ISHA,
]

DATA_PRAYER_FARD = "fard_prayers"
DATA_PRAYER_SUNNAH_GOAL = "sunnah_daily_goal"
DATA_PRAYER_SUNNAH_COMPLETED = "sunnah_completed"
DATA_PRAYER_TAHAJJUD_GOAL = "tahajjud_weekly_goal"
DATA_PRAYER_TAHAJJUD_COMPLETED = "tahajjud_completed"

# DHIKR
DATA_DHIKR_DAILY_GOAL = "daily_goal"
DATA_DHIKR_DAILY_COMPLETED = "daily_completed"
DATA_DHIKR_WEEKLY_GOAL = "weekly_goal"
DATA_DHIKR_WEEKLY_COMPLETED = "weekly_completed"

# QURAN
DATA_QURAN_PAGES_GOAL = "daily_pages_goal"
DATA_QURAN_PAGES_COMPLETED = "daily_pages_completed"
DATA_QURAN_VERSES_GOAL = "daily_verses_goal"
DATA_QURAN_VERSES_COMPLETED = "daily_verses_completed"
DATA_QURAN_MEMORIZATION_GOAL = "weekly_memorization_goal"
DATA_QURAN_MEMORIZATION_COMPLETED = "weekly_memorization_completed"

# FASTING
DATA_FASTING_WEEKLY_GOAL = "weekly_goal"
DATA_FASTING_WEEKLY_COMPLETED = "weekly_completed"

# STREAKS
DATA_STREAK_CURRENT = "current_streak"
DATA_STREAK_LONGEST = "longest_streak"
DATA_STREAK_TOTAL_DAYS = "total_days_active"
DATA_STREAK_LAST_ACTIVE = "last_active_date"
DATA_STREAK_START = "streak_start_date"

# META
DATA_META_LAST_DAILY_RESET = "last_daily_reset"
DATA_META_LAST_WEEKLY_RESET = "last_weekly_reset"
DATA_META_SECTION_SCORES = "section_scores"
DATA_META_SCORES_LAST_UPDATED = "scores_last_updated"
DATA_META_LAST_SYNCED = "last_synced"
DATA_META_OVERALL_SCORE = "overall_score"

# SNAPSHOT (whole per-user state, used by sync)
DATA_SNAPSHOT_GOALS = "goals"
DATA_SNAPSHOT_STREAKS = "streaks"
DATA_SNAPSHOT_QADA = "qada"
DATA_SNAPSHOT_META = "meta"

# ------------------------------------------------------------------------------------------------
# Goal Components
# ------------------------------------------------------------------------------------------------

GOAL_KIND_FLAGS = "flags"
GOAL_KIND_NUMERIC = "numeric"

GOAL_SCOPE_DAILY = "daily"
GOAL_SCOPE_WEEKLY = "weekly"

COMPONENT_GOAL = "goal"
COMPONENT_COMPLETED = "completed"
COMPONENT_KIND = "kind"
COMPONENT_SCOPE = "scope"
COMPONENT_WEIGHT = "weight"
COMPONENT_ALLOW_OVER = "allow_over"
COMPONENT_CEILING = "ceiling"

# Days in a week; upper bound for weekly day-count goals.
DAYS_PER_WEEK = 7

# Per-category component table. Flags components use the same key for goal and
# completion; the target is the number of flags.
GOAL_COMPONENTS: dict[str, list[dict]] = {
    CATEGORY_PRAYER: [
        {
            COMPONENT_GOAL: DATA_PRAYER_FARD,
            COMPONENT_COMPLETED: DATA_PRAYER_FARD,
            COMPONENT_KIND: GOAL_KIND_FLAGS,
            COMPONENT_SCOPE: GOAL_SCOPE_DAILY,
            COMPONENT_WEIGHT: 70,
        },
        {
            COMPONENT_GOAL: DATA_PRAYER_SUNNAH_GOAL,
            COMPONENT_COMPLETED: DATA_PRAYER_SUNNAH_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_DAILY,
            COMPONENT_WEIGHT: 20,
        },
        {
            COMPONENT_GOAL: DATA_PRAYER_TAHAJJUD_GOAL,
            COMPONENT_COMPLETED: DATA_PRAYER_TAHAJJUD_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_WEEKLY,
            COMPONENT_WEIGHT: 10,
            COMPONENT_CEILING: DAYS_PER_WEEK,
        },
    ],
    CATEGORY_DHIKR: [
        {
            COMPONENT_GOAL: DATA_DHIKR_DAILY_GOAL,
            COMPONENT_COMPLETED: DATA_DHIKR_DAILY_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_DAILY,
            COMPONENT_WEIGHT: 70,
            COMPONENT_ALLOW_OVER: True,
        },
        {
            COMPONENT_GOAL: DATA_DHIKR_WEEKLY_GOAL,
            COMPONENT_COMPLETED: DATA_DHIKR_WEEKLY_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_WEEKLY,
            COMPONENT_WEIGHT: 30,
            COMPONENT_ALLOW_OVER: True,
        },
    ],
    CATEGORY_QURAN: [
        {
            COMPONENT_GOAL: DATA_QURAN_PAGES_GOAL,
            COMPONENT_COMPLETED: DATA_QURAN_PAGES_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_DAILY,
            COMPONENT_WEIGHT: 40,
        },
        {
            COMPONENT_GOAL: DATA_QURAN_VERSES_GOAL,
            COMPONENT_COMPLETED: DATA_QURAN_VERSES_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_DAILY,
            COMPONENT_WEIGHT: 30,
        },
        {
            COMPONENT_GOAL: DATA_QURAN_MEMORIZATION_GOAL,
            COMPONENT_COMPLETED: DATA_QURAN_MEMORIZATION_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_WEEKLY,
            COMPONENT_WEIGHT: 30,
        },
    ],
    CATEGORY_FASTING: [
        {
            COMPONENT_GOAL: DATA_FASTING_WEEKLY_GOAL,
            COMPONENT_COMPLETED: DATA_FASTING_WEEKLY_COMPLETED,
            COMPONENT_KIND: GOAL_KIND_NUMERIC,
            COMPONENT_SCOPE: GOAL_SCOPE_WEEKLY,
            COMPONENT_WEIGHT: 100,
            COMPONENT_CEILING: DAYS_PER_WEEK,
        },
    ],
}

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------

DEFAULT_ZERO = 0

DEFAULT_GOALS: dict[str, dict] = {
    CATEGORY_PRAYER: {
        DATA_PRAYER_FARD: {prayer: False for prayer in FARD_PRAYERS},
        DATA_PRAYER_SUNNAH_GOAL: 5,
        DATA_PRAYER_SUNNAH_COMPLETED: 0,
        DATA_PRAYER_TAHAJJUD_GOAL: 2,
        DATA_PRAYER_TAHAJJUD_COMPLETED: 0,
    },
    CATEGORY_DHIKR: {
        DATA_DHIKR_DAILY_GOAL: 100,
        DATA_DHIKR_DAILY_COMPLETED: 0,
        DATA_DHIKR_WEEKLY_GOAL: 1000,
        DATA_DHIKR_WEEKLY_COMPLETED: 0,
    },
    CATEGORY_QURAN: {
        DATA_QURAN_PAGES_GOAL: 2,
        DATA_QURAN_PAGES_COMPLETED: 0,
        DATA_QURAN_VERSES_GOAL: 10,
        DATA_QURAN_VERSES_COMPLETED: 0,
        DATA_QURAN_MEMORIZATION_GOAL: 5,
        DATA_QURAN_MEMORIZATION_COMPLETED: 0,
    },
    CATEGORY_FASTING: {
        DATA_FASTING_WEEKLY_GOAL: 2,
        DATA_FASTING_WEEKLY_COMPLETED: 0,
    },
}

DEFAULT_STREAK: dict = {
    DATA_STREAK_CURRENT: 0,
    DATA_STREAK_LONGEST: 0,
    DATA_STREAK_TOTAL_DAYS: 0,
    DATA_STREAK_LAST_ACTIVE: None,
    DATA_STREAK_START: None,
}

DEFAULT_QADA: dict = {prayer: 0 for prayer in FARD_PRAYERS}

DEFAULT_META: dict = {
    DATA_META_LAST_DAILY_RESET: None,
    DATA_META_LAST_WEEKLY_RESET: None,
    DATA_META_SECTION_SCORES: {},
    DATA_META_OVERALL_SCORE: 0.0,
    DATA_META_SCORES_LAST_UPDATED: None,
    DATA_META_LAST_SYNCED: None,
}

# Overall score weights (percent). A zero weight leaves the section out of the
# overall score.
DEFAULT_SECTION_WEIGHTS: dict[str, int] = {
    CATEGORY_PRAYER: 40,
    CATEGORY_QURAN: 30,
    CATEGORY_DHIKR: 30,
    CATEGORY_FASTING: 0,
}

CONF_SECTION_WEIGHTS: dict[str, str] = {
    CATEGORY_PRAYER: CONF_WEIGHT_PRAYER,
    CATEGORY_DHIKR: CONF_WEIGHT_DHIKR,
    CATEGORY_QURAN: CONF_WEIGHT_QURAN,
    CATEGORY_FASTING: CONF_WEIGHT_FASTING,
}

DEFAULT_DECAY_ENABLED = False

# ------------------------------------------------------------------------------------------------
# Score Decay
# ------------------------------------------------------------------------------------------------

DECAY_BASE_RATE_PER_HOUR = 0.8
DECAY_MAX_PER_DAY = 25
HOURS_PER_DAY = 24
DECAY_MIN_HOURS = 1
SCORE_MIN = 0
SCORE_MAX = 100

# (minimum completion percent, multiplier), checked in order
DECAY_MULTIPLIERS: list[tuple[int, float]] = [
    (100, 0.0),
    (80, 0.3),
    (50, 0.7),
    (25, 1.2),
    (0, 1.8),
]

# ------------------------------------------------------------------------------------------------
# Streaks
# ------------------------------------------------------------------------------------------------

STREAK_STATE_NO_ACTIVITY = "no_activity_yet"
STREAK_STATE_ACTIVE_TODAY = "active_today"
STREAK_STATE_AWAITING_TODAY = "awaiting_today"
STREAK_STATE_BROKEN = "streak_broken"

STREAK_MILESTONES_BASE = [3, 7, 14, 30, 60, 90, 100]
STREAK_MILESTONES_EXTENDED = [*STREAK_MILESTONES_BASE, 180, 365]

STREAK_MILESTONES: dict[str, list[int]] = {
    STREAK_TYPE_GENERAL: STREAK_MILESTONES_EXTENDED,
    STREAK_TYPE_PRAYER: STREAK_MILESTONES_EXTENDED,
    STREAK_TYPE_QURAN: STREAK_MILESTONES_BASE,
    STREAK_TYPE_WORKOUT: STREAK_MILESTONES_BASE,
}

# ------------------------------------------------------------------------------------------------
# Remote Row Columns
# ------------------------------------------------------------------------------------------------

REMOTE_USER_ID = "user_id"
REMOTE_UPDATED_AT = "updated_at"
REMOTE_OVERALL_SCORE = "overall_score"
REMOTE_LAST_DAILY_RESET = "last_daily_reset"
REMOTE_LAST_WEEKLY_RESET = "last_weekly_reset"

# (category, record key, column) for scalar goal fields
REMOTE_GOAL_COLUMNS: list[tuple[str, str, str]] = [
    (CATEGORY_PRAYER, DATA_PRAYER_SUNNAH_GOAL, "sunnah_daily_goal"),
    (CATEGORY_PRAYER, DATA_PRAYER_SUNNAH_COMPLETED, "sunnah_completed"),
    (CATEGORY_PRAYER, DATA_PRAYER_TAHAJJUD_GOAL, "tahajjud_weekly_goal"),
    (CATEGORY_PRAYER, DATA_PRAYER_TAHAJJUD_COMPLETED, "tahajjud_completed"),
    (CATEGORY_DHIKR, DATA_DHIKR_DAILY_GOAL, "dhikr_daily_goal"),
    (CATEGORY_DHIKR, DATA_DHIKR_DAILY_COMPLETED, "dhikr_daily_completed"),
    (CATEGORY_DHIKR, DATA_DHIKR_WEEKLY_GOAL, "dhikr_weekly_goal"),
    (CATEGORY_DHIKR, DATA_DHIKR_WEEKLY_COMPLETED, "dhikr_weekly_completed"),
    (CATEGORY_QURAN, DATA_QURAN_PAGES_GOAL, "quran_daily_pages_goal"),
    (CATEGORY_QURAN, DATA_QURAN_PAGES_COMPLETED, "quran_daily_pages_completed"),
    (CATEGORY_QURAN, DATA_QURAN_VERSES_GOAL, "quran_daily_verses_goal"),
    (CATEGORY_QURAN, DATA_QURAN_VERSES_COMPLETED, "quran_daily_verses_completed"),
    (CATEGORY_QURAN, DATA_QURAN_MEMORIZATION_GOAL, "quran_weekly_memorization_goal"),
    (
        CATEGORY_QURAN,
        DATA_QURAN_MEMORIZATION_COMPLETED,
        "quran_weekly_memorization_completed",
    ),
    (CATEGORY_FASTING, DATA_FASTING_WEEKLY_GOAL, "fasting_weekly_goal"),
    (CATEGORY_FASTING, DATA_FASTING_WEEKLY_COMPLETED, "fasting_weekly_completed"),
]

REMOTE_FARD_PREFIX = "fard_"
REMOTE_QADA_PREFIX = "qada_"
REMOTE_SCORE_SUFFIX = "_score"

# Streak columns: general streak uses the unprefixed names
REMOTE_STREAK_COLUMNS: dict[str, str] = {
    DATA_STREAK_CURRENT: "current_streak",
    DATA_STREAK_LONGEST: "longest_streak",
    DATA_STREAK_TOTAL_DAYS: "total_days_active",
    DATA_STREAK_LAST_ACTIVE: "last_active_date",
    DATA_STREAK_START: "streak_start_date",
}

# ------------------------------------------------------------------------------------------------
# Attributes
# ------------------------------------------------------------------------------------------------

ATTR_CAPPED_SCORE = "capped_score"
ATTR_CATEGORY = "category"
ATTR_DAILY_MET = "daily_met"
ATTR_GOALS = "goals"
ATTR_LAST_SYNCED = "last_synced"
ATTR_MILESTONE = "milestone"
ATTR_SECTION_SCORES = "section_scores"
ATTR_STREAK_STATE = "streak_state"
ATTR_STREAK_TYPE = "streak_type"
ATTR_USER_ID = "user_id"
ATTR_WEEK_START = "week_start"
ATTR_WEEKLY_MET = "weekly_met"

# Sensor unique id / entity id suffixes
SENSOR_UID_SUFFIX_OVERALL_SCORE = "_overall_score"
SENSOR_UID_SUFFIX_SECTION_SCORE = "_section_score"
SENSOR_UID_SUFFIX_STREAK = "_streak"
SENSOR_UID_SUFFIX_QADA = "_qada"

# Translation keys
TRANS_KEY_SENSOR_OVERALL_SCORE = "overall_score"
TRANS_KEY_SENSOR_SECTION_SCORE = "section_score"
TRANS_KEY_SENSOR_STREAK = "streak"
TRANS_KEY_SENSOR_QADA = "qada"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------

SERVICE_ADD_DHIKR = "add_dhikr"
SERVICE_ADJUST_QADA = "adjust_qada"
SERVICE_LOG_FASTING_DAY = "log_fasting_day"
SERVICE_LOG_QURAN = "log_quran"
SERVICE_LOG_SUNNAH = "log_sunnah"
SERVICE_LOG_TAHAJJUD = "log_tahajjud"
SERVICE_MARK_PRAYER = "mark_prayer"
SERVICE_RECORD_WORKOUT = "record_workout"
SERVICE_RESET_STREAK = "reset_streak"
SERVICE_SET_GOAL = "set_goal"
SERVICE_SYNC_NOW = "sync_now"

SERVICES = [
    SERVICE_ADD_DHIKR,
    SERVICE_ADJUST_QADA,
    SERVICE_LOG_FASTING_DAY,
    SERVICE_LOG_QURAN,
    SERVICE_LOG_SUNNAH,
    SERVICE_LOG_TAHAJJUD,
    SERVICE_MARK_PRAYER,
    SERVICE_RECORD_WORKOUT,
    SERVICE_RESET_STREAK,
    SERVICE_SET_GOAL,
    SERVICE_SYNC_NOW,
]

FIELD_CATEGORY = "category"
FIELD_COMPLETED = "completed"
FIELD_CONFIG_ENTRY_ID = "config_entry_id"
FIELD_COUNT = "count"
FIELD_DELTA = "delta"
FIELD_DIRECTION = "direction"
FIELD_GOAL = "goal"
FIELD_MEMORIZED = "memorized"
FIELD_PAGES = "pages"
FIELD_PRAYER = "prayer"
FIELD_STREAK_TYPE = "streak_type"
FIELD_VALUE = "value"
FIELD_VERSES = "verses"

SYNC_DIRECTION_PUSH = "push"
SYNC_DIRECTION_PULL = "pull"

# Upper bound accepted for any goal target
MAX_GOAL_VALUE = 100000

# ------------------------------------------------------------------------------------------------
# Events & Notifications
# ------------------------------------------------------------------------------------------------

EVENT_STREAK_MILESTONE = f"{DOMAIN}_streak_milestone"

NOTIFY_DOMAIN = "notify"
NOTIFY_TITLE = "title"
NOTIFY_MESSAGE = "message"
NOTIFY_DATA = "data"

NOTIFICATION_TITLE_MILESTONE = "Streak milestone"
NOTIFICATION_MESSAGE_MILESTONE = "{days} day {streak_type} streak. Keep going!"

# ------------------------------------------------------------------------------------------------
# Error Messages
# ------------------------------------------------------------------------------------------------

MSG_NO_ENTRY_FOUND = "No Iman Tracker entry found"
ERROR_ENTRY_NOT_FOUND_FMT = "Iman Tracker entry '{}' not found"
ERROR_UNKNOWN_CATEGORY_FMT = "Unknown goal category '{}'"
ERROR_UNKNOWN_GOAL_FMT = "Unknown goal '{}' for category '{}'"
ERROR_UNKNOWN_PRAYER_FMT = "Unknown prayer '{}'"
ERROR_UNKNOWN_STREAK_TYPE_FMT = "Unknown streak type '{}'"
ERROR_GOAL_OUT_OF_RANGE_FMT = "Goal value {} for '{}' must be between 0 and {}"
ERROR_NEGATIVE_AMOUNT_FMT = "Amount for '{}' must not be negative"
ERROR_USER_ID_REQUIRED = "A user id is required to build storage keys"

DISPLAY_DOT = "."
DISPLAY_UNKNOWN = "Unknown"
