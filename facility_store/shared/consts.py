from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Collection(str, Enum):
    """Document store databases used by the repositories."""

    BUILDINGS = "buildings"
    ROOMS = "rooms"
    DEVICES = "devices"
    DEVICE_TYPES = "device_types"
    ROOM_CONFIGURATIONS = "room_configurations"
    UI_CONFIGURATIONS = "ui_configurations"
