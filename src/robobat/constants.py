from datetime import timedelta
from typing import Final

# Simulation
DRAIN_RATE: Final = 0.5  # level units lost per tick
HISTORY_CAPACITY: Final = 20
MAX_LEVEL: Final = 100.0
MIN_LEVEL: Final = 0.0
DEFAULT_THRESHOLD: Final = 20.0
DEFAULT_TICK_SECONDS: Final = 1.0

# Voltage is a linear map of level onto 10.0 V .. 12.6 V
BASE_VOLTAGE: Final = 10.0
VOLTAGE_SPAN: Final = 2.6

INITIAL_TEMPERATURE: Final = 35.0
TEMPERATURE_JITTER: Final = 0.5
TEMPERATURE_ALERT: Final = 40.0

# Remote event log (placeholder user listing repurposed as log records)
LOG_API_URL: Final = "https://jsonplaceholder.typicode.com/users"
LOG_ENTRY_COUNT: Final = 6
LOG_SPACING_MINUTES: Final = 10

# Notifications stay on screen for this long unless dismissed
NOTIFICATION_LIFETIME: timedelta = timedelta(seconds=5)
