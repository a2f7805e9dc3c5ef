"""Internal constants shared across the library."""

BASE_URL = "http://localhost:5000"
USER_AGENT = "aqsync"

# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

SECTORS_ENDPOINT = "/sectors"
SECTOR_STATUS_ENDPOINT = "/sector/{sector_id}/status"
SECTOR_POLICY_ENDPOINT = "/sector/{sector_id}/policy"
SIMULATE_ENDPOINT = "/simulate"

# ------------------------------------------------------------------
# Polling / buffering defaults
# ------------------------------------------------------------------

DEFAULT_POLL_INTERVAL: float = 10.0
DEFAULT_HISTORY_CAPACITY: int = 20
DEFAULT_REQUEST_TIMEOUT: float = 10.0
DEFAULT_INITIAL_SECTOR_ID: int = 1
#: Render-completion notifications to wait before restoring scroll offset.
DEFAULT_SCROLL_RESTORE_PASSES: int = 2

# ------------------------------------------------------------------
# User-visible error messages
# ------------------------------------------------------------------

REGISTRY_ERROR_MESSAGE = "Failed to connect to backend. Is the server running?"
STATUS_ERROR_MESSAGE = "Failed to fetch sector status"
POLICY_ERROR_MESSAGE = "Failed to fetch policy"
SIMULATION_ERROR_MESSAGE = "Failed to simulate policy"

# ------------------------------------------------------------------
# PM2.5 thresholds (µg/m³)
# ------------------------------------------------------------------

DANGER_THRESHOLD: float = 250.0
WARN_THRESHOLD: float = 150.0
VERY_UNHEALTHY_THRESHOLD: float = 200.0
SENSITIVE_THRESHOLD: float = 100.0
#: Below this meteorological factor a policy is flagged as weather-limited.
POOR_DISPERSION_FACTOR: float = 0.8
