"""
Centralized constants for scheduler jobs and API limits.

Change job IDs or caps here instead of scattering literals across main and routes.
"""
# Scheduler job IDs (must match ids used in main.py add_job)
ANALYTICS_ROLLUP_JOB_ID = "analytics_rollup"

# Hardware endpoint
HARDWARE_API_KEY_HEADER = "X-API-Key"
HARDWARE_ENDPOINT_NAME = "hardware-dustbin-update"

# Caller identity set by the upstream auth layer
USER_ID_HEADER = "X-User-Id"

# List caps so response size stays bounded
DUSTBIN_LIST_MAX_LIMIT = 100

# Body fields the client may never set; ownership always comes from the session
FORBIDDEN_OWNER_FIELDS = ("userId", "user_id")

DATE_FORMAT_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
