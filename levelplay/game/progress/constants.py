DEFAULT_RECENT_ATTEMPTS_WINDOW = 5
DEFAULT_PROGRESS_CACHE_TTL_SECONDS = 300

SIGNIFICANT_MODE_PROGRESS_PERCENT = 10
SIGNIFICANT_OVERALL_PROGRESS_PERCENT = 5
