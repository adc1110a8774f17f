"""Default pipeline settings."""

DEFAULTS = {
    "max_repair_attempts": 3,
    "request_timeout": 25,          # seconds, per backend HTTP call
    "max_tokens": 16000,            # ceiling applied to every provider
    "temperature": 0.5,
    "context_summary_chars": 2000,
    "history_turns": 4,             # conversation turns forwarded to the generator
    "excerpt_files": 8,             # existing artifacts shown when modifying
    "excerpt_chars": 1500,
    "ensemble_size": 2,
    "ensemble_enabled": True,
}

# Hard ceilings on what a single run may emit, cannot be overridden
SAFETY_LIMITS = {
    "max_repair_attempts": 3,
    "max_files_per_generation": 20,
    "max_file_size_bytes": 100_000,
    "max_total_content_bytes": 500_000,
}

STATUSES = ("pending", "planning", "generating", "validating", "completed", "failed")
