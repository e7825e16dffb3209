"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("GOVERNANCE_DB_PATH", "governance.duckdb")

# Logging
LOG_DIR = Path(os.getenv("GOVERNANCE_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("GOVERNANCE_LOG_LEVEL", "INFO")

# Remote collaborators (unset: profiles come from the local user_profile table)
REPUTATION_API_URL = os.getenv("REPUTATION_API_URL") or None
IDENTITY_API_URL = os.getenv("IDENTITY_API_URL") or None
API_TIMEOUT = int(os.getenv("GOVERNANCE_API_TIMEOUT", "10"))

# Voting
SECTION_MULTIPLIER_MIN = float(os.getenv("SECTION_MULTIPLIER_MIN", "0.7"))
SECTION_MULTIPLIER_MAX = float(os.getenv("SECTION_MULTIPLIER_MAX", "1.5"))
VOTE_TIMING_JITTER_MAX_SECONDS = int(os.getenv("VOTE_TIMING_JITTER_MAX_SECONDS", "7200"))
MAX_VOTE_CHANGES = int(os.getenv("MAX_VOTE_CHANGES", "5"))

# Polls
MINIMUM_REPUTATION_TO_CREATE_POLL = float(os.getenv("MINIMUM_REPUTATION_TO_CREATE_POLL", "25"))
POLL_CREATION_COST_GENERAL = int(os.getenv("POLL_CREATION_COST_GENERAL", "500"))
POLL_CREATION_COST_GOVERNANCE = int(os.getenv("POLL_CREATION_COST_GOVERNANCE", "1000"))
POLL_DEFAULT_DURATION_DAYS = int(os.getenv("POLL_DEFAULT_DURATION_DAYS", "7"))
POLL_MINIMUM_VOTE_QUORUM = int(os.getenv("POLL_MINIMUM_VOTE_QUORUM", "1000"))

# Staking
MINIMUM_STAKE_AMOUNT = int(os.getenv("MINIMUM_STAKE_AMOUNT", "10"))

# Rollback
FOUNDER_USER_ID = os.getenv("FOUNDER_USER_ID") or None
PLATFORM_LAUNCH_AT = os.getenv("PLATFORM_LAUNCH_AT") or None
