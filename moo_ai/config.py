# Moo AI - Configuration
# Read once from the environment (and a local .env file, if present).

import os

from dotenv import load_dotenv

load_dotenv()

# "anthropic" calls the Messages API directly; "relay" posts to the app's backend /chat endpoint
COMPLETION_BACKEND = os.getenv("COMPLETION_BACKEND", "anthropic").strip().lower()

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-6")
MAX_TOKENS = int(os.getenv("MAX_TOKENS", "1024"))

RELAY_URL = os.getenv("RELAY_URL", "http://localhost:8080").rstrip("/")

# Seconds before a completion call is abandoned and treated as a failure
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "20"))

# Used until the session has named a breed / topic of its own
DEFAULT_BREED = os.getenv("DEFAULT_BREED", "general")
DEFAULT_TOPICS = [t.strip() for t in os.getenv("DEFAULT_TOPICS", "general").split(",") if t.strip()]

# Sessions idle for longer than this many seconds are forgotten (0 = keep until closed)
SESSION_TTL_SECONDS = float(os.getenv("SESSION_TTL_SECONDS", "7200"))

_default_origins = "http://localhost:8081,http://localhost:19006"
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", _default_origins).split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
