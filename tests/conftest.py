"""Test environment: settings are read at import time, so provide them before app modules load."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("JWT_SECRET", "test-secret-for-session-tokens")
os.environ.setdefault("SESSION_EXPIRE_HOURS", "24")
