from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os

# Shared limiter; checkout and sign-in add tighter per-route limits
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATELIMIT_STORAGE_URL", "memory://"),
    strategy="fixed-window",
    default_limits=[os.getenv("DEFAULT_RATE_LIMIT", "600 per hour")],
)
