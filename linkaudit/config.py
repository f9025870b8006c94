import os

# browser UA sent on every outbound request
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
)

REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))  # per outbound request
MAX_REDIRECTS = int(os.getenv("MAX_REDIRECTS", "20"))
MAX_CONTENT_BYTES = int(os.getenv("MAX_CONTENT_BYTES", str(5 * 1024 * 1024)))

# batch admission bounds
MIN_BATCH_SIZE = int(os.getenv("MIN_BATCH_SIZE", "1"))
MAX_BATCH_SIZE = int(os.getenv("MAX_BATCH_SIZE", "20"))

# ceiling on in-flight outbound requests for one batch
MAX_CONCURRENT_REQUESTS = int(os.getenv("MAX_CONCURRENT_REQUESTS", "16"))

# rt mode keeps only links containing one of these substrings
SHORTLINK_DOMAIN = os.getenv("SHORTLINK_DOMAIN", "aka.ms")
TARGET_DOMAIN = os.getenv("TARGET_DOMAIN", "query.prod")
TRACKED_DOMAINS = (SHORTLINK_DOMAIN, TARGET_DOMAIN)
