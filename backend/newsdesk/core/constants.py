"""
Centralized constants for sources, cache keys and scheduler jobs.

Change job IDs or keys here instead of scattering literals across main and routes.
Durations come from settings (env-driven) so deployments can tune them.
"""

# Upstream sources; each has its own cooldown row and cache entry
SOURCE_TWITTER = "twitter"
SOURCE_NEWS = "news"
ALL_SOURCES = (SOURCE_TWITTER, SOURCE_NEWS)

# feed_cache.cache_key per source
CACHE_KEY_TWITTER = "twitter:latest"
CACHE_KEY_NEWS = "news:google"

# Scheduler job IDs (must match ids used in main.py add_job)
TWITTER_REFRESH_JOB_ID = "twitter_cron_refresh"
# Scheduler ticks this many times per cooldown; extra ticks are no-ops inside the coordinator
TWITTER_REFRESH_TICKS_PER_COOLDOWN = 3
MIN_REFRESH_TICK_SECONDS = 30

# Client mirror: resync with GET /refresh-status at most this often
CLIENT_RESYNC_INTERVAL_SECONDS = 30
