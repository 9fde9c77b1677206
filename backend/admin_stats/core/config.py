# backend/admin_stats/core/config.py
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")

# ── Upstream statistics API
STATS_API_BASE_URL = os.getenv("STATS_API_BASE_URL", "https://api.example.com")
STATS_API_TOKEN = os.getenv("STATS_API_TOKEN") or None
STATS_API_TIMEOUT = float(os.getenv("STATS_API_TIMEOUT", "10"))

STATS_OVERALL_PATH = os.getenv("STATS_OVERALL_PATH", "/admin/statistics/overall")
STATS_TEAMS_PATH = os.getenv("STATS_TEAMS_PATH", "/admin/statistics/teams")
STATS_DAILY_PATH = os.getenv("STATS_DAILY_PATH", "/admin/statistics/daily")
TEAM_STATS_PATH = os.getenv("TEAM_STATS_PATH", "/team/statistics")
TEAM_SHIPMENTS_PATH = os.getenv("TEAM_SHIPMENTS_PATH", "/team/statistics/shipments")

# ── Query cache
STATS_STALE_SECONDS = float(os.getenv("STATS_STALE_SECONDS", "30"))
STATS_CACHE_SIZE = int(os.getenv("STATS_CACHE_SIZE", "64"))

# Dashboards show the top N teams; the engine itself returns the full list
STATS_TEAM_LIMIT = int(os.getenv("STATS_TEAM_LIMIT", "6"))

# ── Normalization defaults
UNKNOWN_TEAM_LABEL = "Không rõ"
OTHER_METHOD_LABEL = "KHÁC"
MAX_UNWRAP_DEPTH = 10

# Statistics days are cut at Vietnam midnight (UTC+7, no DST)
VIETNAM_UTC_OFFSET_HOURS = 7
