import os
from dotenv import load_dotenv

load_dotenv()

NASA_FIRMS_MAP_KEY = os.getenv("NASA_FIRMS_MAP_KEY") or os.getenv("NASA_API_KEY")
FIRMS_BASE_URL = os.getenv(
    "FIRMS_BASE_URL", "https://firms.modaps.eosdis.nasa.gov/api/area/csv"
)
FIRMS_USER_AGENT = os.getenv("FIRMS_USER_AGENT", "StudySafe-Lite")

# seconds
FIRMS_NEARBY_TIMEOUT = float(os.getenv("FIRMS_NEARBY_TIMEOUT", "25"))
FIRMS_REGION_TIMEOUT = float(os.getenv("FIRMS_REGION_TIMEOUT", "60"))

FIRES_CACHE_TTL_SECONDS = float(os.getenv("FIRES_CACHE_TTL_SECONDS", "300"))
FIRES_CACHE_MAX_ENTRIES = int(os.getenv("FIRES_CACHE_MAX_ENTRIES", "32"))

# FIRMS area API accepts 1-10 trailing days; keep requests small
MAX_DAY_WINDOW = int(os.getenv("MAX_DAY_WINDOW", "2"))

FLARE_MAX_FRP = float(os.getenv("FLARE_MAX_FRP", "5.0"))
FLARE_MAX_BRIGHTNESS = float(os.getenv("FLARE_MAX_BRIGHTNESS", "330.0"))
FLARE_MAX_CONFIDENCE = float(os.getenv("FLARE_MAX_CONFIDENCE", "60.0"))

GEOCODER_BASE_URL = os.getenv("GEOCODER_BASE_URL", "https://api.zippopotam.us/us")

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
