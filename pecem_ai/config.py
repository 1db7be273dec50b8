# pecem_ai/config.py
import os
import pathlib
from dotenv import load_dotenv

load_dotenv()

_FALSY = {"0", "false", "no"}


def env_flag(name: str, default: str = "1") -> bool:
    return str(os.getenv(name, default)).lower() not in _FALSY


# Employment hub used by the geographic component (Pecém port complex)
HUB_LATITUDE = float(os.getenv("PECEM_HUB_LAT", "-3.6"))
HUB_LONGITUDE = float(os.getenv("PECEM_HUB_LNG", "-38.97"))

# Candidates from this state get the regional location tier
REFERENCE_STATE = os.getenv("PECEM_REFERENCE_STATE", "CE")

# Certifications expiring within this many days are flagged "expiring"
EXPIRING_WINDOW_DAYS = int(os.getenv("PECEM_EXPIRING_WINDOW_DAYS", "60"))

_DEFAULT_CATALOG = pathlib.Path(__file__).parent / "data" / "certifications.json"
CERTIFICATION_CATALOG_PATH = os.getenv("PECEM_CERTIFICATION_CATALOG", str(_DEFAULT_CATALOG))

# Default search behaviour (callers can still override per request)
SEARCH_FUZZY = env_flag("PECEM_SEARCH_FUZZY", "1")
SEARCH_SYNONYMS = env_flag("PECEM_SEARCH_SYNONYMS", "1")
SEARCH_MIN_SCORE = 20
SEARCH_MAX_RESULTS = 20
