"""Application settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

from core.errors import ConfigurationError

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _origins(raw: str) -> list[str]:
    defaults = ['http://localhost:5173', 'http://localhost:3000']
    extra = [o.strip().rstrip('/') for o in raw.split(',') if o.strip()]
    return list(dict.fromkeys(defaults + extra))


class Settings:
    """
    ─── RESTRICTED (DEVELOPMENT) KEYS ────────────────────────────────────
    A development key allows 20 requests / 1s and 100 requests / 120s.
    Match history is capped at 10 ids per lookup and match details are
    fetched one at a time with a short pause between them. Fanning out in
    parallel trips 429s on the first or second lookup.
    ──────────────────────────────────────────────────────────────────────
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Rate limits (per 1 second / per 2 minutes) ───────────────────────
    RATE_LIMIT_PER_1_SEC:           int = 18
    RATE_LIMIT_PER_2_MIN:           int = 90

    ACCOUNT_RATE_LIMIT_PER_1_SEC:   int = 18
    ACCOUNT_RATE_LIMIT_PER_2_MIN:   int = 90

    MATCH_RATE_LIMIT_PER_1_SEC:     int = 18
    MATCH_RATE_LIMIT_PER_2_MIN:     int = 90

    SUMMONER_RATE_LIMIT_PER_1_SEC:  int = 18
    SUMMONER_RATE_LIMIT_PER_2_MIN:  int = 85

    LEAGUE_RATE_LIMIT_PER_1_SEC:    int = 15
    LEAGUE_RATE_LIMIT_PER_2_MIN:    int = 75

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int   = 30
    MAX_RETRIES:     int   = 3
    RETRY_BACKOFF:   float = 2.0

    # ── Match history ──────────────────────────────────────────────────────
    MATCH_HISTORY_COUNT: int   = int(os.getenv('MATCH_HISTORY_COUNT', '10'))
    MATCH_FETCH_DELAY_S: float = float(os.getenv('MATCH_FETCH_DELAY_S', '0.05'))

    # ── Regions ────────────────────────────────────────────────────────────
    DEFAULT_PLATFORM: str = os.getenv('DEFAULT_PLATFORM', 'la1')

    # Below this level an empty ranked answer is taken at face value.
    RANK_SCRAPE_MIN_LEVEL: int = int(os.getenv('RANK_SCRAPE_MIN_LEVEL', '30'))

    # ── Third-party sites ──────────────────────────────────────────────────
    PROFILE_SITE_URL: str = os.getenv('PROFILE_SITE_URL', 'https://www.op.gg')
    BUILD_SITE_URL:   str = os.getenv('BUILD_SITE_URL',   'https://u.gg')
    BUILD_HTTP_TIMEOUT: float = float(os.getenv('BUILD_HTTP_TIMEOUT', '20'))

    # ── Static data ────────────────────────────────────────────────────────
    DDRAGON_URL:     str = os.getenv('DDRAGON_URL', 'https://ddragon.leagueoflegends.com')
    # Empty means "latest published version".
    DDRAGON_VERSION: str = os.getenv('DDRAGON_VERSION', '')
    DDRAGON_LANG:    str = os.getenv('DDRAGON_LANG', 'en_US')

    # ── Server ─────────────────────────────────────────────────────────────
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', '3001'))
    ALLOWED_ORIGINS: list = _origins(os.getenv('ALLOWED_ORIGIN', 'http://localhost:5173'))
    # Preview deployments, matched as a full-origin regex. Empty disables it.
    ALLOWED_ORIGIN_REGEX: str = os.getenv('ALLOWED_ORIGIN_REGEX', '')

    # ── Logging ────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(BASE_DIR / 'data' / 'logs')))
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_TO_FILE: bool = os.getenv('LOG_TO_FILE', 'false').strip().lower() == 'true'

    @property
    def has_api_key(self) -> bool:
        return bool(self.RIOT_API_KEY)

    def validate(self) -> None:
        if not self.RIOT_API_KEY:
            raise ConfigurationError("Riot API Key not configured in server")


settings = Settings()
