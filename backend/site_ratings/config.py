"""Configuration management for the site ratings backend."""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from site_ratings.lib.exceptions import ConfigurationError

# Load .env from the working directory first, then from the per-user
# location so secrets can live outside the repository:
#
#   mkdir -p ~/.site_ratings
#   cp .env.example ~/.site_ratings/.env
#   chmod 600 ~/.site_ratings/.env

_env_loaded_from: Optional[str] = None


def _load_env_file() -> Optional[str]:
    """Load .env from the working directory or ~/.site_ratings."""
    for env_path in (Path.cwd() / '.env', Path.home() / '.site_ratings' / '.env'):
        if env_path.exists():
            load_dotenv(env_path)
            return str(env_path)

    return None


_env_loaded_from = _load_env_file()

logger = logging.getLogger(__name__)

DEV_BASE_URL = 'http://localhost:4321'
PRODUCTION_BASE_URL = 'https://ratings-api-rouge.vercel.app'

DEFAULT_EMAIL_FROM = 'Ebongue Avocats <onboarding@resend.dev>'
DEFAULT_EMAIL_TO = 'alexis.besner1@gmail.com'

VALID_STORE_BACKENDS = ('sql', 'rest', 'memory')


def get_app_env() -> str:
    """Get the deployment environment name, default to development."""
    return os.getenv('APP_ENV', 'development').lower()


def is_dev_mode() -> bool:
    """True when running locally rather than deployed."""
    return get_app_env() in ('development', 'dev', 'local')


def get_base_url() -> str:
    """Get the public base URL for the site.

    BASE_URL wins when set; otherwise the environment flag picks between the
    local dev server and the deployed host.
    """
    override = os.getenv('BASE_URL')
    if override:
        return override.rstrip('/')
    return DEV_BASE_URL if is_dev_mode() else PRODUCTION_BASE_URL


def get_log_level() -> str:
    """Get log level from environment, default to INFO."""
    level = os.getenv('LOG_LEVEL', 'INFO').upper()
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    if level not in valid_levels:
        logger.warning("Invalid log level '%s', defaulting to INFO", level)
        return 'INFO'

    return level


def get_cors_origins() -> list[str]:
    """Parse comma-separated CORS origins into a list."""
    raw = os.getenv('CORS_ORIGINS', '*').strip()
    if raw == '*':
        return ['*']
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


def get_store_backend() -> str:
    """Get which ratings store backend to use (sql, rest or memory)."""
    backend = os.getenv('RATINGS_STORE', 'sql').lower()
    if backend not in VALID_STORE_BACKENDS:
        raise ConfigurationError(
            f"RATINGS_STORE must be one of {', '.join(VALID_STORE_BACKENDS)}, got '{backend}'"
        )
    return backend


def get_database_url() -> str:
    """Get the PostgreSQL connection URL for the SQL store.

    Reads DATABASE_URL, falling back to a URL built from POSTGRES_* variables.
    """
    url = os.getenv('DATABASE_URL')
    if url:
        return url

    db_user = os.getenv('POSTGRES_USER', 'postgres')
    db_pass = os.getenv('POSTGRES_PASSWORD', 'postgres')
    db_host = os.getenv('POSTGRES_HOST', 'localhost')
    db_port = os.getenv('POSTGRES_PORT', '5432')
    db_name = os.getenv('POSTGRES_DB', 'site_ratings')

    return f"postgresql+psycopg://{db_user}:{db_pass}@{db_host}:{db_port}/{db_name}"


def get_supabase_url() -> Optional[str]:
    """Get the hosted REST endpoint root (e.g. https://xyz.supabase.co)."""
    return os.getenv('SUPABASE_URL')


def get_supabase_key() -> Optional[str]:
    """Get the API key for the hosted REST endpoint."""
    return os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_ANON_KEY')


def get_store_timeout_seconds() -> float:
    """Get the transport timeout for the REST store."""
    raw = os.getenv('STORE_TIMEOUT_SECONDS', '10')
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid STORE_TIMEOUT_SECONDS '%s', defaulting to 10", raw)
        return 10.0


def get_resend_api_key() -> Optional[str]:
    """Get the Resend API key from environment."""
    return os.getenv('RESEND_API_KEY') or None


def require_resend_api_key() -> str:
    """Get the Resend API key or fail hard when it is missing."""
    api_key = get_resend_api_key()
    if not api_key:
        raise ConfigurationError('Missing RESEND_API_KEY environment variable')
    return api_key


def get_email_from() -> str:
    """Sender address for outgoing email."""
    return os.getenv('EMAIL_FROM') or DEFAULT_EMAIL_FROM


def get_email_to() -> str:
    """Fixed recipient for outgoing email."""
    return os.getenv('EMAIL_TO') or DEFAULT_EMAIL_TO
