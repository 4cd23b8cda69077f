import os
from datetime import timedelta


def _env_float(name, default):
    value = os.environ.get(name)
    if value in (None, ''):
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value in (None, ''):
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    # Visitor preferences must outlive the browser session
    PERMANENT_SESSION_LIFETIME = timedelta(days=365)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON Settings
    JSON_AS_ASCII = False

    # Content
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    LOCALES_FOLDER = os.environ.get('LOCALES_FOLDER', os.path.join(BASE_DIR, 'locales'))
    PORTFOLIO_DATA_FILE = os.environ.get('PORTFOLIO_DATA_FILE', os.path.join(BASE_DIR, 'data', 'portfolio.json'))
    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE', 'es')
    I18N_STRICT = _env_bool('I18N_STRICT')

    # Preferences: 'database' or 'memory'
    PREFERENCE_BACKEND = os.environ.get('PREFERENCE_BACKEND', 'database')
    STATE_REGISTRY_MAX_VISITORS = int(os.environ.get('STATE_REGISTRY_MAX_VISITORS', '1000'))

    # Transitions (seconds): 'threading' or 'manual'
    TRANSITION_SCHEDULER = os.environ.get('TRANSITION_SCHEDULER', 'threading')
    TRANSITION_STAGE_DELAY = _env_float('TRANSITION_STAGE_DELAY', 0.05)
    TRANSITION_SETTLE_DELAY = _env_float('TRANSITION_SETTLE_DELAY', 0.3)

    # Contact form relay
    FORM_RELAY_ENDPOINT = os.environ.get('FORM_RELAY_ENDPOINT', 'https://formspree.io/f/your-form-id')
    FORM_RELAY_TIMEOUT = _env_float('FORM_RELAY_TIMEOUT', None)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite uses a StaticPool; pool options do not apply.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    TRANSITION_SCHEDULER = 'manual'
    I18N_STRICT = True
    FORM_RELAY_ENDPOINT = 'https://relay.test/f/portfolio'


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
