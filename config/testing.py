"""Testing configuration."""

class TestingConfig:
    """Testing configuration class."""

    # Basic Flask config
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'

    # Database (in-memory SQLite for testing)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Rate Limiting (disabled for testing)
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = 'memory://'

    # Check-in
    CHECKIN_DEFAULT_MAX_RESULTS = 100
    CHECKIN_SEARCH_RATE_LIMIT = "1000 per minute"
    GRADE_TRANSITION_DATE = (6, 1)

    # Logging
    LOG_LEVEL = 'WARNING'
