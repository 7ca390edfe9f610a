import os


def _origins(raw):
    origins = [o.strip() for o in raw.split(',') if o.strip()]
    if not origins or origins == ['*']:
        return '*'
    return origins


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('PORT', '4000'))
    # Simulation steps per second for every running match
    TICK_RATE_HZ = int(os.environ.get('TICK_RATE_HZ', '60'))
    # Used when a client creates a match without sending maxScore
    DEFAULT_MAX_SCORE = int(os.environ.get('DEFAULT_MAX_SCORE', '5'))
    # Comma-separated list, or * for any origin
    CORS_ORIGINS = _origins(os.environ.get('CORS_ORIGINS', '*'))
    # Tests drive matches by hand unless this is set
    ENABLE_TICKER_IN_TESTS = bool(int(os.environ.get('ENABLE_TICKER_IN_TESTS', '0')))
