import os


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.getenv('SECRET_KEY', 'proof-requests-development-key')

DEBUG = os.getenv('DEBUG', 'on') == 'on'
ALLOWED_HOSTS = ['*']


INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'core',
    'proof_requests',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv('DATABASE_NAME', os.path.join(BASE_DIR, 'db.sqlite3')),
    }
}

USE_TZ = True
TIME_ZONE = 'UTC'


LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
}


INDY = {
    'WALLET_SETTINGS': {
        'config': {},
        'credentials': {}
    },
}


PROOF_REQUESTS = {
    # Agency relaying proofs to verifiers
    'AGENCY_URL': os.getenv('AGENCY_URL', 'http://localhost:8080'),
    # Reject events for unknown proof request instead of ignoring them
    'STRICT_DISPATCH': os.getenv('PROOF_REQUESTS_STRICT_DISPATCH', 'off') == 'on',
    # Seconds, None means no timeout
    'SEND_PROOF_TIMEOUT': float(os.getenv('SEND_PROOF_TIMEOUT')) if os.getenv('SEND_PROOF_TIMEOUT') else None,
}
