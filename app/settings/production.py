from .base import *


DEBUG = False
LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')
LOGGING['root']['level'] = LOG_LEVEL
