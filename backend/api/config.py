# Application configuration

import os
from dotenv import load_dotenv

load_dotenv()

DB_CONFIG = {
    'host': os.getenv('MYSQL_HOST', 'localhost'),
    'port': int(os.getenv('MYSQL_PORT', '3306')),
    'user': os.getenv('MYSQL_USER', 'root'),
    'password': os.getenv('MYSQL_PASSWORD', ''),
    'database': os.getenv('MYSQL_DATABASE', 'quiz_show'),
}

# Connections handed to parallel stats queries
DB_POOL_SIZE = int(os.getenv('DB_POOL_SIZE', '5'))
STATS_MAX_WORKERS = int(os.getenv('STATS_MAX_WORKERS', '5'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '5000'))
DEBUG = os.getenv('DEBUG', 'false').lower() in ('1', 'true', 'yes')
