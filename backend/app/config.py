import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # --- Storage ---
    # Default to sqlite file in the working directory for dev.
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./donatehub.db')

    # --- Auth ---
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-jwt-secret')
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRES_MINUTES = int(os.getenv('JWT_EXPIRES_MINUTES', str(60 * 24 * 7)))
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))

    # --- HTTP ---
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # --- API client ---
    API_URL = os.getenv('API_URL', 'http://localhost:8000')
    API_TIMEOUT = float(os.getenv('API_TIMEOUT', '10'))
    API_RETRIES = int(os.getenv('API_RETRIES', '3'))
    API_BACKOFF = float(os.getenv('API_BACKOFF', '0.5'))
