"""Application configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"

# Environment
AWS_REGION = os.getenv("AWS_REGION", "eu-west-2")
APP_ENV = os.getenv("APP_ENV", "development")
IS_PRODUCTION = APP_ENV == "production"
IS_DEVELOPMENT = APP_ENV == "development"

# Database
MONGO_URI = os.getenv("MONGO_URI", "")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "gym")

# Storage
USER_IMAGES_BUCKET = os.getenv("USER_IMAGES_BUCKET", "")

# Cognito
COGNITO_USER_POOL_ID = os.getenv("COGNITO_USER_POOL_ID", "")
COGNITO_CLIENT_ID = os.getenv("COGNITO_CLIENT_ID", "")
COGNITO_ISSUER = (
    f"https://cognito-idp.{AWS_REGION}.amazonaws.com/{COGNITO_USER_POOL_ID}"
    if COGNITO_USER_POOL_ID else ""
)

# CORS
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "*")

# Client-side services
API_BASE_URL = os.getenv("API_BASE_URL", "")
USE_MOCK_API = os.getenv("USE_MOCK_API", "false").lower() == "true"
