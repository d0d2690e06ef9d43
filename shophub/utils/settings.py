# shophub/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

API_BASE_URL = os.getenv("SHOPHUB_API_URL", "http://localhost:5001")
API_TIMEOUT_SECONDS = float(os.getenv("SHOPHUB_API_TIMEOUT", 30))
HTTP_ATTEMPTS = int(os.getenv("SHOPHUB_HTTP_ATTEMPTS", 1))
LOG_LEVEL = os.getenv("SHOPHUB_LOG_LEVEL", "INFO")
