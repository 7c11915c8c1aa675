import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Store retry policy
STORE_MAX_RETRIES = int(os.getenv("STORE_MAX_RETRIES", "3"))
STORE_RETRY_DELAY = float(os.getenv("STORE_RETRY_DELAY", "1.0"))  # seconds

# Break reminder delivery (optional)
BREAK_REMINDER_WEBHOOK_URL = os.getenv("BREAK_REMINDER_WEBHOOK_URL")
