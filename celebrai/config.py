import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./celebrai.db")

# Hosted backend (auth admin API + service role key)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Comma separated list, "*" allows any origin
CORS_ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",") if origin.strip()
]

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "onboarding@resend.dev")

# Sender / display names used when the tenant lookup yields nothing
DEFAULT_TENANT_NAME = os.getenv("DEFAULT_TENANT_NAME", "Bella Arte")
OWNER_NOTIFICATION_SENDER = os.getenv("OWNER_NOTIFICATION_SENDER", "Sistema de Contratos")

# Timezone used to print signature timestamps (contracts and emails)
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "America/Sao_Paulo")
