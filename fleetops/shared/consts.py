from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Fixed agent roster of the platform.
DEFAULT_AGENT_ROSTER = (
    "lexi-pro",
    "atlas-corporate",
    "miss-legal",
    "paymaster",
    "crossai-emergency",
    "miss-academic",
    "tech-support",
    "luxury-service",
    "med-assist",
    "edu-kids",
    "gov-connect",
)

# Credentials that must be present before a deployment may start.
DEFAULT_REQUIRED_DEPLOYMENT_KEYS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "CLAUDE_API_KEY",
    "ELEVENLABS_API_KEY",
    "OPENAI_API_KEY",
    "WHATSAPP_ACCESS_TOKEN",
    "FLUTTERWAVE_SECRET_KEY",
    "GMAIL_CLIENT_ID",
)

DEFAULT_CORE_SERVICES = (
    "voice-processing",
    "email-automation",
    "payment-processing",
    "legal-services",
    "business-intelligence",
    "whatsapp-integration",
)
