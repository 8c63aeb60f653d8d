"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path

from dotenv import load_dotenv
import os


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=True)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_bool(key: str, default: bool) -> bool:
    """Get optional env var as bool (1/true/yes/on); return default if missing."""
    raw = get_optional(key, "").lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# --- Public config accessors ---

def grok_api_key() -> str:
    """Required: Grok API key for xAI (when LLM_PROVIDER=grok)."""
    return get_required("GROK_API_KEY")


def groq_api_key() -> str:
    """Required: Groq API key (when LLM_PROVIDER=groq)."""
    return get_required("GROQ_API_KEY")


def llm_provider() -> str:
    """Optional: LLM provider. Default grok (xAI). Use groq for free tier (Llama via Groq)."""
    return get_optional("LLM_PROVIDER", "grok").lower().strip()


def llm_base_url() -> str:
    """Chat completions URL for the active LLM provider."""
    if llm_provider() == "groq":
        return "https://api.groq.com/openai/v1/chat/completions"
    return "https://api.x.ai/v1/chat/completions"


def llm_api_key() -> str:
    """API key for the active LLM provider."""
    if llm_provider() == "groq":
        return groq_api_key()
    return grok_api_key()


def llm_model() -> str:
    """Model name for the active LLM provider."""
    if llm_provider() == "groq":
        return get_optional("GROQ_MODEL", "llama-3.3-70b-versatile")
    return get_optional("GROK_MODEL", "grok-4-1-fast")


def llm_max_tokens() -> int:
    """Optional: max tokens for insight completions. Default 120."""
    return get_optional_int("INSIGHT_MAX_TOKENS", 120)


def insight_enabled() -> bool:
    """Optional: fetch age insights from the LLM. Default on."""
    return get_optional_bool("INSIGHT_ENABLED", True)


def profile_dir() -> Path:
    """Optional: directory for the saved profile and milestones. Default data/profile."""
    raw = get_optional("PROFILE_DIR", "")
    return Path(raw) if raw else _project_root() / "data" / "profile"


def profile_persist() -> bool:
    """Optional: save the profile to disk. Off keeps it for the browser session only. Default on."""
    return get_optional_bool("PROFILE_PERSIST", True)


def log_level() -> str:
    """Optional: logging level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()


def age_timer_interval_seconds() -> int:
    """Optional: refresh interval of the live age counter. Default 1 second."""
    return max(1, get_optional_int("AGE_TIMER_INTERVAL_SECONDS", 1))


def countdown_interval_seconds() -> int:
    """Optional: refresh interval of birthday countdowns. Default 60 seconds."""
    return max(1, get_optional_int("COUNTDOWN_INTERVAL_SECONDS", 60))


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
