"""
Configuration and shared utilities for the domain hunt pipeline.
"""

import os
import yaml
from pathlib import Path
from dotenv import load_dotenv

# Pre-import clients so provider lookups stay cheap
from groq import AsyncGroq
from openai import AsyncOpenAI

# Client cache to avoid recreating clients for every generation call
_client_cache: dict = {}

# Load environment variables
load_dotenv()

# Paths
STATE_DIR = Path(os.environ.get("DOMAIN_HUNT_STATE_DIR", "state"))
MODELS_CONFIG = Path("models.yaml")
EXPORTS_DIR = Path("exports")

DEFAULT_MODEL = "groq/llama-3.1-8b-instant"

# Listing
PAGE_SIZE = 10

# Free scrape channel
FREE_SCRAPE_URL = "https://www.expireddomains.net/deleted-domains/"
FREE_SCRAPE_TIMEOUT = 10
FREE_SCRAPE_LIMIT = 50
FREE_SCRAPE_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

# Vendor enrichment (SpamZilla)
SPAMZILLA_API_URL = "https://api.spamzilla.io/v1"
ENRICH_TIMEOUT = 10


def get_spamzilla_api_key() -> str:
    return os.environ.get("SPAMZILLA_API_KEY", "")


def load_models_config():
    """Load models configuration from YAML."""
    if MODELS_CONFIG.exists():
        with open(MODELS_CONFIG) as f:
            return yaml.safe_load(f) or {"default": DEFAULT_MODEL, "models": {}}
    return {"default": DEFAULT_MODEL, "models": {}}


def get_default_model() -> str:
    return load_models_config().get("default") or DEFAULT_MODEL


def _get_cached_client(provider: str):
    """Get or create a cached async client for a provider."""
    if provider in _client_cache:
        return _client_cache[provider]

    if provider == "groq":
        client = AsyncGroq()
    elif provider == "openai":
        client = AsyncOpenAI()
    elif provider == "xai":
        client = AsyncOpenAI(base_url="https://api.x.ai/v1", api_key=os.environ.get("XAI_API_KEY"))
    elif provider == "deepseek":
        client = AsyncOpenAI(base_url="https://api.deepseek.com/v1", api_key=os.environ.get("DEEPSEEK_API_KEY"), timeout=30.0)
    elif provider == "together":
        client = AsyncOpenAI(base_url="https://api.together.xyz/v1", api_key=os.environ.get("TOGETHER_API_KEY"))
    elif provider == "openrouter":
        client = AsyncOpenAI(base_url="https://openrouter.ai/api/v1", api_key=os.environ.get("OPENROUTER_API_KEY"))
    elif provider == "ollama":
        host = os.environ.get("OLLAMA_HOST", "http://localhost:11434")
        client = AsyncOpenAI(base_url=f"{host}/v1", api_key="ollama")
    else:
        raise ValueError(f"Unknown provider: {provider}")

    _client_cache[provider] = client
    return client


def get_client(model_key: str):
    """
    Get appropriate API client for a model.

    Supports two formats:
    1. "provider/model-name" - parsed dynamically (preferred)
    2. Key in models.yaml

    Returns (client, model_config) tuple.
    """
    if "/" in model_key:
        provider, model_name = model_key.split("/", 1)
        provider = provider.lower()
        model_cfg = {"provider": provider, "model": model_name, "temperature": 0.7}
        return _get_cached_client(provider), model_cfg

    models = load_models_config()
    if models and model_key in models.get("models", {}):
        model_cfg = models["models"][model_key]
        provider = model_cfg["provider"]
        env_key = model_cfg.get("env_key", "")

        if env_key and env_key != "OLLAMA_HOST" and not os.environ.get(env_key):
            raise ValueError(f"{env_key} not found in environment")

        return _get_cached_client(provider), model_cfg

    raise ValueError(f"Unknown model: {model_key}")


PROFILE_PROMPT = """You are an SEO and content strategist. A user just bought the expired domain below and wants to build a content site on it.

DOMAIN: {domain}
WORDS IN THE NAME: {words}
TLD: .{tld}

Known history:
- Majestic topics: {topics}
- Domain age: {age}
- Domain authority: {domain_authority}
- Trust flow: {trust_flow}

Work out the most plausible niche for this name and its backlink history, then plan the site.

Return ONLY a JSON object, no markdown, no text before or after:

{{
  "niche": "short niche name",
  "nicheDescription": "one or two sentences",
  "primaryKeywords": ["5-8 head keywords"],
  "secondaryKeywords": ["8-12 long-tail keywords"],
  "questionKeywords": ["5-8 questions people search for"],
  "suggestedTopics": ["10 article titles"],
  "suggestedCategories": ["4-6 site categories"],
  "contentAngles": ["3-5 angles that set the site apart"],
  "monetizationHints": ["3-5 ways to monetize"]
}}
"""
