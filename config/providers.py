"""Provider catalog and per-task routing table."""

# Discovery order matters: it is the tail order of every fallback chain.
PROVIDERS = {
    "grok": {
        "name": "Grok (xAI)",
        "sdk": "openai",
        "base_url": "https://api.x.ai/v1",
        "env_keys": ("GROK_API_KEY", "XAI_API_KEY"),
        "models": {
            "fast": "grok-3-mini-fast",
            "code": "grok-3-fast",
        },
        "default_model": "code",
        "max_tokens": 16000,
    },
    "gemini": {
        "name": "Google Gemini",
        "sdk": "openai",
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "env_keys": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        "models": {
            "pro": "gemini-2.5-pro",
            "flash": "gemini-2.5-flash",
        },
        "default_model": "pro",
        "max_tokens": 16000,
    },
    "openai": {
        "name": "OpenAI",
        "sdk": "openai",
        "base_url": None,
        "env_keys": ("OPENAI_API_KEY",),
        "models": {
            "gpt4o": "gpt-4o",
            "mini": "gpt-4o-mini",
        },
        "default_model": "gpt4o",
        "max_tokens": 16000,
    },
    "anthropic": {
        "name": "Anthropic Claude",
        "sdk": "anthropic",
        "base_url": None,
        "env_keys": ("ANTHROPIC_API_KEY",),
        "models": {
            "sonnet": "claude-sonnet-4-5-20250929",
            "haiku": "claude-haiku-4-5",
        },
        "default_model": "sonnet",
        "max_tokens": 16000,
    },
}

# task -> (primary, model alias, confidence threshold, fallback, fallback model alias)
TASK_ROUTING = {
    "intent": ("gemini", "flash", 0.85, "openai", "mini"),
    "planning": ("gemini", "pro", 0.85, "openai", "gpt4o"),
    "coding": ("grok", "code", 0.75, "gemini", "pro"),
    "repair": ("openai", "gpt4o", 0.80, "gemini", "pro"),
}

STRUCTURED_TASKS = ("intent", "planning")
GENERATION_TASKS = ("coding", "repair")

# Ensemble candidates, in preference order
ENSEMBLE_CANDIDATES = [
    ("gemini", "flash"),
    ("grok", "code"),
    ("openai", "gpt4o"),
    ("anthropic", "sonnet"),
]


def resolve_model(provider_id, alias=None):
    """Map a model alias to the provider's concrete model name."""
    provider = PROVIDERS[provider_id]
    alias = alias or provider["default_model"]
    return provider["models"].get(alias, provider["models"][provider["default_model"]])
