"""Per-model pricing used to estimate what a cache hit saved."""

# Cost per 1K tokens (USD)
DEFAULT_MODEL_COSTS: dict[str, dict[str, float]] = {
    # OpenAI
    "gpt-4": {"input": 0.03, "output": 0.06},
    "gpt-4-turbo": {"input": 0.01, "output": 0.03},
    "gpt-4o": {"input": 0.005, "output": 0.015},
    "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
    "gpt-3.5-turbo": {"input": 0.0005, "output": 0.0015},
    # Anthropic
    "claude-sonnet-4-20250514": {"input": 0.003, "output": 0.015},
    "claude-3-5-haiku-20241022": {"input": 0.001, "output": 0.005},
    # Gemini
    "gemini-pro": {"input": 0.0005, "output": 0.0015},
    "gemini-1.5-pro": {"input": 0.00125, "output": 0.005},
    # Embeddings
    "text-embedding-3-small": {"input": 0.00002, "output": 0.0},
    "text-embedding-3-large": {"input": 0.00013, "output": 0.0},
}

FALLBACK_MODEL_COST: dict[str, float] = {"input": 0.001, "output": 0.002}

# A typical request is ~500 input and ~200 output tokens
INPUT_KTOKENS_PER_REQUEST = 0.5
OUTPUT_KTOKENS_PER_REQUEST = 0.2


def cost_for(model: str, model_costs: dict[str, dict[str, float]] | None = None) -> dict[str, float]:
    """Look up pricing for a model, falling back to FALLBACK_MODEL_COST."""
    table = DEFAULT_MODEL_COSTS if model_costs is None else model_costs
    return table.get(model, FALLBACK_MODEL_COST)


def estimate_request_cost(costs: dict[str, float]) -> float:
    """Estimate the USD cost of one request at the given per-1K-token prices."""
    return round(
        costs["input"] * INPUT_KTOKENS_PER_REQUEST + costs["output"] * OUTPUT_KTOKENS_PER_REQUEST,
        6,
    )
