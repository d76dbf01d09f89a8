"""Model catalog: which model names belong to which provider."""

from typing import Final

from services.qwen_adapter.core.config.constants import ProviderID

QWEN_MODELS: Final[tuple[str, ...]] = (
    "qwen-max",
    "qwen-plus",
    "qwen-turbo",
    "qwen-long",
)

GEMINI_MODELS: Final[tuple[str, ...]] = (
    "gemini-2.5-pro",
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)


def is_qwen_model(model: str) -> bool:
    """Check whether a model name is served by Qwen."""
    return model in QWEN_MODELS or model.startswith("qwen-")


def is_gemini_model(model: str) -> bool:
    """Check whether a model name is served natively by Gemini."""
    return model in GEMINI_MODELS or model.startswith("gemini-")


def get_model_provider(model: str) -> ProviderID:
    """Resolve the provider of a model name.

    Args:
        model: Model name, e.g. "qwen-plus" or "gemini-2.5-pro".

    Returns:
        The matching ProviderID, or ProviderID.UNKNOWN.
    """
    if is_qwen_model(model):
        return ProviderID.QWEN
    if is_gemini_model(model):
        return ProviderID.GEMINI
    return ProviderID.UNKNOWN
