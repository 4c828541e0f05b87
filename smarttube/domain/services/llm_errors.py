from __future__ import annotations


def describe_llm_error(message: str) -> str:
    """Map a raw completion API error to a message fit for end users."""
    if "401" in message:
        return "API Key is invalid or expired. Please check the OpenRouter API key configuration."
    if "429" in message:
        return "Rate limit exceeded. Please try again later."
    if "404" in message:
        return "API endpoint not found. Please check your network connection."
    if "model_not_found" in message:
        return "The AI model is currently unavailable. Please try again later."
    if "timeout" in message.lower():
        return "Request timed out. The server might be busy, please try again."
    return f"API Error: {message or 'Unknown error'}. Please try again."
