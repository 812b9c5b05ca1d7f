"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from services.config_manager import ConfigManager
from services.exceptions import EditSuggestionError
from services.llm_service import LLMService

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    provider: str | None = None
    openai: dict | None = None
    gemini: dict | None = None
    vllm: dict | None = None
    workspace: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    provider: str
    openai: dict
    gemini: dict
    vllm: dict
    workspace: dict


class ValidateResponse(BaseModel):
    """Validation response"""

    valid: bool
    message: str
    provider: str


def mask_key(key: str) -> str:
    """Mask an API key, keeping the first and last four characters"""
    if not key:
        return ""
    if len(key) <= 8:
        return "*" * len(key)
    return key[:4] + "*" * (len(key) - 8) + key[-4:]


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    providers = {}
    for name in ("openai", "gemini", "vllm"):
        section = config.get(name, {}).copy()
        section["apiKey"] = mask_key(section.get("apiKey", ""))
        providers[name] = section

    return ConfigResponse(
        provider=config.get("provider", "openai"),
        workspace=config.get("workspace", {}),
        **providers,
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.provider:
        current_config["provider"] = request.provider
    for name in ("openai", "gemini", "vllm", "workspace"):
        section = getattr(request, name)
        if section:
            current_config[name] = {**current_config.get(name, {}), **section}

    config_manager.save_config(current_config)

    return {"status": "success", "message": "Configuration updated"}


@router.post("/validate", response_model=ValidateResponse)
async def validate_config() -> ValidateResponse:
    """Validate current configuration by testing LLM connection"""
    config = ConfigManager.get_instance().get_config()
    provider = config.get("provider", "openai")

    try:
        llm_service = LLMService(config)
        # Simple test prompt
        response = await llm_service.generate_response("Say 'OK' if you can hear me.")
    except EditSuggestionError as e:
        return ValidateResponse(
            valid=False,
            message=f"Connection failed: {str(e)}",
            provider=provider,
        )

    if response:
        return ValidateResponse(
            valid=True,
            message=f"Successfully connected to {provider}",
            provider=provider,
        )
    return ValidateResponse(
        valid=False,
        message="Received empty response from LLM",
        provider=provider,
    )
