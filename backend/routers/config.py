"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager, check_logging, check_server
from services.logging_setup import setup_logging

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    server: dict | None = None
    logging: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    server: dict
    logging: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(server=config["server"], logging=config["logging"])


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    try:
        if request.server:
            current_config["server"] = check_server({**current_config["server"], **request.server})
        if request.logging:
            current_config["logging"] = check_logging({**current_config["logging"], **request.logging})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    config_manager.save_config(current_config)
    if request.logging:
        setup_logging(current_config["logging"]["level"])

    return {"status": "success", "message": "Configuration updated"}
