"""Typed wrappers around the AI-configuration and prop endpoints."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ..models.resources import (
    AIServiceConfig,
    CreateAIConfigRequest,
    CreatePropRequest,
    Prop,
    TaskReference,
    TestConnectionRequest,
    UpdateAIConfigRequest,
    UpdatePropRequest,
)
from .client import DramaAPIClient

Payload = Union[BaseModel, Dict[str, Any]]


def _dump(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_none=True, mode="json")
    return payload


class AIConfigAPI:
    """AI service configuration endpoints (``/ai-configs``) and prompt helpers (``/ai``)."""

    def __init__(self, client: DramaAPIClient):
        self.client = client

    async def list(self, service_type: Optional[str] = None) -> List[AIServiceConfig]:
        data = await self.client.get("/ai-configs", params={"service_type": service_type})
        return [AIServiceConfig.model_validate(item) for item in data or []]

    async def get(self, config_id: int) -> AIServiceConfig:
        data = await self.client.get(f"/ai-configs/{config_id}")
        return AIServiceConfig.model_validate(data)

    async def create(self, request: Union[CreateAIConfigRequest, Dict[str, Any]]) -> AIServiceConfig:
        data = await self.client.post("/ai-configs", _dump(request))
        return AIServiceConfig.model_validate(data)

    async def update(
        self, config_id: int, request: Union[UpdateAIConfigRequest, Dict[str, Any]]
    ) -> AIServiceConfig:
        data = await self.client.put(f"/ai-configs/{config_id}", _dump(request))
        return AIServiceConfig.model_validate(data)

    async def delete(self, config_id: int) -> None:
        await self.client.delete(f"/ai-configs/{config_id}")

    async def test_connection(self, request: Union[TestConnectionRequest, Dict[str, Any]]) -> Dict[str, Any]:
        return await self.client.post("/ai-configs/test", _dump(request))

    async def reverse_prompt(self, image_url: str) -> Dict[str, Any]:
        """Generate a text prompt describing the image at ``image_url``; returns ``{"prompt": ...}``."""
        data = await self.client.post("/ai/reverse-prompt", {"image_url": image_url})
        return data or {}

    async def optimize_prompt(self, request: Dict[str, Any]) -> Any:
        """Rewrite a prompt. This POST is retried on transport errors and 5xx."""
        return await self.client.post("/ai/optimize-prompt", request)


class PropAPI:
    """Prop endpoints, including the shared prop library."""

    def __init__(self, client: DramaAPIClient):
        self.client = client

    async def list(self, drama_id: Union[int, str]) -> List[Prop]:
        data = await self.client.get(f"/dramas/{drama_id}/props")
        return [Prop.model_validate(item) for item in data or []]

    async def list_by_episode(self, episode_id: Union[int, str]) -> List[Prop]:
        data = await self.client.get(f"/episodes/{episode_id}/props")
        return [Prop.model_validate(item) for item in data or []]

    async def create(self, request: Union[CreatePropRequest, Dict[str, Any]]) -> Prop:
        data = await self.client.post("/props", _dump(request))
        return Prop.model_validate(data)

    async def update(self, prop_id: int, request: Union[UpdatePropRequest, Dict[str, Any]]) -> Prop:
        data = await self.client.put(f"/props/{prop_id}", _dump(request))
        return Prop.model_validate(data)

    async def delete(self, prop_id: int) -> None:
        await self.client.delete(f"/props/{prop_id}")

    async def extract_from_script(self, episode_id: int) -> TaskReference:
        data = await self.client.post(f"/episodes/{episode_id}/props/extract")
        return TaskReference.model_validate(data)

    async def generate_image(self, prop_id: int) -> TaskReference:
        data = await self.client.post(f"/props/{prop_id}/generate")
        return TaskReference.model_validate(data)

    async def associate_with_storyboard(self, storyboard_id: int, prop_ids: List[int]) -> None:
        await self.client.post(f"/storyboards/{storyboard_id}/props", {"prop_ids": prop_ids})

    async def list_library(self, user_id: int) -> Any:
        return await self.client.get("/props/library", params={"user_id": user_id})

    async def add_to_library(self, prop_id: int, user_id: int, permission: Optional[str] = None) -> Any:
        body = {"prop_id": prop_id, "user_id": user_id}
        if permission is not None:
            body["permission"] = permission
        return await self.client.post("/props/library", body)

    async def update_library(self, item_id: int, permission: str) -> None:
        await self.client.put(f"/props/library/{item_id}", {"permission": permission})

    async def delete_library(self, item_id: int) -> None:
        await self.client.delete(f"/props/library/{item_id}")
