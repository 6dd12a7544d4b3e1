from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from enum import Enum


class ServiceType(str, Enum):
    """Kinds of AI service a configuration can back."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class AIServiceConfig(BaseModel):
    """AI service configuration as returned by ``/ai-configs``."""
    id: int
    service_type: ServiceType
    name: str
    provider: str
    base_url: str
    api_key: Optional[str] = None
    model: Any = None  # A single model name or a list of them
    endpoint: Optional[str] = None
    query_endpoint: Optional[str] = None
    priority: int = 0
    is_default: bool = False
    is_active: bool = True
    settings: Optional[str] = None

    class Config:
        extra = "allow"


class CreateAIConfigRequest(BaseModel):
    service_type: ServiceType
    name: str = Field(..., min_length=1, max_length=100)
    provider: str
    base_url: str
    api_key: str
    model: Any
    endpoint: Optional[str] = None
    query_endpoint: Optional[str] = None
    priority: int = 0
    is_default: bool = False
    settings: Optional[str] = None


class UpdateAIConfigRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    provider: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: Any = None
    endpoint: Optional[str] = None
    query_endpoint: Optional[str] = None
    priority: Optional[int] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None
    settings: Optional[str] = None


class TestConnectionRequest(BaseModel):
    base_url: str
    api_key: str
    model: Any
    provider: Optional[str] = None
    endpoint: Optional[str] = None


class PropCharacter(BaseModel):
    id: int
    name: str


class PropScene(BaseModel):
    id: int
    location: Optional[str] = None
    time: Optional[str] = None


class Prop(BaseModel):
    """A prop belonging to a drama."""
    id: int
    drama_id: int
    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    image_url: Optional[str] = None
    reference_images: Any = None
    attributes: Optional[Dict[str, Any]] = None
    created_by: Optional[int] = None
    characters: Optional[List[PropCharacter]] = None
    scenes: Optional[List[PropScene]] = None
    created_at: str
    updated_at: str

    class Config:
        extra = "allow"


class CreatePropRequest(BaseModel):
    drama_id: int
    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    image_url: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    character_ids: Optional[List[int]] = None
    scene_ids: Optional[List[int]] = None
    created_by: Optional[int] = None


class UpdatePropRequest(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    image_url: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    character_ids: Optional[List[int]] = None
    scene_ids: Optional[List[int]] = None
    created_by: Optional[int] = None


class TaskReference(BaseModel):
    """Handle to an asynchronous backend task (extraction, image generation)."""
    task_id: str
    message: Optional[str] = None
