"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class StartWizardRequest(BaseModel):
    command: str = "push"
    # Pre-chosen repository ids; the wizard skips the picker when given
    repositories: Optional[List[str]] = None
    flags: Optional[List[str]] = None
    confirm: Optional[bool] = None


class SelectionRequest(BaseModel):
    items: List[int] = Field(default_factory=list)
    back: bool = False


class ItemView(BaseModel):
    index: int
    label: str
    description: str = ""
    detail: str = ""
    picked: bool = False
    directive: Optional[str] = None


class StepView(BaseModel):
    kind: Literal["pick", "confirm"]
    phase: str
    title: str
    placeholder: str
    multiselect: bool
    items: List[ItemView]


class WizardResponse(BaseModel):
    session_id: str
    status: Literal["AWAITING_SELECTION", "RUNNING", "COMPLETED", "CANCELLED"]
    step: Optional[StepView] = None
    repositories: Optional[List[str]] = None
    flags: Optional[List[str]] = None
    reason: Optional[str] = None
