"""Pydantic models for Terraform plan input."""

from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


class ActionType(str, Enum):
    """Categorical action derived from a resource's raw action verbs."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"
    READ = "read"
    NO_OP = "no-op"


class Change(BaseModel):
    """Planned change for one resource: raw action verbs plus before/after snapshots."""
    actions: List[str] = Field(default_factory=list, description="Raw Terraform action verbs, e.g. ['delete', 'create']")
    before: Optional[Dict[str, Any]] = Field(None, description="Attribute snapshot before apply (None if the resource does not exist yet)")
    after: Optional[Dict[str, Any]] = Field(None, description="Attribute snapshot after apply (None if the resource will be destroyed)")
    after_unknown: Optional[Dict[str, Any]] = Field(None, description="Attributes only known after apply")
    before_sensitive: Optional[Any] = Field(None, description="Sensitivity markers for before")
    after_sensitive: Optional[Any] = Field(None, description="Sensitivity markers for after")

    class Config:
        """Pydantic config."""
        extra = "ignore"
        frozen = True


class ResourceChange(BaseModel):
    """One planned mutation to one infrastructure resource."""
    address: str = Field(..., description="Unique resource address within the plan")
    type: str = Field("", description="Resource type, e.g. aws_instance")
    name: Optional[str] = Field(None, description="Resource name")
    provider_name: Optional[str] = Field(None, description="Provider source address")
    change: Change = Field(default_factory=Change, description="Planned change")

    class Config:
        """Pydantic config."""
        extra = "ignore"
        frozen = True


class TerraformPlan(BaseModel):
    """Parsed Terraform plan JSON (the parts relevant to risk analysis)."""
    format_version: Optional[str] = Field(None, description="Plan JSON format version")
    terraform_version: Optional[str] = Field(None, description="Terraform version that produced the plan")
    resource_changes: List[ResourceChange] = Field(default_factory=list, description="Resource changes in plan order")

    class Config:
        """Pydantic config."""
        extra = "ignore"
        frozen = True
