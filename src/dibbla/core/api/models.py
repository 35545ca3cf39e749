"""Wire models for Dibbla API request and response bodies."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class _WireModel(BaseModel):
    """Immutable model that tolerates fields the client does not know yet."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class DeploymentStatus(str, Enum):
    """Lifecycle states owned by the platform; the client only observes them."""

    RECEIVED = "received"
    EXTRACTING = "extracting"
    VALIDATING = "validating"
    BUILDING = "building"
    STARTING = "starting"
    HEALTH_CHECK = "health_check"
    RUNNING = "running"
    UNHEALTHY = "unhealthy"
    DELETING = "deleting"
    DELETED = "deleted"
    FAILED = "failed"

    @classmethod
    def terminal(cls) -> set["DeploymentStatus"]:
        return {cls.RUNNING, cls.UNHEALTHY, cls.DELETED, cls.FAILED}


class HealthCheck(_WireModel):
    status: str = ""
    checked_at: Optional[str] = None
    response_time_ms: int = 0
    failure_count: int = 0
    last_error: Optional[str] = None


class DeploymentRecord(_WireModel):
    """The platform's description of one deployment."""

    id: str
    alias: str
    url: str = ""
    status: str
    container_id: Optional[str] = None
    image_id: Optional[str] = None
    project_path: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deployed_at: Optional[str] = None
    error: Optional[str] = None
    health_check: Optional[HealthCheck] = None

    @field_validator("url", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value

    @property
    def lifecycle(self) -> Optional[DeploymentStatus]:
        """Known lifecycle state, or None for a status this client predates."""
        try:
            return DeploymentStatus(self.status)
        except ValueError:
            return None

    @property
    def is_terminal(self) -> bool:
        return self.lifecycle in DeploymentStatus.terminal()


class DeployResponse(_WireModel):
    status: str
    deployment: DeploymentRecord


class DeploymentList(_WireModel):
    deployments: List[DeploymentRecord] = []
    total: int = 0

    @field_validator("deployments", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class DeploymentUpdate(_WireModel):
    """Body for PUT /deployments/{alias}; absent fields are left untouched."""

    environment_variables: Optional[Dict[str, str]] = None
    replicas: Optional[int] = None
    cpu: Optional[str] = None
    memory: Optional[str] = None
    port: Optional[int] = None

    @field_validator("port")
    @classmethod
    def _port_in_range(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 1 <= value <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator("replicas")
    @classmethod
    def _replicas_non_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("replicas must be zero or more")
        return value

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()

    def to_payload(self) -> dict:
        payload = self.model_dump(exclude_none=True)
        if not payload.get("environment_variables"):
            payload.pop("environment_variables", None)
        if payload.get("cpu") == "":
            payload.pop("cpu")
        if payload.get("memory") == "":
            payload.pop("memory")
        return payload


class DeleteResult(_WireModel):
    status: str = ""
    message: str = ""


class ValidationIssue(_WireModel):
    field: str
    error: str
    suggestion: Optional[str] = None


class ErrorDetail(_WireModel):
    """Structured error body nested under ``error`` in failure responses."""

    code: str
    message: str
    details: List[ValidationIssue] = []
    request_id: Optional[str] = None
    documentation: Optional[str] = None
    deployment_id: Optional[str] = None
    logs: Optional[str] = None

    @field_validator("details", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class ErrorResponse(_WireModel):
    status: str = "error"
    error: ErrorDetail


class SecretSummary(_WireModel):
    name: str
    deployment_alias: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SecretList(_WireModel):
    secrets: List[SecretSummary] = []
    total: int = 0

    @field_validator("secrets", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class Secret(SecretSummary):
    value: str = ""


class SecretCreateResult(_WireModel):
    status: str = ""
    message: str = ""
    secret: Secret


class DatabaseList(_WireModel):
    databases: List[str] = []
    total: int = 0

    @field_validator("databases", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class DatabaseResult(_WireModel):
    status: str = ""
    message: str = ""
    database: str = ""
