"""Schema for the api/info endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class ApiInfo(BaseModel):
    """Quota snapshot for the API key.

    Attributes:
        limit: Maximum number of requests in the current window
        requests: Requests consumed in the current window
        outstanding_costs: Costs not yet settled
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    limit: int = Field(ge=0, strict=True)
    requests: int = Field(ge=0, strict=True)
    outstanding_costs: float = Field(ge=0, alias="outstandingCosts")

    @property
    def remaining(self) -> int:
        """Calculate remaining requests."""
        return self.limit - self.requests
