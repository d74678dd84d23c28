from pydantic import BaseModel, ConfigDict


class BaseGolfModel(BaseModel):
    """Shared configuration for scraped course models."""
    model_config = ConfigDict(frozen=True)
