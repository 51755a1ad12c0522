"""Shared pydantic base for the immutable document model."""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Immutable model; resolution works on ``model_copy`` results."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
