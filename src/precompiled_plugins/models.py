"""Base Pydantic models for script plugin elements.

Descriptors and declarations are immutable and reject unknown fields;
settings are immutable too but tolerate unrelated environment values.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base model for script plugin descriptors and declarations.

    Instances are frozen once built: every derived value, such as a
    plugin identifier, depends only on the stored fields and stays the
    same for the whole build pass. Unknown fields raise a validation
    error.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base model for conventions resolved at runtime.

    Values come from keyword arguments (for example, a configuration
    file) and from prefixed environment variables. Extra values are
    ignored and resolved settings are read-only.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
