"""Loader configuration.

Two layers live here:

- ``ClientSettings`` / ``ServiceSettings``: Pydantic Settings read from
  environment variables (``QLM_`` / ``QLM_SERVICE_`` prefixes) and an optional
  ``.env`` file. They only supply defaults.
- ``LoaderConfig`` / ``EventConfig``: plain Pydantic models that validate the
  options a ``QuickLoadMore`` is actually constructed with.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values the item service understands as query parameters.
# A list value repeats its key once per element in the URL.
ParameterValue = str | int | float | bool
QueryParameters = dict[str, ParameterValue | list[ParameterValue]]


class ClientSettings(BaseSettings):
    """Client defaults loaded from environment variables.

    ``QLM_SERVICE_URL=https://api.example.com/items`` is enough to build a
    loader with ``QuickLoadMore.from_settings()``. Everything else has a
    default matching the constructor's.
    """

    service_url: str | None = None
    low_item_threshold: int = 20  # Buffer size below which a background fetch starts
    page_size: int = 50  # Items requested per fetch
    request_timeout: float = 10.0  # Seconds, handed to httpx
    event_namespace: str = "qlm"

    model_config = SettingsConfigDict(
        env_prefix="QLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ServiceSettings(BaseSettings):
    """Settings for the reference item service."""

    default_page_size: int = 50
    max_page_size: int = 500

    model_config = SettingsConfigDict(
        env_prefix="QLM_SERVICE_",
        env_file=".env",
        extra="ignore",
    )


class EventNames(BaseModel):
    """Names of the four lifecycle events, each overridable on its own."""

    model_config = ConfigDict(frozen=True)

    load_started: str = Field(default="loadStarted", min_length=1)
    load_finished: str = Field(default="loadFinished", min_length=1)
    error: str = Field(default="error", min_length=1)
    exhausted: str = Field(default="exhausted", min_length=1)


class EventConfig(BaseModel):
    """Namespace and names used when publishing lifecycle events.

    Published names are ``"<namespace>.<name>"``, e.g. ``qlm.loadStarted``.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(default="qlm", min_length=1)
    names: EventNames = EventNames()


class LoaderConfig(BaseModel):
    """Validated scalar options of a loader."""

    service_url: str = Field(min_length=1)
    low_item_threshold: int = Field(default=20, ge=0)
    query_parameters: QueryParameters = Field(default_factory=dict)
    events: EventConfig = EventConfig()


settings = ClientSettings()
