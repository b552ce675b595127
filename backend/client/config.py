"""Settings for code that talks to the API from outside it."""
import os
from typing import Mapping, Optional

from pydantic import BaseModel

REQUIRED_ENV_VARS = ["API_BASE_URL", "USE_MOCK_API"]


class MissingConfigurationError(RuntimeError):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing environment variables: {', '.join(self.missing)}")


class ClientConfig(BaseModel):
    api_base_url: str
    use_mock_api: bool
    app_name: Optional[str] = None
    app_version: Optional[str] = None


def load_client_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Read the client settings, failing with every missing variable named at once."""
    environ = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not environ.get(name)]
    if missing:
        raise MissingConfigurationError(missing)

    return ClientConfig(
        api_base_url=environ["API_BASE_URL"].rstrip("/"),
        use_mock_api=environ["USE_MOCK_API"].lower() == "true",
        app_name=environ.get("APP_NAME"),
        app_version=environ.get("APP_VERSION"),
    )
