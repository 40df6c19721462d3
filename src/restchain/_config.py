import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from ._utils.constants import (
    DEFAULT_CHARSET,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_BASE_URL,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
)


class Config(BaseModel):
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    default_charset: str = DEFAULT_CHARSET

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Build a configuration from ``RESTCHAIN_*`` variables.

        A ``.env`` file in the working directory is loaded first; variables
        already present in the environment take precedence over it. Keyword
        arguments take precedence over both.
        """
        load_dotenv(override=False)

        values: dict = {}
        if base_url := os.getenv(ENV_BASE_URL):
            values["base_url"] = base_url.rstrip("/")
        if timeout := os.getenv(ENV_TIMEOUT):
            values["timeout"] = float(timeout)
        if user_agent := os.getenv(ENV_USER_AGENT):
            values["user_agent"] = user_agent

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
