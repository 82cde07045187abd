"""
SmartAPI Helper - Transport Configuration

Connection settings for the SmartAPI endpoint. Settings can be built
directly or read from SMARTAPI_* environment variables.
"""
from __future__ import annotations
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import ConfigurationError

# Vendor demo environment; production endpoints are issued per account
DEMO_ENDPOINT = "https://demo.mortgagecreditlink.com/inetapi/request_products.aspx"
TESTING_INTERFACE = "SmartAPITestingIdentifier"
DEFAULT_TIMEOUT = 60.0


class SmartAPISettings(BaseModel):
    """Credentials and connection options for SmartAPIClient."""
    login: str = Field(default="", description="Basic auth user login")
    password: str = Field(default="", description="Basic auth password")
    endpoint: str = Field(default=DEMO_ENDPOINT, description="SmartAPI request URL")
    interface: str = Field(default="", description="Value of the MCL-Interface header")
    surrogated_login: str = Field(default="", description="Optional MCL-SurrogatedLogin header value")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")
    log_dir: Optional[str] = Field(default=None, description="Directory for raw request/response logs")
    allow_colon_in_login: bool = Field(default=False, description="Accept ':' in the login name")

    @field_validator("login", "password", "endpoint", "interface", "surrogated_login")
    @classmethod
    def strip_value(cls, v):
        return (v or "").strip()

    @model_validator(mode="after")
    def check_login_colon(self):
        if ":" in self.login and not self.allow_colon_in_login:
            raise ValueError("Login contains a colon, which the Basic auth scheme cannot carry")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "SmartAPISettings":
        """Build settings from SMARTAPI_* environment variables."""
        values = {
            "login": os.getenv("SMARTAPI_LOGIN", ""),
            "password": os.getenv("SMARTAPI_PASSWORD", ""),
            "endpoint": os.getenv("SMARTAPI_ENDPOINT", DEMO_ENDPOINT),
            "interface": os.getenv("SMARTAPI_INTERFACE", ""),
            "surrogated_login": os.getenv("SMARTAPI_SURROGATED_LOGIN", ""),
            "timeout": float(os.getenv("SMARTAPI_TIMEOUT", str(DEFAULT_TIMEOUT))),
            "log_dir": os.getenv("SMARTAPI_LOG_DIR") or None,
        }
        values.update(overrides)
        return cls(**values)

    def require_complete(self) -> None:
        """Raise ConfigurationError naming the first missing required setting."""
        if not self.login:
            raise ConfigurationError("User login is required")
        if not self.password:
            raise ConfigurationError("User password is required")
        if not self.endpoint:
            raise ConfigurationError(f"HTTP endpoint is required. If testing, use {DEMO_ENDPOINT}")
        if not self.interface:
            raise ConfigurationError(f"MCL-Interface is required. If testing, use {TESTING_INTERFACE}")
