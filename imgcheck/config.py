"""
Run configuration.

Required values come from the environment (optionally seeded from a dotenv
file by the CLI). The model is validated eagerly so that a missing variable
fails the run before any browser work starts.

Environment variables:
    URL_LOGIN, URL_TARGET, LOGIN_ID, LOGIN_PASS, TARGET_IMG  (required)
    LOGIN_USERNAME_FIELD, LOGIN_PASSWORD_FIELD, LOGIN_SUBMIT_SELECTOR,
    LOGIN_PATH, SETTLE_MS, MATCH_POLICY, HEADLESS, CHROME_PATH  (optional)
"""

import os
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from imgcheck.errors import ConfigError
from imgcheck.schema import MatchPolicy


DEFAULT_EXECUTABLE_CANDIDATES = [
    "/usr/bin/google-chrome-stable",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
]
DEFAULT_SETTLE_MS = 1500

# Model field -> environment variable
REQUIRED_ENV = {
    "login_url": "URL_LOGIN",
    "target_url": "URL_TARGET",
    "username": "LOGIN_ID",
    "password": "LOGIN_PASS",
    "target_image": "TARGET_IMG",
}
OPTIONAL_ENV = {
    "username_field": "LOGIN_USERNAME_FIELD",
    "password_field": "LOGIN_PASSWORD_FIELD",
    "submit_selector": "LOGIN_SUBMIT_SELECTOR",
    "login_path": "LOGIN_PATH",
    "settle_ms": "SETTLE_MS",
    "match_policy": "MATCH_POLICY",
    "headless": "HEADLESS",
}
FALSY_VALUES = {"0", "false", "no", "off"}


class CheckerConfig(BaseModel):
    """Immutable configuration for one check run."""
    model_config = ConfigDict(frozen=True)

    login_url: str = Field(..., description="Login page address")
    target_url: str = Field(..., description="Page that must show the image")
    username: str = Field(..., description="Login identifier")
    password: SecretStr = Field(..., description="Login password")
    target_image: str = Field(..., description="Image reference, query string allowed")

    # Login form
    username_field: str = "username"
    password_field: str = "password"
    submit_selector: str = '[type="submit"]'
    login_path: Optional[str] = Field(
        None,
        description="Path identifying the login page; defaults to the path of login_url"
    )

    # Inspection
    settle_ms: int = Field(default=DEFAULT_SETTLE_MS, ge=0)
    match_policy: MatchPolicy = MatchPolicy.SUBSTRING

    # Browser
    headless: bool = True
    executable_candidates: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXECUTABLE_CANDIDATES)
    )

    @field_validator("login_url", "target_url", "username", "target_image")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("password")
    @classmethod
    def _password_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value

    @field_validator("username_field", "password_field", "submit_selector")
    @classmethod
    def _selector_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def effective_login_path(self) -> str:
        """Login path used to detect a failed login."""
        if self.login_path:
            return self.login_path
        return urlparse(self.login_url).path or "/"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "CheckerConfig":
        """
        Build the config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            **overrides: Field values that take precedence over the environment

        Raises:
            ConfigError: If a required variable is missing or a value is invalid
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV.values() if not (env.get(name) or "").strip()]
        if missing:
            raise ConfigError(
                "Missing required environment variables: " + ", ".join(missing)
            )

        values: Dict[str, Any] = {field: env[name] for field, name in REQUIRED_ENV.items()}
        for field, name in OPTIONAL_ENV.items():
            raw = env.get(name)
            if raw is None or raw.strip() == "":
                continue
            if field == "headless":
                values[field] = raw.strip().lower() not in FALSY_VALUES
            else:
                values[field] = raw.strip()

        chrome_path = (env.get("CHROME_PATH") or "").strip()
        if chrome_path:
            values["executable_candidates"] = [chrome_path] + DEFAULT_EXECUTABLE_CANDIDATES

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            fields = ", ".join(
                _env_name(str(err["loc"][0])) for err in e.errors() if err.get("loc")
            )
            raise ConfigError(f"Invalid configuration ({fields}): {e}") from e


def _env_name(field: str) -> str:
    return REQUIRED_ENV.get(field) or OPTIONAL_ENV.get(field) or field
