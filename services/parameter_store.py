"""
AWS Systems Manager Parameter Store configuration.

Settings are read from the environment first (a local ``.env`` is loaded with
python-dotenv), then from Parameter Store under the ``/pocket-ledger`` prefix.
"""

import os
from functools import lru_cache
from typing import Any, Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from utils.logging import setup_logger

logger = setup_logger(__name__)

# Load .env file for local development
load_dotenv()

# Every key the application reads, and which of them hold secrets
CONFIG_KEYS = (
    "supabase/url",
    "supabase/anon-key",
    "supabase/service-role-key",
    "supabase/jwt-secret",
    "ai/google-api-key",
    "ai/model",
    "ai/base-url",
)
SECRET_KEYS = frozenset(
    {"supabase/service-role-key", "supabase/jwt-secret", "ai/google-api-key"}
)

_ssm_client = None


def get_ssm_client():
    """Get or create SSM client with caching."""
    global _ssm_client
    if _ssm_client is None:
        _ssm_client = boto3.client("ssm")
    return _ssm_client


def env_var_name(key: str) -> str:
    """
    Map a parameter key to its environment variable.

    ``supabase/service-role-key`` -> ``SUPABASE_SERVICE_ROLE_KEY``
    """
    return key.strip("/").replace("/", "_").replace("-", "_").upper()


@lru_cache(maxsize=128)
def get_parameter(parameter_name: str, decrypt: bool = True) -> str | None:
    """
    Get a parameter from AWS Parameter Store with caching.

    Args:
        parameter_name: The fully qualified name of the parameter
        decrypt: Whether to decrypt SecureString parameters

    Returns:
        Parameter value or None if not found
    """
    try:
        ssm = get_ssm_client()
        response = ssm.get_parameter(Name=parameter_name, WithDecryption=decrypt)
        value = response["Parameter"]["Value"]

        logger.debug(f"Retrieved parameter {parameter_name} from Parameter Store")
        return value

    except ClientError as e:
        error_code = e.response["Error"]["Code"]

        if error_code == "ParameterNotFound":
            logger.warning(f"Parameter {parameter_name} not found in Parameter Store")
        else:
            logger.error(f"Error retrieving parameter {parameter_name}: {e}")

        return None
    except BotoCoreError as e:
        # No credentials or region configured, typical for local runs
        logger.warning(f"Parameter Store unavailable for {parameter_name}: {e}")
        return None


class ParameterStoreConfig:
    """
    Configuration lookups with environment override and Parameter Store fallback.
    """

    def __init__(self, parameter_prefix: str = "/pocket-ledger"):
        self.parameter_prefix = parameter_prefix.rstrip("/")
        self.use_parameter_store = os.getenv(
            "USE_PARAMETER_STORE", "true"
        ).lower() in ("1", "true", "yes")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key, e.g. ``supabase/url``
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        local_value = os.getenv(env_var_name(key))
        if local_value:
            return local_value

        if not self.use_parameter_store:
            return default

        value = get_parameter(f"{self.parameter_prefix}/{key}")
        return default if value is None else value

    def get_required(self, key: str) -> str:
        """
        Get a required configuration value.

        Raises:
            ValueError: If parameter is not found
        """
        value = self.get(key)
        if value is None:
            raise ValueError(
                f"Required parameter {self.parameter_prefix}/{key} "
                f"(or ${env_var_name(key)}) not found"
            )
        return value

    def load_supabase_config(self) -> Dict[str, str | None]:
        """Supabase project settings used by the REST and auth clients."""
        return {
            "url": self.get_required("supabase/url").rstrip("/"),
            "anon_key": self.get("supabase/anon-key"),
            "service_role_key": self.get("supabase/service-role-key"),
            "jwt_secret": self.get("supabase/jwt-secret"),
        }

    def load_ai_config(self) -> Dict[str, str | None]:
        """Generative model settings for the categorization flows."""
        return {
            "api_key": self.get("ai/google-api-key"),
            "model": self.get("ai/model", "gemini-2.0-flash"),
            "base_url": self.get(
                "ai/base-url", "https://generativelanguage.googleapis.com/v1beta"
            ).rstrip("/"),
        }


# Global config instance
config = ParameterStoreConfig()
