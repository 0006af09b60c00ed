"""
Configuration management for the Kubernetes pod MCP server.

Supports both in-cluster (service account) and local (kubeconfig) authentication.
Configuration is read from environment variables with sensible defaults.
"""

import os
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KUBECONFIG_PATH = "~/.kube/config"


class Settings(BaseSettings):
    """
    Application configuration settings.

    All settings can be configured via environment variables with the
    KUBE_POD_MCP_ prefix (e.g., KUBE_POD_MCP_PORT). The kubeconfig path
    also honours the standard KUBECONFIG variable.

    Attributes:
        server_name: Name advertised by the MCP server.
        host: Address the HTTP listener binds to.
        port: Port the HTTP listener binds to.
        sse_path: Path of the SSE event stream endpoint.
        message_path: Path clients post tool-call messages to.
        log_level: Log level for the package and uvicorn loggers.
        kubeconfig_path: Path to kubeconfig file used when in-cluster
            credentials are unavailable.
        kubernetes_context: Kubernetes context to use (optional).
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBE_POD_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server configuration
    server_name: str = "Kubernetes MCP Server"
    host: str = "0.0.0.0"
    port: int = 8080
    sse_path: str = "/sse"
    message_path: str = "/message/"
    log_level: str = "INFO"

    # Kubernetes configuration
    kubeconfig_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "KUBE_POD_MCP_KUBECONFIG_PATH", "KUBECONFIG", "kubeconfig_path"
        ),
    )
    kubernetes_context: str | None = None

    def resolved_kubeconfig_path(self) -> str:
        """Kubeconfig file to fall back to, defaulting to the user's home."""
        return os.path.expanduser(self.kubeconfig_path or DEFAULT_KUBECONFIG_PATH)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()
