"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal
from urllib.parse import urlsplit, urlunsplit

from loguru import logger
from pydantic import BaseModel, Field, computed_field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @field_validator("file", mode="before")
    @classmethod
    def _blank_file_disables_sink(cls, value: str | None) -> str | None:
        return value or None


class MongoConfig(BaseModel):
    """Document store configuration model."""

    url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL, without credentials",
    )
    database: str = Field(default="sample", description="Database name")
    username: str | None = Field(
        default=None, description="Username for MongoDB authentication"
    )
    password_env_var: str | None = Field(
        default="MONGO_PASSWORD",
        description="Environment variable name containing the MongoDB password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing the MongoDB password",
    )
    documents_collection: str = Field(
        default="documents", description="Collection served raw by /data"
    )
    books_collection: str = Field(
        default="books", description="Collection holding book records"
    )
    server_selection_timeout_ms: int = Field(
        default=5000, description="Server selection timeout in milliseconds"
    )

    @field_validator("username", "password_env_var", "password_file", mode="before")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        return value or None

    @property
    def password(self) -> str | None:
        """
        Resolve the MongoDB password.
        1. The mounted secrets file named by `password_file`
        2. The environment variable named by `password_env_var`
        Credentials embedded in `url` are left to the driver.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read MongoDB password from file.") from e
        if self.password_env_var:
            return os.getenv(self.password_env_var) or None
        return None

    @computed_field
    @property
    def sanitized_url(self) -> str:
        """The connection URL with any inline password masked, safe for logs."""
        parts = urlsplit(self.url)
        if parts.password is None:
            return self.url
        host = parts.netloc.rsplit("@", 1)[1]
        return urlunsplit(parts._replace(netloc=f"{parts.username}:***@{host}"))

    @property
    def has_inline_credentials(self) -> bool:
        return urlsplit(self.url).password is not None

    def client_options(self) -> dict:
        """Keyword arguments for the MongoDB client constructor."""
        options: dict = {
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "appname": "book-catalog",
        }
        if self.username:
            options["username"] = self.username
            password = self.password
            if password is not None:
                options["password"] = password
            else:
                logger.warning(
                    "MongoDB username '{}' configured without a password", self.username
                )
        return options


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    mongo: MongoConfig = Field(
        default_factory=MongoConfig, description="Document store configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
