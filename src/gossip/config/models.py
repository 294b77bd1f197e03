from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gossip.config.errors import UnknownBackendError

REDACTED = "***"

# Dotted paths of values that must never be printed or logged.
SENSITIVE_FIELDS = frozenset(
    {
        "jwt.secret",
        "file_storage.amazon_s3.secret_key",
        "store.postgresql.password",
        "store.mysql.password",
        "oauth.google.secret",
        "oauth.facebook.secret",
        "oauth.github.secret",
    }
)


class FileStorageType(str, Enum):
    LOCAL = "local"
    GOOGLE_CLOUD_STORAGE = "google_cloud_storage"
    AMAZON_S3 = "amazon_s3"


class StoreType(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


class JWTSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    secret: str = ""


class LocalStorageSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    dir: str = ""


class GoogleCloudStorageSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    service_account_file: str = ""
    bucket: str = ""


class AmazonS3Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    access_key: str = ""
    secret_key: str = ""
    region: str = ""
    bucket: str = ""


FileStorageBackendSettings = Union[LocalStorageSettings, GoogleCloudStorageSettings, AmazonS3Settings]


class FileStorageSettings(BaseModel):
    """
    File storage backend selection.

    `type` names the active block. It is not validated at load time; the other blocks are
    loaded as well and simply ignored by the storage backend.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = ""
    local: LocalStorageSettings = Field(default_factory=LocalStorageSettings)
    google_cloud_storage: GoogleCloudStorageSettings = Field(default_factory=GoogleCloudStorageSettings)
    amazon_s3: AmazonS3Settings = Field(default_factory=AmazonS3Settings)

    def backend_type(self) -> FileStorageType:
        try:
            return FileStorageType(self.type)
        except ValueError as e:
            raise UnknownBackendError(
                f"Unknown file storage type: {self.type!r}",
                field="file_storage.type",
                value=self.type,
            ) from e

    def backend_settings(self) -> FileStorageBackendSettings:
        return getattr(self, self.backend_type().value)


class PostgreSQLSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str = ""
    username: str = ""
    password: str = ""
    database: str = ""
    sslmode: str = ""
    sslrootcert: str = ""


class MySQLSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str = ""
    username: str = ""
    password: str = ""
    database: str = ""


StoreBackendSettings = Union[PostgreSQLSettings, MySQLSettings]


class StoreSettings(BaseModel):
    """Database backend selection. Same lenient discriminator rules as FileStorageSettings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = ""
    postgresql: PostgreSQLSettings = Field(default_factory=PostgreSQLSettings)
    mysql: MySQLSettings = Field(default_factory=MySQLSettings)

    def backend_type(self) -> StoreType:
        try:
            return StoreType(self.type)
        except ValueError as e:
            raise UnknownBackendError(
                f"Unknown store type: {self.type!r}",
                field="store.type",
                value=self.type,
            ) from e

    def backend_settings(self) -> StoreBackendSettings:
        return getattr(self, self.backend_type().value)


class OAuthProviderSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str = ""
    secret: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.client_id and self.secret)


class OAuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    google: OAuthProviderSettings = Field(default_factory=OAuthProviderSettings)
    facebook: OAuthProviderSettings = Field(default_factory=OAuthProviderSettings)
    github: OAuthProviderSettings = Field(default_factory=OAuthProviderSettings)

    def enabled_providers(self) -> List[str]:
        return [name for name in ("google", "facebook", "github") if getattr(self, name).enabled]


class GossipConfig(BaseModel):
    """
    Effective runtime configuration of the gossip server.

    Built once at startup by one of the loaders and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str = ""
    base_url: str = ""
    title: str = ""
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    file_storage: FileStorageSettings = Field(default_factory=FileStorageSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)

    def redacted(self) -> Dict[str, Any]:
        """Plain nested dict of the config with non-empty sensitive values masked."""
        data = self.model_dump(mode="python")
        for dotted in SENSITIVE_FIELDS:
            *parents, leaf = dotted.split(".")
            node = data
            for segment in parents:
                node = node[segment]
            if node[leaf]:
                node[leaf] = REDACTED
        return data


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for a configuration loader.

    `yaml_path` is used by the file loader, `env_prefix` and `dotenv_path` by the
    environment loader.
    """

    yaml_path: str = "gossip.yaml"
    env_prefix: str = "GOSSIP"
    dotenv_path: Optional[str] = None
