from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class EnvBinding:
    """Maps one environment variable suffix onto a dotted config key path."""

    suffix: str
    key_path: str

    def variable_name(self, prefix: str) -> str:
        return f"{prefix}_{self.suffix}" if prefix else self.suffix


ENV_BINDINGS: Tuple[EnvBinding, ...] = (
    EnvBinding("ADDRESS", "address"),
    EnvBinding("BASE_URL", "base_url"),
    EnvBinding("TITLE", "title"),
    EnvBinding("JWT_SECRET", "jwt.secret"),
    EnvBinding("FILE_STORAGE_TYPE", "file_storage.type"),
    EnvBinding("FILE_STORAGE_LOCAL_DIR", "file_storage.local.dir"),
    EnvBinding("FILE_STORAGE_GCS_SERVICE_ACCOUNT_FILE", "file_storage.google_cloud_storage.service_account_file"),
    EnvBinding("FILE_STORAGE_GCS_BUCKET", "file_storage.google_cloud_storage.bucket"),
    EnvBinding("FILE_STORAGE_S3_ACCESS_KEY", "file_storage.amazon_s3.access_key"),
    EnvBinding("FILE_STORAGE_S3_SECRET_KEY", "file_storage.amazon_s3.secret_key"),
    EnvBinding("FILE_STORAGE_S3_REGION", "file_storage.amazon_s3.region"),
    EnvBinding("FILE_STORAGE_S3_BUCKET", "file_storage.amazon_s3.bucket"),
    EnvBinding("STORE_TYPE", "store.type"),
    EnvBinding("STORE_POSTGRESQL_ADDRESS", "store.postgresql.address"),
    EnvBinding("STORE_POSTGRESQL_USERNAME", "store.postgresql.username"),
    EnvBinding("STORE_POSTGRESQL_PASSWORD", "store.postgresql.password"),
    EnvBinding("STORE_POSTGRESQL_DATABASE", "store.postgresql.database"),
    EnvBinding("STORE_POSTGRESQL_SSLMODE", "store.postgresql.sslmode"),
    EnvBinding("STORE_POSTGRESQL_SSLROOTCERT", "store.postgresql.sslrootcert"),
    EnvBinding("STORE_MYSQL_ADDRESS", "store.mysql.address"),
    EnvBinding("STORE_MYSQL_USERNAME", "store.mysql.username"),
    EnvBinding("STORE_MYSQL_PASSWORD", "store.mysql.password"),
    EnvBinding("STORE_MYSQL_DATABASE", "store.mysql.database"),
    EnvBinding("OAUTH_GOOGLE_CLIENT_ID", "oauth.google.client_id"),
    EnvBinding("OAUTH_GOOGLE_SECRET", "oauth.google.secret"),
    EnvBinding("OAUTH_FACEBOOK_CLIENT_ID", "oauth.facebook.client_id"),
    EnvBinding("OAUTH_FACEBOOK_SECRET", "oauth.facebook.secret"),
    EnvBinding("OAUTH_GITHUB_CLIENT_ID", "oauth.github.client_id"),
    EnvBinding("OAUTH_GITHUB_SECRET", "oauth.github.secret"),
)


def env_variable_names(prefix: str) -> List[str]:
    return [binding.variable_name(prefix) for binding in ENV_BINDINGS]


def find_binding(key_path: str) -> Optional[EnvBinding]:
    for binding in ENV_BINDINGS:
        if binding.key_path == key_path:
            return binding
    return None


def collect_env_values(environ: Mapping[str, str], prefix: str) -> Dict[str, Any]:
    """
    Build a nested mapping from the bound variables that are present in `environ`.

    Unset variables are skipped so that the field keeps its model default.
    """
    data: Dict[str, Any] = {}
    for binding in ENV_BINDINGS:
        name = binding.variable_name(prefix)
        if name not in environ:
            continue
        *parents, leaf = binding.key_path.split(".")
        cur = data
        for segment in parents:
            cur = cur.setdefault(segment, {})
        cur[leaf] = environ[name]
    return data
