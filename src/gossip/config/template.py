from __future__ import annotations

import logging
from string import Template

from gossip.config.errors import TemplateRenderError
from gossip.keygen import gen_key_hex

logger = logging.getLogger(__name__)

JWT_SECRET_BYTES = 32

_INITIAL_CONFIG = Template(
    """\
# gossip configuration.
# Every value can also be supplied through GOSSIP_* environment variables (gossip -e ...).

address: "127.0.0.1:8080"
base_url: "https://example.com/forum"
title: "gossip"

jwt:
  secret: "${jwt_secret}"

file_storage:
  # One of: local, google_cloud_storage, amazon_s3
  type: "local"

  local:
    dir: "./gossip_data/public/"

  google_cloud_storage:
    service_account_file: ""
    bucket: ""

  amazon_s3:
    access_key: ""
    secret_key: ""
    region: ""
    bucket: ""

store:
  # One of: postgresql, mysql
  type: "postgresql"

  postgresql:
    address: "127.0.0.1:5432"
    username: ""
    password: ""
    database: ""
    sslmode: "disable"
    sslrootcert: ""

  mysql:
    address: "127.0.0.1:3306"
    username: ""
    password: ""
    database: ""

# A provider is enabled only when both client_id and secret are set.
oauth:
  google:
    client_id: ""
    secret: ""

  facebook:
    client_id: ""
    secret: ""

  github:
    client_id: ""
    secret: ""
"""
)


def render_initial_template() -> str:
    """Render an initial YAML config document with a freshly generated JWT secret."""
    jwt_secret = gen_key_hex(JWT_SECRET_BYTES)
    try:
        rendered = _INITIAL_CONFIG.substitute(jwt_secret=jwt_secret)
    except (KeyError, ValueError) as e:
        raise TemplateRenderError(f"Failed to render initial config template: {e}") from e
    logger.debug("config.template_rendered chars=%d", len(rendered))
    return rendered
