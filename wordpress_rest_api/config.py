"""Configuration and constants for the WordPress REST API server."""

from __future__ import annotations

import logging
import os
import sys

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Configuration from environment variables
# ---------------------------------------------------------------------------

DB_HOST = os.getenv("WP_DB_HOST", "127.0.0.1")
DB_PORT = int(os.getenv("WP_DB_PORT", "3306"))
DB_USER = os.getenv("WP_DB_USER", "root")
DB_PASSWORD = os.getenv("WP_DB_PASSWORD", "")
DB_NAME = os.getenv("WP_DB_NAME", "wordpress")
DB_SOCKET = os.getenv("WP_DB_SOCKET", "")  # Unix socket path (for Local, MAMP, etc.)
TABLE_PREFIX = os.getenv("WP_TABLE_PREFIX", "")  # empty = auto-detect

QUERY_TIMEOUT = int(os.getenv("WP_QUERY_TIMEOUT", "30"))

API_HOST = os.getenv("WP_API_HOST", "http://localhost:8080")
API_PATH = os.getenv("WP_API_PATH", "wp-json/wp")
API_VERSION = os.getenv("WP_API_VERSION", "v2")
SITE_URL = os.getenv("WP_SITE_URL", "http://localhost:8080")
UPLOAD_PATH = os.getenv("WP_UPLOAD_PATH", "wp-content/uploads")
PERMALINK_STRUCTURE = os.getenv("WP_PERMALINK_STRUCTURE", "/%postname%/")

# Address the HTTP server binds to
LISTEN_HOST = os.getenv("WP_LISTEN_HOST", "127.0.0.1")
LISTEN_PORT = int(os.getenv("WP_LISTEN_PORT", "8080"))

LOG_LEVEL = os.getenv("WP_LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

# Content type tags
POST_TYPE = "post"
PAGE_TYPE = "page"
ATTACHMENT_TYPE = "attachment"
REVISION_TYPE = "revision"

# Taxonomy kinds
CATEGORY_TAXONOMY = "category"
TAG_TAXONOMY = "post_tag"
FORMAT_TAXONOMY = "post_format"

# Value of the `context` request parameter that selects the reduced projection
EMBED_CONTEXT = "embed"
STANDARD_FORMAT = "standard"

# Meta and option keys read by the aggregation pipeline
THUMBNAIL_META_KEY = "_thumbnail_id"
PAGE_TEMPLATE_META_KEY = "_wp_page_template"
ATTACHMENT_METADATA_KEY = "_wp_attachment_metadata"
ATTACHMENT_ALT_KEY = "_wp_attachment_image_alt"
STICKY_POSTS_OPTION = "sticky_posts"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger("wordpress_rest_api")
logging.basicConfig(level=LOG_LEVEL, stream=sys.stderr)

# Security warning for empty password
if not DB_PASSWORD:
    logger.warning(
        "WP_DB_PASSWORD is not set. Using empty password is insecure. "
        "Set WP_DB_PASSWORD environment variable for production use."
    )


class ApiConfig(BaseModel):
    """Read-only settings shared by every repository and service of a request."""

    model_config = ConfigDict(frozen=True)

    api_host: str = API_HOST
    api_path: str = API_PATH
    version: str = API_VERSION
    site_url: str = SITE_URL
    upload_path: str = UPLOAD_PATH
    table_prefix: str = "wp_"
    permalink_structure: str = PERMALINK_STRUCTURE

    @property
    def api_base_url(self) -> str:
        """Full API base URL, e.g. ``http://localhost:8080/wp-json/wp/v2``."""
        return f"{self.api_host}/{self.api_path}/{self.version}"

    def table(self, suffix: str) -> str:
        """Return the prefixed name of a core table (``posts`` -> ``wp_posts``)."""
        return f"{self.table_prefix}{suffix}"


def load_api_config(table_prefix: str) -> ApiConfig:
    """Build the API configuration from the environment and a resolved table prefix."""
    return ApiConfig(table_prefix=table_prefix)
