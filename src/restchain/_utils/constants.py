# HTTP methods accepted by a Request, matched case-sensitively
METHODS: tuple[str, ...] = (
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
    "HEAD",
    "LINK",
)

# Content types
MIME_JSON = "application/json"
MIME_TEXT = "text/plain"
MIME_FORM_URLENCODED = "application/x-www-form-urlencoded"
MIME_MULTIPART = "multipart/form-data"

DEFAULT_TYPE = MIME_JSON
DEFAULT_CHARSET = "UTF-8"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

# Lifecycle events of an XHR-like transport
TRANSPORT_EVENTS: tuple[str, ...] = (
    "on_load_start",
    "on_progress",
    "on_abort",
    "on_error",
    "on_load",
    "on_timeout",
    "on_load_end",
)

# Compatibility transports tried in order when the native one cannot be built.
# Entries are "module:attribute" import paths.
FALLBACK_TRANSPORTS: tuple[str, ...] = ("restchain._transport:SyncHttpxTransport",)

# Environment variables
ENV_BASE_URL = "RESTCHAIN_BASE_URL"
ENV_TIMEOUT = "RESTCHAIN_TIMEOUT"
ENV_USER_AGENT = "RESTCHAIN_USER_AGENT"

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "restchain-python"
