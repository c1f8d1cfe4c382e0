from pathlib import Path
from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("XBOX_AUTH_LOG_LEVEL", "info")

# Timeout configuration, every request is clamped between MIN and MAX
MIN_TIMEOUT = 1.0
MAX_TIMEOUT = 30.0
DEFAULT_TIMEOUT = config.get("XBOX_AUTH_TIMEOUT", 10.0)

USER_AGENT = config.get(
    "XBOX_AUTH_USER_AGENT",
    "XboxLive-Auth/5.0 (Python; httpx) XboxAuthClient"
)

# Microsoft Live (hardcoded - wire contract)
LIVE_AUTHORIZE_URL = "https://login.live.com/oauth20_authorize.srf"
LIVE_TOKEN_URL = "https://login.live.com/oauth20_token.srf"

# Xbox app registration used when no client is given
LIVE_CLIENT_ID = "000000004C12AE6F"
LIVE_SCOPE = "service::user.auth.xboxlive.com::MBI_SSL"
LIVE_REDIRECT_URI = "https://login.live.com/oauth20_desktop.srf"
LIVE_RESPONSE_TYPE = "token"

# Xbox Network (hardcoded - wire contract)
XNET_DEVICE_AUTHENTICATE_URL = "https://device.auth.xboxlive.com/device/authenticate"
XNET_USER_AUTHENTICATE_URL = "https://user.auth.xboxlive.com/user/authenticate"
XNET_XSTS_AUTHORIZE_URL = "https://xsts.auth.xboxlive.com/xsts/authorize"

# The service has moved between contract versions before, keep it overridable
XBL_CONTRACT_VERSION = str(config.get("XBOX_AUTH_XBL_CONTRACT_VERSION", "0"))

# Login failure heuristics (advisory only, markers drift with the login page)
ACTIVITY_CONFIRMATION_MARKERS = config.get_list(
    "XBOX_AUTH_ACTIVITY_MARKERS",
    ["identity/confirm", "Abuse?mkt=", "recover?mkt"]
)
TWO_FACTOR_MARKERS = config.get_list(
    "XBOX_AUTH_TWO_FACTOR_MARKERS",
    ["idDiv_SAOTCS_Proofs", "idTxtBx_SAOTCC_OTC", "arrUserProofs"]
)

# Token storage used by the CLI refresh command
TOKEN_FILE = config.get("XBOX_AUTH_TOKEN_FILE", str(Path.home() / ".xbox-auth" / "live_tokens.json"))

# Test account, only read by the CLI and the live end-to-end test
ACCOUNT_TEST_EMAIL = config.get("ACCOUNT_TEST_EMAIL", None)
ACCOUNT_TEST_PASSWORD = config.get("ACCOUNT_TEST_PASSWORD", None)
