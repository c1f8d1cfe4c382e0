"""Xbox Network constants"""

from typing import Dict, List

DEFAULT_RELYING_PARTY = "http://auth.xboxlive.com"
USER_SITE_NAME = "user.auth.xboxlive.com"
TOKEN_TYPE = "JWT"

SANDBOX_IDS: Dict[str, str] = {
    "RETAIL": "RETAIL",
    "XDKS_1": "XDKS.1",  # DevKit
}

RELYING_PARTIES: Dict[str, str] = {
    "ACCOUNTS": "http://accounts.xboxlive.com",
    "ATTESTATION": "http://attestation.xboxlive.com",
    "BANNING": "http://banning.xboxlive.com",
    "DEVICE_MGT": "http://device.mgt.xboxlive.com",
    "EVENTS": "http://events.xboxlive.com",
    "EXPERIMENTATION": "http://experimentation.xboxlive.com/",
    "GAME_SERVICES": "https://gameservices.xboxlive.com/",
    "INSTANCE_MGT": "http://instance.mgt.xboxlive.com",
    "LICENSING": "http://licensing.xboxlive.com",
    "MP_MS": "http://mp.microsoft.com/",
    "PLAYFAB": "http://playfab.xboxlive.com/",
    "SISU": "http://sisu.xboxlive.com/",
    "STREAMING": "rp://streaming.xboxlive.com/",
    "UNLOCK_DEVICE": "http://unlock.device.mgt.xboxlive.com",
    "UPDATE": "http://update.xboxlive.com",
    "UX_SERVICES": "http://uxservices.xboxlive.com",
    "XBOX_LIVE": "http://xboxlive.com",
    "XDES": "http://xdes.xboxlive.com/",
    "XFLIGHT": "http://xflight.xboxlive.com/",
    "XKMS": "http://xkms.xboxlive.com",
    "XLINK": "http://xlink.xboxlive.com",
}

DISPLAY_CLAIMS: List[str] = ["gtg", "xid", "uhs", "agg", "usr", "utr", "prv", "mgt", "umg", "mgs"]

# XErr codes returned by xsts.auth.xboxlive.com
XERR_MESSAGES: Dict[int, str] = {
    2148916227: "The account is banned from Xbox Live",
    2148916233: "The account does not have an Xbox profile",
    2148916234: "The account has not accepted the Xbox terms of use",
    2148916235: "Xbox Live is not available in the account's region",
    2148916236: "The account requires adult verification",
    2148916237: "The account requires adult verification",
    2148916238: "The account is a child account and must be added to a family",
}

CHILD_ACCOUNT_HINT = (
    "Child and teen accounts can only be exchanged together with a device token "
    "(see xnet.experimental.create_dummy_win32_device_token)"
)
