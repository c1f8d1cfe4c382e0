"""Request and response models for Xbox Network token exchanges"""

from typing import Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class XNETTokens(BaseModel):
    """Tokens sent to the XSTS authorize endpoint

    A title token is only meaningful next to a device token.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_tokens: List[str] = Field(min_length=1, alias="userTokens")
    device_token: Optional[str] = Field(default=None, alias="deviceToken")
    title_token: Optional[str] = Field(default=None, alias="titleToken")

    @model_validator(mode="after")
    def check_title_token(self) -> "XNETTokens":
        if self.title_token is not None and self.device_token is None:
            raise ValueError("title_token can only be used together with device_token")
        return self


class XNETExchangeTokensOptions(BaseModel):
    """Options for the XSTS exchange"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    xsts_relying_party: Optional[str] = Field(default=None, alias="XSTSRelyingParty")
    optional_display_claims: Optional[List[str]] = Field(default=None, alias="optionalDisplayClaims")
    sandbox_id: Optional[str] = Field(default=None, alias="sandboxId")


class XUIClaim(TypedDict, total=False):
    xid: str
    uhs: str
    gtg: str
    agg: str
    usr: str
    utr: str
    prv: str


class UserDisplayClaims(TypedDict):
    xui: List[XUIClaim]


class XNETExchangeRpsTicketResponse(TypedDict):
    """user.auth.xboxlive.com response"""
    IssueInstant: str
    NotAfter: str
    Token: str
    DisplayClaims: UserDisplayClaims


class XBLExchangeTokensResponse(TypedDict):
    """xsts.auth.xboxlive.com response, 'xid' is absent for child accounts"""
    IssueInstant: str
    NotAfter: str
    Token: str
    DisplayClaims: UserDisplayClaims


class DeviceDisplayClaims(TypedDict):
    xdi: Dict[str, str]


class XNETDummyDeviceTokenResponse(TypedDict):
    """device.auth.xboxlive.com response"""
    IssueInstant: str
    NotAfter: str
    Token: str
    DisplayClaims: DeviceDisplayClaims
