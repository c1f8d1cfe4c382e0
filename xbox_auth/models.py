"""Options and results of the full authentication flow"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from live import LiveAuthResponse
from xnet import XBLExchangeTokensResponse, XNETExchangeRpsTicketResponse

LIVE_HOST = "login.live.com"
USER_HOST = "user.auth.xboxlive.com"
XSTS_HOST = "xsts.auth.xboxlive.com"


class AuthenticateOptions(BaseModel):
    """Options accepted by authenticate()

    Attributes:
        xsts_relying_party: Relying party of the XSTS token
        optional_display_claims: Extra display claims to request
        sandbox_id: Sandbox, RETAIL by default
        device_token: Device token, required for child/teen accounts
        title_token: Title token, only valid together with device_token
        raw: Return every step response instead of the simplified result
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    xsts_relying_party: Optional[str] = Field(default=None, alias="XSTSRelyingParty")
    optional_display_claims: Optional[List[str]] = Field(default=None, alias="optionalDisplayClaims")
    sandbox_id: Optional[str] = Field(default=None, alias="sandboxId")
    device_token: Optional[str] = Field(default=None, alias="deviceToken")
    title_token: Optional[str] = Field(default=None, alias="titleToken")
    raw: bool = False

    @model_validator(mode="after")
    def check_title_token(self) -> "AuthenticateOptions":
        if self.title_token is not None and self.device_token is None:
            raise ValueError("title_token can only be used together with device_token")
        return self


@dataclass
class AuthenticateResponse:
    """Simplified authentication result

    Attributes:
        xuid: Xbox user id, None for child accounts without device token
        user_hash: User hash ('uhs' claim)
        xsts_token: XSTS token
        display_claims: Display claims returned with the XSTS token
        expires_on: XSTS token expiry (ISO 8601)
    """
    xuid: Optional[str]
    user_hash: str
    xsts_token: str
    display_claims: Dict[str, Any]
    expires_on: str
    kind: Literal["simplified"] = field(default="simplified", init=False)

    @property
    def authorization_header(self) -> str:
        """Value for the Authorization header of Xbox Live API calls"""
        return f"XBL3.0 x={self.user_hash};{self.xsts_token}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xuid": self.xuid,
            "user_hash": self.user_hash,
            "xsts_token": self.xsts_token,
            "display_claims": self.display_claims,
            "expires_on": self.expires_on,
        }


@dataclass
class AuthenticateRawResponse:
    """Every step response, keyed by the host that produced it"""
    responses: Dict[str, Any]
    kind: Literal["raw"] = field(default="raw", init=False)

    @classmethod
    def from_steps(
        cls,
        live_response: LiveAuthResponse,
        user_token_response: XNETExchangeRpsTicketResponse,
        xsts_response: XBLExchangeTokensResponse,
    ) -> "AuthenticateRawResponse":
        return cls(responses={
            LIVE_HOST: live_response,
            USER_HOST: user_token_response,
            XSTS_HOST: xsts_response,
        })

    def to_dict(self) -> Dict[str, Any]:
        output = dict(self.responses)
        live_response = output.get(LIVE_HOST)
        if isinstance(live_response, LiveAuthResponse):
            output[LIVE_HOST] = live_response.to_dict()
        return output


AuthenticateResult = Union[AuthenticateResponse, AuthenticateRawResponse]
