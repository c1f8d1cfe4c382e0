import json
import logging
import os
import platform
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from live.models import LiveAuthResponse
from settings import TOKEN_FILE

logger = logging.getLogger(__name__)


class FileTokenStore:
    """Live token store persisted as JSON with owner-only permissions

    Implements the live.TokenStore protocol, one file per account.
    """

    def __init__(self, token_file: Optional[str] = None):
        self.token_path = Path(token_file if token_file else TOKEN_FILE)
        self._ensure_secure_directory()

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.token_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def save(self, response: LiveAuthResponse) -> None:
        """Persist a Live token response, keeping the previous refresh token if none was issued"""
        refresh_token = response.refresh_token or self.get_refresh_token()
        self.save_tokens(
            access_token=response.access_token,
            refresh_token=refresh_token,
            expires_in=response.expires_in or 0,
            user_id=response.user_id,
        )

    def save_tokens(
        self,
        access_token: str,
        refresh_token: Optional[str],
        expires_in: int,
        user_id: Optional[str] = None,
    ):
        """Save tokens with computed expiry time"""
        data = {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user_id": user_id,
            "expires_at": int(time.time()) + expires_in,
        }

        # Write next to the target then swap, a crash never leaves half a file
        tmp_path = self.token_path.with_suffix(self.token_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        if platform.system() != "Windows":
            os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self.token_path)
        logger.debug(f"Saved Live tokens to {self.token_path}")

    def load_tokens(self) -> Optional[Dict[str, Any]]:
        """Load tokens from storage"""
        if not self.token_path.exists():
            return None

        try:
            return json.loads(self.token_path.read_text())
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Failed to load Live tokens from {self.token_path}: {e}")
            return None

    def clear_tokens(self):
        """Remove stored tokens"""
        if self.token_path.exists():
            self.token_path.unlink()

    def is_token_expired(self) -> bool:
        """Check if the stored access token is expired"""
        tokens = self.load_tokens()
        if not tokens:
            return True

        expires_at = tokens.get("expires_at", 0)
        # Add 5 second buffer before expiry
        return int(time.time()) >= (expires_at - 5)

    def get_access_token(self) -> Optional[str]:
        """Get the current access token if valid"""
        tokens = self.load_tokens()
        if not tokens or self.is_token_expired():
            return None
        return tokens.get("access_token")

    def get_refresh_token(self) -> Optional[str]:
        """Get the last known refresh token"""
        tokens = self.load_tokens()
        if not tokens:
            return None
        return tokens.get("refresh_token")

    def get_status(self) -> Dict[str, Any]:
        """Get token status without exposing secrets"""
        tokens = self.load_tokens()
        if not tokens:
            return {
                "has_tokens": False,
                "has_refresh_token": False,
                "is_expired": True,
                "expires_at": None,
                "time_until_expiry": "No tokens",
            }

        expires_at = tokens.get("expires_at", 0)
        current_time = int(time.time())
        expires_str = datetime.fromtimestamp(expires_at).isoformat()

        if current_time >= expires_at:
            time_since = current_time - expires_at
            hours_since = time_since // 3600
            mins_since = (time_since % 3600) // 60
            time_str = f"{hours_since}h {mins_since}m ago" if hours_since > 0 else f"{mins_since}m ago"
            is_expired = True
        else:
            time_remaining = expires_at - current_time
            hours = time_remaining // 3600
            minutes = (time_remaining % 3600) // 60
            time_str = f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"
            is_expired = False

        return {
            "has_tokens": True,
            "has_refresh_token": bool(tokens.get("refresh_token")),
            "is_expired": is_expired,
            "expires_at": expires_str,
            "time_until_expiry": time_str,
        }

    @property
    def token_file(self) -> Path:
        """Get the token file path"""
        return self.token_path
