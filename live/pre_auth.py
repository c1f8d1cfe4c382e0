"""Login page scraping performed before submitting credentials"""

import logging
from typing import Iterable, List, Optional

from errors import ScrapeError
from transport import FetchClient
from .authorization import get_authorize_url
from .extractors import DEFAULT_EXTRACTORS, ParameterExtractor, extract_parameters
from .models import PreAuthContext, PreAuthOptions

logger = logging.getLogger(__name__)


def build_cookie_header(set_cookies: Iterable[str]) -> str:
    """Reduce Set-Cookie values to a single Cookie header

    Attributes after the first ';' (Path, Domain, Expires...) are dropped.

    Args:
        set_cookies: Raw Set-Cookie header values

    Returns:
        'name=value; name2=value2' string
    """
    pairs: List[str] = []
    for raw in set_cookies:
        pair = raw.split(";", 1)[0].strip()
        if pair:
            pairs.append(pair)
    return "; ".join(pairs)


async def pre_auth(
    options: Optional[PreAuthOptions] = None,
    http: Optional[FetchClient] = None,
    extractors: Iterable[ParameterExtractor] = DEFAULT_EXTRACTORS,
) -> PreAuthContext:
    """Load the login page and collect what the credential POST needs

    Args:
        options: OAuth parameters, Xbox app registration by default
        http: HTTP client, a fresh FetchClient by default
        extractors: Rules producing 'PPFT' and 'urlPost'

    Returns:
        PreAuthContext for a single credential submission

    Raises:
        ScrapeError: If PPFT or urlPost can't be matched
        TransportError: If the request fails
    """
    options = options or PreAuthOptions()
    http = http or FetchClient()

    url = get_authorize_url(
        client_id=options.client_id,
        scope=options.scope,
        response_type=options.response_type,
        redirect_uri=options.redirect_uri,
    )

    logger.debug("Loading login.live.com authorize page")
    response = await http.get(url, parse_json=False)

    body = response.data or ""
    cookie = build_cookie_header(response.set_cookies)
    matches = extract_parameters(body, extractors)

    ppft = matches.get("PPFT")
    url_post = matches.get("urlPost")
    if ppft is None or url_post is None:
        missing = [name for name, value in matches.items() if value is None]
        logger.error(f"Could not match pre-auth parameters: {missing}")
        raise ScrapeError(
            'Could not match required "preAuth" parameters',
            extra={"matches": matches},
        )

    logger.debug(f"Matched pre-auth parameters ({len(response.set_cookies)} cookies)")
    return PreAuthContext(cookie=cookie, ppft=ppft, url_post=url_post)
