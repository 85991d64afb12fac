"""
NameScout - Social Handle Checker
Fetches public profile URLs and guesses whether a username is free.
Best effort only: many platforms serve soft-404 pages or block bots.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from namescout.schemas.social import SocialResult

logger = logging.getLogger("namescout.social")


@dataclass(frozen=True)
class Platform:
    name: str
    url: Optional[str]
    check_url: Optional[str]


SOCIAL_PLATFORMS: list[Platform] = [
    # ── Major social networks ──
    Platform("Twitter/X", "https://x.com/", "https://x.com/"),
    Platform("Instagram", "https://www.instagram.com/", "https://www.instagram.com/"),
    Platform("Facebook", "https://www.facebook.com/", "https://www.facebook.com/"),
    Platform("LinkedIn", "https://www.linkedin.com/in/", "https://www.linkedin.com/in/"),
    Platform("TikTok", "https://www.tiktok.com/@", "https://www.tiktok.com/@"),
    Platform("Threads", "https://www.threads.net/@", "https://www.threads.net/@"),
    # ── Content ──
    Platform("YouTube", "https://www.youtube.com/@", "https://www.youtube.com/@"),
    Platform("Twitch", "https://www.twitch.tv/", "https://www.twitch.tv/"),
    Platform("Vimeo", "https://vimeo.com/", "https://vimeo.com/"),
    # ── Developer ──
    Platform("GitHub", "https://github.com/", "https://github.com/"),
    Platform("GitLab", "https://gitlab.com/", "https://gitlab.com/"),
    Platform("Bitbucket", "https://bitbucket.org/", "https://bitbucket.org/"),
    Platform("Dev.to", "https://dev.to/", "https://dev.to/"),
    Platform("CodePen", "https://codepen.io/", "https://codepen.io/"),
    Platform("Stack Overflow", "https://stackoverflow.com/users/", None),
    Platform("Repl.it", "https://replit.com/@", "https://replit.com/@"),
    # ── Creative & design ──
    Platform("Dribbble", "https://dribbble.com/", "https://dribbble.com/"),
    Platform("Behance", "https://www.behance.net/", "https://www.behance.net/"),
    Platform("Pinterest", "https://www.pinterest.com/", "https://www.pinterest.com/"),
    Platform("Figma", "https://www.figma.com/@", "https://www.figma.com/@"),
    # ── Blogging & writing ──
    Platform("Medium", "https://medium.com/@", "https://medium.com/@"),
    Platform("Substack", "https://substack.com/@", "https://substack.com/@"),
    Platform("Hashnode", "https://hashnode.com/@", "https://hashnode.com/@"),
    Platform("Tumblr", "https://www.tumblr.com/", "https://www.tumblr.com/"),
    # ── Community ──
    Platform("Reddit", "https://www.reddit.com/user/", "https://www.reddit.com/user/"),
    Platform("Discord", "https://discord.com/users/", None),
    Platform("Product Hunt", "https://www.producthunt.com/@", "https://www.producthunt.com/@"),
    Platform("Indie Hackers", "https://www.indiehackers.com/", "https://www.indiehackers.com/"),
    # ── Creator funding ──
    Platform("Patreon", "https://www.patreon.com/", "https://www.patreon.com/"),
    Platform("Ko-fi", "https://ko-fi.com/", "https://ko-fi.com/"),
    Platform("Buy Me a Coffee", "https://www.buymeacoffee.com/", "https://www.buymeacoffee.com/"),
    # ── Music & audio ──
    Platform("Spotify", "https://open.spotify.com/user/", None),
    Platform("SoundCloud", "https://soundcloud.com/", "https://soundcloud.com/"),
    Platform("Bandcamp", "https://bandcamp.com/", None),
    # ── Photography ──
    Platform("Flickr", "https://www.flickr.com/photos/", "https://www.flickr.com/photos/"),
    Platform("500px", "https://500px.com/p/", "https://500px.com/p/"),
    Platform("Unsplash", "https://unsplash.com/@", "https://unsplash.com/@"),
    # ── Messaging ──
    Platform("Telegram", "https://t.me/", "https://t.me/"),
    Platform("Snapchat", "https://www.snapchat.com/add/", "https://www.snapchat.com/add/"),
    Platform("WhatsApp", None, None),
    Platform("Mastodon", "https://mastodon.social/@", None),
    # ── Other ──
    Platform("Keybase", "https://keybase.io/", "https://keybase.io/"),
    Platform("Linktree", "https://linktr.ee/", "https://linktr.ee/"),
    Platform("AboutMe", "https://about.me/", "https://about.me/"),
]

NOT_FOUND_INDICATORS = (
    "page not found",
    "user not found",
    "profile not found",
    "doesn't exist",
    "isn't available",
    "this account doesn't exist",
    "sorry, this page isn't available",
    "the page you requested was not found",
    "this page is no longer available",
)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

_INVALID_USERNAME_CHARS = re.compile(r"[^a-z0-9_.-]")


def clean_username(username: str) -> str:
    return _INVALID_USERNAME_CHARS.sub("", username.lower())


def classify_response(response: httpx.Response) -> bool:
    """True if the profile response looks like "no such user"."""
    if response.status_code == 404:
        return True

    if response.status_code == 200:
        body = response.text.lower()
        return any(indicator in body for indicator in NOT_FOUND_INDICATORS)

    if response.status_code in (301, 302, 303):
        location = response.headers.get("location", "")
        return "/login" in location or "/signup" in location or location == "/"

    return False


class SocialChecker:
    """Checks every platform in ``platforms`` concurrently."""

    def __init__(
        self,
        timeout: float = 8.0,
        platforms: Optional[list[Platform]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.platforms = platforms if platforms is not None else SOCIAL_PLATFORMS
        self._transport = transport

    async def _check_platform(
        self, client: httpx.AsyncClient, username: str, platform: Platform
    ) -> SocialResult:
        profile_url = f"{platform.url}{username}" if platform.url else None

        if not platform.check_url:
            return SocialResult(
                platform=platform.name,
                url=profile_url,
                available=None,
                status="unknown",
            )

        check_url = f"{platform.check_url}{username}"
        try:
            response = await client.get(check_url)
        except httpx.HTTPError as exc:
            logger.debug("Lookup of %s failed: %s", check_url, exc)
            return SocialResult(
                platform=platform.name,
                url=profile_url,
                available=None,
                status="error",
            )

        available = classify_response(response)
        return SocialResult(
            platform=platform.name,
            url=check_url,
            available=available,
            status="available" if available else "taken",
        )

    async def check(self, username: str) -> list[SocialResult]:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self._transport,
        ) as client:
            results = await asyncio.gather(
                *(self._check_platform(client, username, p) for p in self.platforms)
            )

        taken = sum(1 for r in results if r.status == "taken")
        logger.info("Checked @%s on %d platforms (%d taken)", username, len(results), taken)
        return list(results)
