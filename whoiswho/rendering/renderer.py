"""
Profile snapshot rendering.

Layout is owned by whichever ProfileImageRenderer is installed; the service
only needs PNG bytes back. PlaceholderRenderer is a plain Pillow card used
when nothing richer is configured.
"""
import io
import logging
from typing import Any, Dict, Optional, Protocol, Tuple

import httpx
from PIL import Image, ImageDraw, ImageFont

from whoiswho.clients.images import fetch_image
from whoiswho.utils.profile_metrics import (
    GREEN, RED, YELLOW, calculate_follower_ratio, neynar_score_level, parse_spam_label, quotient_score_level,
)

logger = logging.getLogger(__name__)

IMAGE_SIZE = (1200, 800)
BACKGROUND = (15, 23, 42)
FOREGROUND = (241, 245, 249)
MUTED = (148, 163, 184)
LEVEL_COLORS = {GREEN: (34, 197, 94), YELLOW: (234, 179, 8)}
RED_COLOR = (239, 68, 68)


class ProfileImageRenderer(Protocol):
    async def render(self, user: Optional[Dict[str, Any]]) -> bytes:
        """Return a PNG for the aggregated user record, or a not-found card for None."""
        ...


def to_jpeg(png: bytes, quality: int = 85) -> bytes:
    """Re-encode renderer output as a progressive, optimized JPEG."""
    with Image.open(io.BytesIO(png)) as image:
        out = io.BytesIO()
        image.convert("RGB").save(out, format="JPEG", quality=quality, progressive=True, optimize=True)
        return out.getvalue()


def banner_colors(fid: Any) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Deterministic banner colors derived from the FID."""
    digest = sum(ord(c) for c in str(fid))
    hue1 = digest % 360
    hue2 = (digest * 137) % 360
    return _hsl(hue1, 0.7, 0.5), _hsl(hue2, 0.7, 0.3)


def _hsl(hue: int, s: float, l: float) -> Tuple[int, int, int]:
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = l - c / 2
    sector = int(hue // 60) % 6
    r, g, b = [(c, x, 0), (x, c, 0), (0, c, x), (0, x, c), (x, 0, c), (c, 0, x)][sector]
    return int((r + m) * 255), int((g + m) * 255), int((b + m) * 255)


def _font(size: int):
    return ImageFont.load_default(size=size)


class PlaceholderRenderer:
    """Minimal profile card: banner, avatar, name and headline scores."""

    def __init__(self, client: httpx.AsyncClient, image_timeout: float = 3.0):
        self.client = client
        self.image_timeout = image_timeout

    async def render(self, user: Optional[Dict[str, Any]]) -> bytes:
        image = Image.new("RGB", IMAGE_SIZE, BACKGROUND)
        draw = ImageDraw.Draw(image)

        if user is None:
            draw.text((600, 400), "User not found", fill=FOREGROUND, font=_font(48), anchor="mm")
            return self._png(image)

        start, end = banner_colors(user.get("fid"))
        for y in range(200):
            t = y / 199
            color = tuple(int(start[i] + (end[i] - start[i]) * t) for i in range(3))
            draw.line([(0, y), (IMAGE_SIZE[0], y)], fill=color)

        avatar = await fetch_image(self.client, user.get("pfp_url"), timeout=self.image_timeout)
        if avatar:
            try:
                with Image.open(io.BytesIO(avatar)) as pfp:
                    image.paste(pfp.convert("RGB").resize((160, 160)), (60, 120))
            except OSError as e:
                logger.warning(f"Could not decode avatar for FID {user.get('fid')}: {e}")

        draw.text((60, 300), user.get("display_name") or user.get("username") or "", fill=FOREGROUND, font=_font(56))
        draw.text((60, 370), f"@{user.get('username', '')}  ·  FID {user.get('fid')}", fill=MUTED, font=_font(32))

        y = 460
        for label, value, level in self._metrics(user):
            draw.text((60, y), label, fill=MUTED, font=_font(30))
            draw.text((480, y), value, fill=LEVEL_COLORS.get(level, RED_COLOR) if level else FOREGROUND, font=_font(30))
            y += 52

        return self._png(image)

    @staticmethod
    def _metrics(user: Dict[str, Any]):
        rows = []
        score = user.get("score")
        if score is not None:
            rows.append(("Neynar Score", f"{score:.2f}", neynar_score_level(score)))

        followers = user.get("follower_count") or 0
        following = user.get("following_count") or 0
        ratio = calculate_follower_ratio(followers, following)
        rows.append(("Followers / Following", ratio["display"], ratio["level"]))

        spam_label = ((user.get("farcaster") or {}).get("extras") or {}).get("publicSpamLabel")
        if spam_label:
            spam = parse_spam_label(spam_label)
            rows.append(("Spam Label", str(spam["score"]), spam["level"]))

        quotient = (user.get("quotientScore") or {}).get("score")
        if quotient is not None:
            tier = quotient_score_level(quotient)
            level = {"success": GREEN, "warning": YELLOW}.get(tier["level"], RED)
            rows.append(("Quotient Score", f"{quotient:.2f} ({tier['label']})", level))
        return rows

    @staticmethod
    def _png(image: Image.Image) -> bytes:
        out = io.BytesIO()
        image.save(out, format="PNG")
        return out.getvalue()
