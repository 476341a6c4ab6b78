"""
Helpers for categorizing profile metrics into risk levels and tiers.
"""
import math
import re
from typing import Any, Dict, List, Optional

GREEN = "green"
YELLOW = "yellow"
RED = "red"

QUOTIENT_SCORE_TIERS = [
    (0.9, "Exceptional", "success", "Platform superstars, maximum influence"),
    (0.8, "Elite", "success", "Top-tier creators, community leaders"),
    (0.75, "Influential", "success", "High-quality content, strong network"),
    (0.6, "Active", "success", "Regular contributors, solid engagement"),
    (0.5, "Casual", "warning", "Occasional users, low engagement. Potentially spam or bot accounts."),
]
QUOTIENT_INACTIVE = ("Inactive/Spam", "error", "Bot accounts, farmers, inactive users")


def calculate_follower_ratio(followers: int, following: int) -> Dict[str, Any]:
    """Followers per following, flagged green >= 0.8, yellow >= 0.2, else red."""
    display = f"{followers:,} / {following:,}"
    if following == 0:
        return {"ratio": math.inf if followers > 0 else 0.0, "level": GREEN, "display": display}

    ratio = followers / following
    if ratio >= 0.8:
        level = GREEN
    elif ratio >= 0.2:
        level = YELLOW
    else:
        level = RED
    return {"ratio": ratio, "level": level, "display": display}


def parse_spam_label(label: str) -> Dict[str, Any]:
    """Parse labels like "2 (unlikely to engage in spammy behavior)"."""
    match = re.match(r"^(\d+)", label or "")
    score = int(match.group(1)) if match else 0
    if score == 2:
        level = GREEN
    elif score == 1:
        level = YELLOW
    else:
        level = RED
    return {"score": score, "level": level, "text": label}


def neynar_score_level(score: float) -> str:
    if score >= 0.7:
        return GREEN
    if score >= 0.55:
        return YELLOW
    return RED


def quotient_score_level(score: float) -> Dict[str, str]:
    for threshold, label, level, description in QUOTIENT_SCORE_TIERS:
        if score >= threshold:
            return {"level": level, "label": label, "description": description}
    label, level, description = QUOTIENT_INACTIVE
    return {"level": level, "label": label, "description": description}


def calculate_reward(rank: Optional[int], tiers: List[Dict[str, Any]]) -> float:
    """
    USDC reward for a creator-rewards rank.

    Tiers are consumed in order; each covers the next `size` ranks and pays
    `rewardCents`. Ranks beyond every tier earn nothing.
    """
    if not rank or rank <= 0:
        return 0.0

    cumulative = 0
    for tier in tiers or []:
        cumulative += tier.get("size", 0)
        if rank <= cumulative:
            return tier.get("rewardCents", 0) / 100
    return 0.0
