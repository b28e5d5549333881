"""Predefined marketing channels and category budget allocation"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from config.default_params import DEFAULT_BUDGET_ALLOCATION as _DEFAULT_ALLOCATION
from .models import ChannelCategory


@dataclass(frozen=True)
class MarketingChannel:
    id: str
    name: str
    category: ChannelCategory
    description: str
    is_active: bool = True


@dataclass(frozen=True)
class ChannelBudget:
    channel: str
    budget: float
    percentage: float   # share of total budget, 0..100


DIGITAL_CHANNELS = [
    MarketingChannel('paid-search', 'Paid Search (SEM)', ChannelCategory.DIGITAL,
                     'Google Ads, Bing Ads, and other search engine marketing'),
    MarketingChannel('paid-social', 'Paid Social', ChannelCategory.DIGITAL,
                     'Facebook, Instagram, LinkedIn, TikTok ads'),
    MarketingChannel('display', 'Display Advertising', ChannelCategory.DIGITAL,
                     'Programmatic display, retargeting campaigns'),
    MarketingChannel('email', 'Email Marketing', ChannelCategory.DIGITAL,
                     'Email campaigns, newsletters, drip sequences'),
    MarketingChannel('seo', 'SEO', ChannelCategory.DIGITAL,
                     'Organic search optimization efforts'),
]

FIELD_CHANNELS = [
    MarketingChannel('events', 'Events & Trade Shows', ChannelCategory.FIELD,
                     'Industry conferences, trade shows, sponsored events'),
    MarketingChannel('direct-sales', 'Direct Sales Outreach', ChannelCategory.FIELD,
                     'In-person demos, sales visits, field reps'),
    MarketingChannel('partnerships', 'Channel Partnerships', ChannelCategory.FIELD,
                     'Reseller, distributor, and affiliate partnerships'),
]

INFLUENCER_CHANNELS = [
    MarketingChannel('athlete-endorsements', 'Athlete Endorsements', ChannelCategory.INFLUENCER,
                     'Professional and amateur athlete partnerships'),
    MarketingChannel('coach-ambassadors', 'Coach Ambassadors', ChannelCategory.INFLUENCER,
                     'Coach and trainer ambassador programs'),
    MarketingChannel('social-influencers', 'Social Media Influencers', ChannelCategory.INFLUENCER,
                     'Sports and fitness influencer campaigns'),
]

CONTENT_CHANNELS = [
    MarketingChannel('blog', 'Blog & Articles', ChannelCategory.CONTENT,
                     'Owned media content, thought leadership'),
    MarketingChannel('video', 'Video Content', ChannelCategory.CONTENT,
                     'YouTube, tutorials, product demos'),
    MarketingChannel('podcast', 'Podcast & Audio', ChannelCategory.CONTENT,
                     'Podcast sponsorships and owned audio content'),
    MarketingChannel('webinars', 'Webinars', ChannelCategory.CONTENT,
                     'Educational webinars and online workshops'),
]

ALL_CHANNELS = DIGITAL_CHANNELS + FIELD_CHANNELS + INFLUENCER_CHANNELS + CONTENT_CHANNELS

DEFAULT_BUDGET_ALLOCATION: Dict[ChannelCategory, float] = {
    ChannelCategory(k): v for k, v in _DEFAULT_ALLOCATION.items()
}


def get_channels_by_category(category: ChannelCategory) -> List[MarketingChannel]:
    return [ch for ch in ALL_CHANNELS if ch.category == category]


def get_channel_by_id(channel_id: str) -> Optional[MarketingChannel]:
    return next((ch for ch in ALL_CHANNELS if ch.id == channel_id), None)


def get_active_channels() -> List[MarketingChannel]:
    return [ch for ch in ALL_CHANNELS if ch.is_active]


def allocate_budget(
    total_budget: float,
    allocation: Optional[Dict[ChannelCategory, float]] = None,
    channels: Optional[List[MarketingChannel]] = None,
) -> List[ChannelBudget]:
    """Split each category's share evenly across its active channels"""
    allocation = allocation or DEFAULT_BUDGET_ALLOCATION
    channels = channels if channels is not None else get_active_channels()

    budgets = []
    for category, share in allocation.items():
        members = [ch for ch in channels if ch.category == category and ch.is_active]
        if not members:
            continue
        per_channel = total_budget * share / len(members)
        for ch in members:
            budgets.append(ChannelBudget(
                channel=ch.id,
                budget=per_channel,
                percentage=(per_channel / total_budget) * 100 if total_budget > 0 else 0.0,
            ))
    return budgets
