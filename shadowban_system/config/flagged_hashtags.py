"""Flagged hashtag and cashtag table.

Columns: (tag, tier, platforms, category, notes)

- tag: ``#tag`` in lowercase or ``$TAG`` in uppercase
- tier: banned, restricted, monitored or safe
- platforms: platform ids, or ("all",) for every platform
"""

from typing import Optional, Tuple

HashtagRow = Tuple[str, str, Tuple[str, ...], str, Optional[str]]

_TW_IG = ("twitter", "instagram")
_ALL = ("all",)

HASHTAGS: Tuple[HashtagRow, ...] = (
    # Follow/like trading
    ("#followback", "banned", _TW_IG, "engagement", "Follow-trading signal"),
    ("#teamfollowback", "banned", _TW_IG, "engagement", None),
    ("#tfb", "banned", _TW_IG, "engagement", None),
    ("#followtrain", "banned", _TW_IG, "engagement", None),
    ("#gainfollowers", "banned", _TW_IG, "engagement", None),
    ("#mustfollow", "banned", _TW_IG, "engagement", None),
    ("#followforfollow", "banned", _ALL, "engagement", None),
    ("#f4f", "banned", _ALL, "engagement", None),
    ("#follow4follow", "banned", _ALL, "engagement", None),
    ("#like4like", "banned", _ALL, "engagement", None),
    ("#l4l", "banned", _ALL, "engagement", None),
    ("#likeforlike", "banned", _ALL, "engagement", None),
    ("#spam4spam", "banned", _ALL, "engagement", None),
    ("#s4s", "banned", _ALL, "engagement", None),
    ("#followme", "restricted", _TW_IG, "engagement", None),
    ("#autofollow", "banned", ("twitter",), "engagement", None),
    ("#instantfollow", "banned", ("twitter",), "engagement", None),
    ("#followparty", "banned", ("twitter",), "engagement", None),
    ("#rt4rt", "banned", ("twitter",), "engagement", None),
    ("#retweet4retweet", "banned", ("twitter",), "engagement", None),
    ("#likeforfollow", "banned", ("instagram",), "engagement", None),
    ("#shoutout4shoutout", "banned", ("instagram",), "engagement", None),
    ("#tagsforlikes", "restricted", ("instagram",), "engagement", None),

    # Growth schemes
    ("#gainwithxyla", "banned", ("twitter",), "growth_scheme", "Coordinated follow scheme"),
    ("#gainwithspxces", "banned", ("twitter",), "growth_scheme", None),
    ("#gainwiththepit", "banned", ("twitter",), "growth_scheme", None),

    # Adult
    ("#xxx", "banned", _ALL, "adult", None),
    ("#porn", "banned", _ALL, "adult", None),
    ("#nsfw", "restricted", ("twitter",), "adult", "Sensitive media filter"),
    ("#adult", "restricted", _ALL, "adult", None),
    ("#sex", "restricted", _ALL, "adult", None),
    ("#onlyfans", "restricted", ("instagram", "tiktok"), "adult", None),
    ("#linkinbio", "restricted", ("instagram", "tiktok"), "adult", None),

    # Political
    ("#qanon", "banned", ("facebook", "instagram"), "political", None),
    ("#wwg1wga", "banned", _ALL, "political", None),
    ("#stopthesteal", "restricted", _ALL, "political", None),
    ("#electionfraud", "restricted", _ALL, "political", "Civic integrity label"),
    ("#maga", "monitored", ("twitter",), "political", None),

    # Instagram-specific bans
    ("#adulting", "banned", ("instagram",), "instagram_banned", None),
    ("#alone", "banned", ("instagram",), "instagram_banned", None),
    ("#attractive", "banned", ("instagram",), "instagram_banned", None),
    ("#besties", "banned", ("instagram",), "instagram_banned", None),
    ("#bikinibody", "banned", ("instagram",), "instagram_banned", None),
    ("#boho", "banned", ("instagram",), "instagram_banned", None),
    ("#dating", "banned", ("instagram",), "instagram_banned", None),
    ("#eggplant", "banned", ("instagram",), "instagram_banned", None),
    ("#goddess", "banned", ("instagram",), "instagram_banned", None),
    ("#instababe", "banned", ("instagram",), "instagram_banned", None),
    ("#beautyblogger", "restricted", ("instagram",), "instagram_banned", None),
    ("#dm", "restricted", ("instagram",), "instagram_banned", None),
    ("#instamood", "restricted", ("instagram",), "instagram_banned", None),

    # Self harm and eating disorders
    ("#suicide", "banned", ("tiktok", "instagram"), "sensitive", "Redirected to support resources"),
    ("#selfharm", "banned", ("tiktok", "instagram"), "sensitive", None),
    ("#proana", "banned", _ALL, "eating_disorder", None),
    ("#promia", "banned", _ALL, "eating_disorder", None),
    ("#thinspo", "banned", _ALL, "eating_disorder", None),
    ("#edtwt", "banned", ("twitter",), "eating_disorder", None),

    # TikTok reach-bait
    ("#fyp", "restricted", ("tiktok",), "tiktok_spam", None),
    ("#foryou", "restricted", ("tiktok",), "tiktok_spam", None),
    ("#foryoupage", "restricted", ("tiktok",), "tiktok_spam", None),
    ("#viral", "restricted", ("tiktok",), "tiktok_spam", None),
    ("#goviral", "restricted", ("tiktok",), "tiktok_spam", None),

    # Overused
    ("#repost", "restricted", ("instagram",), "overused", None),
    ("#instadaily", "restricted", ("instagram",), "overused", None),
    ("#photooftheday", "monitored", ("instagram",), "overused", None),
    ("#instagood", "monitored", ("instagram",), "overused", None),
    ("#picoftheday", "monitored", ("instagram",), "overused", None),
)

CASHTAGS: Tuple[HashtagRow, ...] = (
    ("$BTC", "safe", ("twitter",), "crypto", None),
    ("$ETH", "safe", ("twitter",), "crypto", None),
    ("$SOL", "safe", ("twitter",), "crypto", None),
    ("$DOGE", "monitored", ("twitter",), "crypto", "Meme coin"),
    ("$SHIB", "monitored", ("twitter",), "crypto", None),
    ("$PEPE", "monitored", ("twitter",), "crypto", None),
    ("$TSLA", "safe", ("twitter",), "stocks", None),
    ("$AAPL", "safe", ("twitter",), "stocks", None),
    ("$NVDA", "safe", ("twitter",), "stocks", None),
    ("$GME", "monitored", ("twitter",), "stocks", None),
    ("$AMC", "monitored", ("twitter",), "stocks", None),
    ("$SCAM", "banned", ("twitter",), "scam", None),
    ("$PUMP", "banned", ("twitter",), "scam", "Pump-and-dump signal"),
    ("$FREE", "restricted", ("twitter",), "scam", None),
    ("$AIRDROP", "restricted", ("twitter",), "scam", None),
    ("$GIVEAWAY", "restricted", ("twitter",), "scam", None),
    ("$MOON", "restricted", ("twitter",), "scam", None),
)
