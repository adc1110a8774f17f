"""Niche keyword table and the media identifiers each niche draws from."""

# Checked in order, first niche with a keyword in the prompt wins
NICHE_KEYWORDS = [
    ("bakery", ("bakery", "bread", "pastry")),
    ("cafe", ("cafe", "coffee")),
    ("restaurant", ("restaurant", "food", "dining")),
    ("fitness", ("fitness", "gym", "workout")),
    ("tech", ("tech", "saas", "software", "startup")),
    ("ecommerce", ("shop", "store", "ecommerce", "product")),
    ("portfolio", ("portfolio", "creative", "designer")),
    ("realestate", ("real estate", "property", "house")),
    ("healthcare", ("health", "medical", "clinic")),
    ("travel", ("travel", "tourism", "vacation")),
]

NICHE_LABELS = {
    "bakery": "bakery",
    "cafe": "cafe",
    "restaurant": "restaurant",
    "fitness": "fitness studio",
    "tech": "tech product",
    "ecommerce": "online store",
    "portfolio": "portfolio",
    "realestate": "real estate",
    "healthcare": "healthcare",
    "travel": "travel",
    "default": "website",
}

# First id of each list is the hero image
NICHE_MEDIA = {
    "bakery": [
        "photo-1509440159596-0249088772ff",
        "photo-1555507036-ab1f4038808a",
        "photo-1517433670267-30f41c41e0fe",
        "photo-1486427944544-d2c6e7f3b60c",
        "photo-1558961363-fa8fdf82db35",
        "photo-1483695028939-5bb13f8648b0",
    ],
    "cafe": [
        "photo-1495474472287-4d71bcdd2085",
        "photo-1442512595331-e89e73853f31",
        "photo-1501339847302-ac426a4a7cbb",
        "photo-1511920170033-f8396924c348",
        "photo-1559496417-e7f25cb247f3",
    ],
    "restaurant": [
        "photo-1517248135467-4c7edcad34c4",
        "photo-1414235077428-338989a2e8c0",
        "photo-1424847651672-bf20a4b0982b",
        "photo-1555396273-367ea4eb4db5",
        "photo-1504674900247-0877df9cc836",
        "photo-1540189549336-e6e99c3679fe",
    ],
    "fitness": [
        "photo-1534438327276-14e5300c3a48",
        "photo-1571019613454-1cb2f99b2d8b",
        "photo-1517836357463-d25dfeac3438",
        "photo-1571019614242-c5c5dee9f50b",
        "photo-1540497077202-7c8a3999166f",
        "photo-1576678927484-cc907957088c",
    ],
    "tech": [
        "photo-1551288049-bebda4e38f71",
        "photo-1460925895917-afdab827c52f",
        "photo-1504868584819-f8e8b4b6d7e3",
        "photo-1519389950473-47ba0277781c",
        "photo-1535378620166-273708d44e4c",
        "photo-1550751827-4bd374c3f58b",
    ],
    "ecommerce": [
        "photo-1472851294608-062f824d29cc",
        "photo-1441986300917-64674bd600d8",
        "photo-1555529669-e69e7aa0ba9a",
        "photo-1607082348824-0a96f2a4b9da",
        "photo-1483985988355-763728e1935b",
        "photo-1558618666-fcd25c85cd64",
    ],
    "portfolio": [
        "photo-1558655146-d09347e92766",
        "photo-1561070791-2526d30994b5",
        "photo-1545235617-7a424c1a60cc",
        "photo-1542744094-3a31f272c490",
        "photo-1460661419201-fd4cecdf8a8b",
        "photo-1513542789411-b6a5d4f31634",
    ],
    "realestate": [
        "photo-1600596542815-ffad4c1539a9",
        "photo-1600585154340-be6161a56a0c",
        "photo-1600573472592-401b489a3cdc",
        "photo-1512917774080-9991f1c4c750",
        "photo-1560448204-e02f11c3d0e2",
    ],
    "healthcare": [
        "photo-1576091160550-2173dba999ef",
        "photo-1631217868264-e5b90bb7e133",
        "photo-1579684385127-1ef15d508118",
        "photo-1559839734-2b71ea197ec2",
    ],
    "travel": [
        "photo-1507525428034-b723cf961d3e",
        "photo-1476514525535-07fb3b4ae5f1",
        "photo-1469474968028-56623f02e42e",
        "photo-1488085061387-422e29b40080",
        "photo-1530789253388-582c481c54b0",
    ],
    "default": [
        "photo-1557683316-973673baf926",
        "photo-1553356084-58ef4a67b2a7",
        "photo-1618005182384-a83a8bd57fbe",
        "photo-1557682224-5b8590cd9ec5",
        "photo-1579546929518-9e396f3cc809",
    ],
}

AVATARS = [
    "photo-1494790108377-be9c29b29330",
    "photo-1507003211169-0a1dd7228f2d",
    "photo-1438761681033-6461ffad8d80",
    "photo-1472099645785-5658abf4ff4e",
    "photo-1544005313-94ddf0286df2",
    "photo-1517841905240-472988babdf9",
]

MEDIA_URL = "https://images.unsplash.com/{id}?w={width}&q=80"
HERO_WIDTH = 1920
GALLERY_WIDTH = 800
AVATAR_WIDTH = 100


def detect_niche(prompt):
    """Return the niche key for a prompt, or "default"."""
    text = prompt.lower()
    for niche, keywords in NICHE_KEYWORDS:
        if any(k in text for k in keywords):
            return niche
    return "default"


def media_url(media_id, width):
    return MEDIA_URL.format(id=media_id, width=width)


def hero_image(niche):
    ids = NICHE_MEDIA.get(niche, NICHE_MEDIA["default"])
    return media_url(ids[0], HERO_WIDTH)


def gallery_images(niche, count=6):
    ids = NICHE_MEDIA.get(niche, NICHE_MEDIA["default"])
    return [media_url(i, GALLERY_WIDTH) for i in ids[:count]]


def avatar_images(count=3):
    return [media_url(i, AVATAR_WIDTH) for i in AVATARS[:count]]


def media_table():
    """Render the niche lookup table for prompt injection."""
    lines = ["NICHE MEDIA IDS (hero first, use https://images.unsplash.com/<id>?w=1920&q=80):"]
    for niche, ids in NICHE_MEDIA.items():
        lines.append(f"- {niche}: {', '.join(ids)}")
    return "\n".join(lines)
