"""San Francisco keyword tables and text matchers.

Everything here is plain data plus pure functions over lowercased text, so
adapters and scorers can share one definition of "local".
"""

from typing import Dict, List, Tuple

PRIMARY_LOCALE = "san francisco"

# Metro-area names and abbreviations. Padded entries avoid matching "sf"
# inside longer words.
METRO_ALIASES = ["bay area", "sf ", " sf"]

# Places, agencies and landmarks that mark a story as local.
LOCALE_KEYWORDS = [
    "san francisco",
    "bay area",
    "silicon valley",
    "oakland",
    "berkeley",
    "palo alto",
    "mountain view",
    "cupertino",
    "menlo park",
    "south bay",
    "east bay",
    "marin",
    "soma",
    "mission",
    "tenderloin",
    "bart",
    "muni",
    "sfmta",
    "caltrain",
    "golden gate",
    "sfchronicle",
    "sfstandard",
    "sfgate",
    "mission local",
]

# Organizations headquartered in the Bay Area.
LOCAL_ORGANIZATIONS = [
    "openai",
    "anthropic",
    "google",
    "apple",
    "meta",
    "facebook",
    "salesforce",
    "uber",
    "lyft",
    "airbnb",
    "stripe",
    "coinbase",
    "twitter",
    "x.com",
    "dropbox",
    "slack",
    "figma",
    "notion",
    "vercel",
    "supabase",
    "retool",
    "rippling",
    "instacart",
    "doordash",
]

# Short neighborhood names used for relevance scoring.
SCORING_NEIGHBORHOODS = [
    "mission",
    "soma",
    "tenderloin",
    "castro",
    "haight",
    "marina",
    "noe valley",
    "chinatown",
    "north beach",
    "potrero hill",
    "dogpatch",
    "bayview",
    "richmond district",
    "sunset district",
    "hayes valley",
    "nob hill",
    "russian hill",
    "pacific heights",
    "presidio",
    "financial district",
]

NEIGHBORHOODS = [
    "Bayview/Hunters Point",
    "Bernal Heights",
    "Castro/Upper Market",
    "Chinatown",
    "Civic Center/Tenderloin",
    "Cole Valley",
    "Dogpatch",
    "Downtown/Union Square",
    "Excelsior",
    "Financial District",
    "Fisherman's Wharf",
    "Glen Park",
    "Golden Gate Park",
    "Haight-Ashbury",
    "Hayes Valley",
    "Ingleside",
    "Inner Richmond",
    "Inner Sunset",
    "Japantown",
    "Lakeshore",
    "Marina",
    "Mission",
    "Mission Bay",
    "Nob Hill",
    "Noe Valley",
    "North Beach",
    "Ocean View",
    "Outer Mission",
    "Outer Richmond",
    "Outer Sunset",
    "Pacific Heights",
    "Parkside",
    "Portola",
    "Potrero Hill",
    "Presidio",
    "Russian Hill",
    "Sea Cliff",
    "SoMa",
    "South Beach",
    "Sunset",
    "Twin Peaks",
]

NEIGHBORHOOD_ALIASES: Dict[str, str] = {
    "tenderloin": "Civic Center/Tenderloin",
    "the castro": "Castro/Upper Market",
    "castro": "Castro/Upper Market",
    "fidi": "Financial District",
    "the mission": "Mission",
    "pac heights": "Pacific Heights",
    "haight": "Haight-Ashbury",
    "gg park": "Golden Gate Park",
    "hunters point": "Bayview/Hunters Point",
    "bayview": "Bayview/Hunters Point",
    "south of market": "SoMa",
    "union square": "Downtown/Union Square",
}

ALERT_KEYWORDS = [
    # Transit
    "bart delay", "muni delay", "muni shutdown", "transit emergency",
    "caltrain delay", "ferry delay",
    # Emergency
    "fire", "earthquake", "evacuation", "emergency alert",
    "tsunami warning", "shelter in place",
    # Safety
    "shooting", "stabbing", "homicide", "robbery", "assault",
    "police activity", "standoff",
    # Traffic
    "road closure", "bridge closure", "traffic alert",
    "accident", "collision",
    # Protest/Events
    "protest", "demonstration", "rally",
    # Weather
    "flood warning", "storm warning", "power outage",
    # Infrastructure
    "water main break", "gas leak", "building collapse",
]


def is_locale_relevant(text: str) -> bool:
    """Check whether text mentions the locale or a local organization."""
    lowered = text.lower()
    if any(keyword in lowered for keyword in LOCALE_KEYWORDS):
        return True
    return any(org in lowered for org in LOCAL_ORGANIZATIONS)


def extract_neighborhoods(text: str) -> List[str]:
    """Return canonical neighborhood names mentioned in text, in table order."""
    lowered = text.lower()
    found: List[str] = []

    for neighborhood in NEIGHBORHOODS:
        if neighborhood.lower() in lowered:
            found.append(neighborhood)

    for alias, neighborhood in NEIGHBORHOOD_ALIASES.items():
        if alias in lowered and neighborhood not in found:
            found.append(neighborhood)

    return found


def check_alerts(text: str) -> Tuple[bool, List[str]]:
    """Find alert keywords in text."""
    lowered = text.lower()
    keywords = [keyword for keyword in ALERT_KEYWORDS if keyword in lowered]
    return bool(keywords), keywords
