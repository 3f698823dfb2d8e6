"""
Synthetic client addresses for local development.

Behind localhost every visitor shares one address, which collapses visitor
identity. The dev analytics endpoint uses this to hand out a stable fake
address per browser session plus plausible geo data.
"""

import hashlib
import random
from typing import Dict

MOCK_LOCATIONS = [
    {"country": "United States", "code": "US", "city": "New York"},
    {"country": "United Kingdom", "code": "GB", "city": "London"},
    {"country": "Germany", "code": "DE", "city": "Berlin"},
    {"country": "France", "code": "FR", "city": "Paris"},
    {"country": "Japan", "code": "JP", "city": "Tokyo"},
    {"country": "Canada", "code": "CA", "city": "Toronto"},
    {"country": "Australia", "code": "AU", "city": "Sydney"},
    {"country": "Netherlands", "code": "NL", "city": "Amsterdam"},
    {"country": "Singapore", "code": "SG", "city": "Singapore"},
    {"country": "Brazil", "code": "BR", "city": "São Paulo"},
]

US_PREFIXES = [(8, 8), (208, 67), (173, 252), (199, 16)]

REGIONS = ("random", "us", "eu", "asia")


def _md5(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


class IPGenerator:
    def __init__(self, rng: random.Random = None):
        # session id -> address; process-local, never persisted or evicted
        self.session_ips: Dict[str, str] = {}
        self._rng = rng or random.Random()

    def generate_session_ip(self, session_id: str) -> str:
        """Same session id always yields the same address."""
        if session_id in self.session_ips:
            return self.session_ips[session_id]

        digest = _md5(session_id)
        octets = (
            int(digest[0:2], 16) % 223 + 1,  # 1-223, skips multicast/reserved
            int(digest[2:4], 16) % 255,
            int(digest[4:6], 16) % 255,
            int(digest[6:8], 16) % 254 + 1,  # never .0 or .255
        )
        ip = ".".join(str(o) for o in octets)
        self.session_ips[session_id] = ip
        return ip

    def generate_realistic_ip(self, region: str = "random") -> str:
        r = self._rng
        host = f"{r.randrange(255)}.{r.randrange(254) + 1}"

        if region == "us":
            first, second = r.choice(US_PREFIXES)
            return f"{first}.{second}.{host}"
        if region == "eu":
            return f"{r.randrange(50) + 80}.{r.randrange(255)}.{host}"
        if region == "asia":
            return f"{r.randrange(50) + 110}.{r.randrange(255)}.{host}"
        return f"{r.randrange(223) + 1}.{r.randrange(255)}.{host}"

    def get_ip_info(self, ip: str) -> dict:
        """Deterministic mock geolocation for an address."""
        index = int(_md5(ip)[0:2], 16) % len(MOCK_LOCATIONS)
        return dict(MOCK_LOCATIONS[index])


ip_generator = IPGenerator()
