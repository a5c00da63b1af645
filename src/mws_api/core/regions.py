"""Region directory: area code to marketplace id and MWS host.

Hosts are part of the signed canonical string, so entries must match the
remote service byte for byte.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Region:
    """Marketplace id and network host for one area."""

    merchant_id: str
    host: str


REGIONS: Dict[str, Region] = {
    "BR": Region("A2Q3Y263D00KWC", "mws.amazonservices.com"),
    "CA": Region("A2EUQ1WTGCTBG2", "mws.amazonservices.ca"),
    "MX": Region("A1AM78C64UM0Y8", "mws.amazonservices.com.mx"),
    "AE": Region("A2VIGQ35RCS4UG", "mws.amazonservices.ae"),
    "DE": Region("A1PA6795UKMFR9", "mws-eu.amazonservices.com"),
    "ES": Region("A1RKKUPIHCS9HS", "mws-eu.amazonservices.com"),
    "FR": Region("A13V1IB3VIYZZH", "mws-eu.amazonservices.com"),
    "GB": Region("A1F83G8C2ARO7P", "mws-eu.amazonservices.com"),
    "IN": Region("A21TJRUUN4KGV", "mws.amazonservices.in"),
    "IT": Region("APJ6JRA9NG5V4", "mws-eu.amazonservices.com"),
    "TR": Region("A33AVAJ2PDY3EV", "mws-eu.amazonservices.com"),
    "AU": Region("A39IBJ37TRP1C6", "mws.amazonservices.com.au"),
    "JP": Region("A1VC38T7YXB528", "mws.amazonservices.jp"),
    "CN": Region("AAHKV2X7AFYLW", "mws.amazonservices.com.cn"),
    "US": Region("ATVPDKIKX0DER", "mws.amazonservices.com"),
}


def lookup(code: str) -> Region:
    """Return the region for an already validated area code."""
    return REGIONS[code]
