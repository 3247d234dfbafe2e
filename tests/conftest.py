"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O, mocked dependencies
- integration/ Component boundaries, real I/O to temp locations

Modules mark themselves with pytest.mark.unit or pytest.mark.integration.

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
    pytest -m unit                 # Same as tests/unit
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")


VENDOR_HEADER = (
    "Name,Source,TF,CF,Majestic BL,Majestic RD,Majestic Topics,Moz DA,Moz PA,"
    "Age,SZ Score,SZ Drops,SZ Active History,Price,Expires"
)


@pytest.fixture
def vendor_csv_text():
    """
    SpamZilla-style export.

    domain.com     -> 85, gold
    cleanpets.net  -> 70, silver (risk 12 misses gold)
    spammy.info    -> 8, avoid
    plus one short row and one row with a bad name (both dropped)
    """
    return "\n".join([
        VENDOR_HEADER,
        'domain.com,GoDaddy,40,35,1200,150,"Business/Marketing",50,45,6,8,1,5,$120,2024-02-01',
        "cleanpets.net,NameJet,25,30,400,60,Recreation/Pets,30,28,8,12,0,6,$80,2024-02-02",
        "spammy.info,Dynadot,3,40,5000,20,Adult,5,10,1,60,5,1,$10,2024-02-03",
        "bad row",
        "not_a_domain,x,1,2,3,4,5,6,7,8,9,10,11,12,13",
    ])


@pytest.fixture
def sample_domains():
    """Pasted free text with a URL, a duplicate and a junk line."""
    return "example.com\nhttps://www.Foo.org/path\nnot a domain\n\nbar.net, baz.io\nexample.com\n"
