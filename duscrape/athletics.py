"""
Athletics scraper: the event at the front of the homepage scoreboard carousel.

Only one event is captured. The selectors are kept in FIELD_LOCATORS so that a
change of the site layout means editing one table entry. A locator that
matches nothing gives an empty field, not an error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import requests

from duscrape import console
from duscrape.config import ScrapeConfig
from duscrape.fetch import fetch_html
from duscrape.markup import parse_html, text_of
from duscrape.model import AthleticEvent
from duscrape.storage import write_json

ATHLETICS_URL = "https://denverpioneers.com/index.aspx"
OUTPUT_FILENAME = "athletic_events.json"

# field name -> CSS selector
FIELD_LOCATORS: Mapping[str, str] = {
    "duTeam": ".c-scoreboard__team--away .c-scoreboard__sport",
    "opponent": ".c-scoreboard__team--home .c-scoreboard__team-name",
    # Positional: 10th slide of the scoreboard carousel.
    "date": (
        "#main-content > section:nth-child(1) > scoreboard-component > div"
        " > div.c-scoreboard__list.flex-item-1.slick-initialized.slick-slider"
        " > div > div > div:nth-child(10) > div.c-scoreboard__datetime.flex > div"
    ),
}


def extract_athletic_event(html: str, locators: Mapping[str, str] = FIELD_LOCATORS) -> AthleticEvent:
    soup = parse_html(html)

    def field(name: str) -> str:
        selector = locators.get(name)
        if not selector:
            return ""
        return text_of(soup, selector)

    return AthleticEvent(du_team=field("duTeam"), opponent=field("opponent"), date=field("date"))


def scrape_athletic_events(config: ScrapeConfig, session: Optional[requests.Session] = None) -> Path:
    """
    Fetch the athletics homepage and write results/athletic_events.json.
    """
    html = fetch_html(ATHLETICS_URL, timeout=config.timeout, session=session)
    event = extract_athletic_event(html)

    out = write_json({"events": [event.to_dict()]}, config.output_path(OUTPUT_FILENAME))
    console.info(f"Athletic events data saved to {out}")
    return out
