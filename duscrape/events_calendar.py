"""
Calendar scraper: all events of one year from the DU events calendar.

The listing at https://www.du.edu/calendar accepts start_date/end_date query
parameters, so the year is walked one month at a time. Every event card links
to a detail page holding the full description; that page is fetched before the
card is recorded, and the result file is written only once every month has
been processed.

Failures stay local:
- a month whose listing cannot be fetched is reported and skipped
- an event whose detail page cannot be fetched is kept without description
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import urlencode

import requests
from bs4 import Tag
from rich.progress import BarColumn, Progress, TextColumn

from duscrape import console
from duscrape.config import ScrapeConfig
from duscrape.fetch import FetchError, fetch_html
from duscrape.markup import attr_of, parse_html, select_all, select_first, text_of
from duscrape.model import CalendarEvent, MonthWindow
from duscrape.storage import write_json

SITE_ORIGIN = "https://www.du.edu"
CALENDAR_URL = f"{SITE_ORIGIN}/calendar"
LISTING_ANCHOR = "events-listing-date-filter-anchor"
OUTPUT_FILENAME = "calendar_events.json"

CARD_SELECTOR = "#events-listing .events-listing__item"
DESCRIPTION_SELECTOR = 'div.description[itemprop="description"]'


@dataclass
class EventCard:
    """
    What a listing card tells us before the detail page is fetched.
    """

    title: str
    date: str
    time: str
    url: Optional[str]


# ---------------------------------------------------------------------------
# Month windows
# ---------------------------------------------------------------------------


def build_month_windows(year: int) -> List[MonthWindow]:
    """
    Return twelve [first of month, first of next month) windows for year.
    """
    windows: List[MonthWindow] = []
    for month in range(1, 13):
        start = f"{year:04d}-{month:02d}-01"
        if month == 12:
            end = f"{year + 1:04d}-01-01"
        else:
            end = f"{year:04d}-{month + 1:02d}-01"
        windows.append(MonthWindow(start=start, end=end))
    return windows


def listing_url(window: MonthWindow) -> str:
    query = urlencode({"search": "", "start_date": window.start, "end_date": window.end})
    return f"{CALENDAR_URL}?{query}#{LISTING_ANCHOR}"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def resolve_event_url(href: Optional[str]) -> Optional[str]:
    """
    Turn a card link into an absolute URL on the calendar site.
    """
    if not href:
        return None
    href = href.strip()
    if not href:
        return None
    if href.startswith("http"):
        return href
    if not href.startswith("/"):
        href = "/" + href
    return SITE_ORIGIN + href


def _parse_card(item: Tag, link: Tag) -> EventCard:
    date = ""
    first_p = select_first(link, "p")
    if first_p is not None:
        date = text_of(first_p)

    return EventCard(
        title=text_of(link, "h3"),
        date=date,
        # the time paragraph is the one carrying the clock icon
        time=text_of(link, "p:has(span.icon-du-clock)"),
        url=resolve_event_url(attr_of(item, "a.event-card", "href")),
    )


def parse_event_cards(html: str) -> List[EventCard]:
    """
    Return the event cards of one listing page, in page order.

    Listing items without an event-card link are ignored.
    """
    soup = parse_html(html)
    cards: List[EventCard] = []
    for item in select_all(soup, CARD_SELECTOR):
        link = select_first(item, "a.event-card")
        if link is None:
            continue
        cards.append(_parse_card(item, link))
    return cards


def extract_description(html: str) -> str:
    return text_of(parse_html(html), DESCRIPTION_SELECTOR)


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------


def fetch_event_description(
    url: str,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Fetch an event detail page and return its description ("" on failure).
    """
    try:
        html = fetch_html(url, timeout=timeout, session=session)
        return extract_description(html)
    except FetchError as exc:
        console.warn(f"Error fetching details from {url}: {exc.reason}")
    except Exception as exc:  # a broken detail page only loses its description
        console.warn(f"Error reading details from {url}: {exc!r}")
    return ""


def _collect_window(
    window: MonthWindow,
    config: ScrapeConfig,
    session: Optional[requests.Session],
) -> List[CalendarEvent]:
    html = fetch_html(listing_url(window), timeout=config.timeout, session=session)

    events: List[CalendarEvent] = []
    for card in parse_event_cards(html):
        description = ""
        if card.url:
            description = fetch_event_description(card.url, timeout=config.timeout, session=session)
        events.append(
            CalendarEvent(
                title=card.title,
                date=card.date,
                time=card.time or None,
                description=description or None,
            )
        )
    return events


def collect_calendar_events(
    config: ScrapeConfig,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[CalendarEvent]:
    """
    Walk all month windows of config.year and return every event found.

    Windows are fetched one after another with config.delay_seconds between
    them. A window that fails to load is skipped.
    """
    windows = build_month_windows(config.year)
    all_events: List[CalendarEvent] = []

    def run_window(window: MonthWindow) -> None:
        try:
            all_events.extend(_collect_window(window, config, session))
        except FetchError as exc:
            console.error(f"Error fetching events for month starting {window.start}: {exc.reason}")
            return
        except Exception as exc:  # one bad month must not lose the others
            console.error(f"Error reading events for month starting {window.start}: {exc!r}")
            return
        sleep(config.delay_seconds)

    if config.show_progress:
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console.console,
        )
        with progress:
            task_id = progress.add_task(f"Calendar {config.year}", total=len(windows))
            for window in windows:
                progress.update(task_id, description=f"Calendar {window.start}")
                run_window(window)
                progress.advance(task_id)
    else:
        for window in windows:
            run_window(window)

    return all_events


def scrape_calendar_events(
    config: ScrapeConfig,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Path:
    """
    Collect the year's events and write results/calendar_events.json.
    """
    events = collect_calendar_events(config, session=session, sleep=sleep)

    out = write_json({"events": [e.to_dict() for e in events]}, config.output_path(OUTPUT_FILENAME))
    console.info(f"Calendar events scraping complete ({len(events)} events). Results saved to {out}")
    return out
