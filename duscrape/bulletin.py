"""
Bulletin scraper: upper-division COMP courses without prerequisites.

The DU bulletin lists every course in a <div class="courseblock">:

    <p class="courseblocktitle"><strong>COMP 3705 Compilers (4 Credits)</strong></p>
    <p class="courseblockdesc">... Prerequisite: <a href="...">COMP 2355</a> ...</p>

A course is kept when its number is >= 3000 and its description contains no
link. Prerequisites are always written as links to other courses, so "no link"
is used as "no prerequisites". This is a heuristic, not a real prerequisite
parse.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

import requests
from bs4 import Tag

from duscrape import console
from duscrape.config import ScrapeConfig
from duscrape.fetch import fetch_html
from duscrape.markup import has_match, parse_html, select_all, text_of
from duscrape.model import CourseRecord
from duscrape.storage import write_json

BULLETIN_URL = "https://bulletin.du.edu/undergraduate/coursedescriptions/comp/"
OUTPUT_FILENAME = "bulletin.json"

MIN_COURSE_NUMBER = 3000

# "COMP 3001 Course Title (4 Credits)"; the credits suffix is optional
TITLE_RE = re.compile(r"^COMP\s*(\d{4})\s+(.+?)(\s+\(.*Credits\))?$", re.IGNORECASE)


def parse_course_title(text: str) -> Optional[Tuple[int, str]]:
    """
    Split a bold course title into (number, title).

    Returns None for titles that do not follow the COMP NNNN format.
    """
    match = TITLE_RE.match(text.strip())
    if not match:
        return None
    return int(match.group(1)), match.group(2).strip()


def has_prerequisite_link(block: Tag) -> bool:
    return has_match(block, "p.courseblockdesc a")


def extract_courses(html: str, min_number: int = MIN_COURSE_NUMBER) -> List[CourseRecord]:
    """
    Return the qualifying courses of a bulletin page, in document order.
    """
    soup = parse_html(html)
    courses: List[CourseRecord] = []

    for block in select_all(soup, ".courseblock"):
        strong_text = text_of(block, "p.courseblocktitle strong")
        if not strong_text:
            continue

        parsed = parse_course_title(strong_text)
        if parsed is None:
            continue

        number, title = parsed
        if number < min_number:
            continue

        if has_prerequisite_link(block):
            continue

        courses.append(CourseRecord(course=f"COMP-{number:04d}", title=title))

    return courses


def scrape_bulletin(config: ScrapeConfig, session: Optional[requests.Session] = None) -> Path:
    """
    Fetch the COMP course list and write results/bulletin.json.
    """
    html = fetch_html(BULLETIN_URL, timeout=config.timeout, session=session)
    courses = extract_courses(html)

    out = write_json({"courses": [c.to_dict() for c in courses]}, config.output_path(OUTPUT_FILENAME))
    console.info(f"Bulletin scraping complete ({len(courses)} courses). Results saved to {out}")
    return out
