"""
HTML fragments returned by the key-value routes
"""

import json
from html import escape
from typing import Iterable
from urllib.parse import urlencode

from models.entry import Entry

HOME_LINK = '<a href="/">Back to Home</a>'
LIST_LINK = '<a href="/list">View All Entries</a>'


def text(value: str) -> str:
    """Escape user text placed in element content (never in attributes)"""
    return escape(value, quote=False)


def nav_links(include_list: bool = True) -> str:
    """Footer navigation"""
    if include_list:
        return f"{HOME_LINK} |\n{LIST_LINK}"
    return HOME_LINK


def entry_table(entries: Iterable[Entry]) -> str:
    """Render entries as an ID/Key/Value table"""
    rows = "".join(
        f"<tr><td>{entry.id}</td><td>{text(entry.key)}</td><td>{text(entry.value)}</td></tr>\n"
        for entry in entries
    )
    return (
        '<table border="1" cellpadding="5" cellspacing="0">\n'
        "<tr><th>ID</th><th>Key</th><th>Value</th></tr>\n"
        f"{rows}"
        "</table>\n"
    )


def key_value_page(title: str, key: str, value: str, value_label: str = "Value", note: str = "") -> str:
    """Confirmation page showing a single key/value pair"""
    note_html = f"<p>{text(note)}</p>\n" if note else ""
    return (
        f"<h2>{text(title)}</h2>\n"
        f"<p><strong>Key:</strong> {text(key)}</p>\n"
        f"<p><strong>{value_label}:</strong> {text(value)}</p>\n"
        f"{note_html}"
        "<hr>\n"
        f"{nav_links()}\n"
    )


def table_page(
    heading: str,
    entries: Iterable[Entry],
    level: int = 2,
    include_list: bool = True,
    separator: str = "<br>"
) -> str:
    return (
        f"<h{level}>{text(heading)}</h{level}>\n"
        f"{entry_table(entries)}"
        f"{separator}\n"
        f"{nav_links(include_list)}\n"
    )


def message_page(message: str) -> str:
    """Heading plus a link home, used for empty results and input errors"""
    return f"<h2>{text(message)}</h2>\n{HOME_LINK}\n"


def confirm_create_script(key: str, value: str) -> str:
    """
    Client-side prompt offering to create a missing key.

    Accepting navigates to /create with the same key and value; declining
    returns home. No write happens until the follow-up request arrives.
    """
    prompt = f"No record found for key: '{key}'. Would you like to create a new key-value pair?"
    create_url = "/create?" + urlencode({"key": key, "value": value})
    # "</" must not appear inside the script element
    prompt_js = json.dumps(prompt).replace("</", "<\\/")
    url_js = json.dumps(create_url).replace("</", "<\\/")
    return (
        "<script>\n"
        f"  if (confirm({prompt_js})) {{\n"
        f"    window.location.href = {url_js};\n"
        "  } else {\n"
        '    window.location.href = "/";\n'
        "  }\n"
        "</script>\n"
    )
