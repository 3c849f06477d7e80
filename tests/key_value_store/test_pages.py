"""
HTML fragment testing
"""

from models.entry import Entry
from utils import pages


def test_entry_table_escapes_cells():
    html = pages.entry_table([Entry(id=7, key="<k>", value='"v"')])

    assert '<td>7</td><td>&lt;k&gt;</td><td>"v"</td>' in html


def test_headings_keep_quotes_and_escape_markup():
    html = pages.message_page('No entries found containing "<i>x</i>".')

    assert '<h2>No entries found containing "&lt;i&gt;x&lt;/i&gt;".</h2>' in html
    assert "&quot;" not in html


def test_table_page_separator():
    assert "</table>\n<br>\n" in pages.table_page("Search Results", [])
    assert "</table>\n<hr>\n" in pages.table_page("Deleted", [], separator="<hr>")


def test_confirm_script_cannot_break_out_of_script_element():
    script = pages.confirm_create_script("</script><script>alert(1)</script>", "x")

    assert script.count("</script>") == 1
    assert script.rstrip().endswith("</script>")


def test_confirm_script_quotes_are_json_encoded():
    script = pages.confirm_create_script("it's", 'say "hi"')

    assert "confirm(\"No record found for key: 'it's'." in script
    assert "/create?key=it%27s&value=say+%22hi%22" in script


def test_list_page_has_only_home_link():
    html = pages.table_page("All Key-Value Pairs", [], level=1, include_list=False)

    assert "<h1>All Key-Value Pairs</h1>" in html
    assert 'href="/list"' not in html
    assert 'href="/"' in html
