"""
Template Splitter

Splits a page template around the injection marker.
"""
from typing import Tuple

APP_HTML_MARKER = "<!--app-html-->"


def split_template(template: str, marker: str = APP_HTML_MARKER) -> Tuple[str, str]:
    """Split ``template`` into ``(head, tail)`` around the first ``marker``.

    A template without the marker yields ``(template, "")`` so rendered
    markup ends up appended after the whole template.
    """
    head, _, tail = template.partition(marker)
    return head, tail
