"""Markdown rendering for user supplied text (descriptions, attached files)."""

import html
import re
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup

SAFE_SCHEMES = ("http", "https", "mailto", "ftp")

# Browsers ignore ASCII control characters and whitespace inside a scheme
IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def is_safe_url(url: str) -> bool:
    """Relative URLs and a few well known schemes are allowed.

    Character references are decoded first, attribute values are emitted
    with their entities intact and "javascript&#58;" is still a scheme.
    """
    decoded = IGNORED_URL_CHARS.sub("", html.unescape(url))
    scheme, separator, _ = decoded.partition(":")
    if not separator or "/" in scheme:
        return True
    return scheme.lower() in SAFE_SCHEMES


class UnsafeLinkTreeprocessor(Treeprocessor):
    """Drop href/src attributes pointing at scripts or other unsafe schemes.

    Runs after the unescape treeprocessor so backslash escapes are resolved.
    """

    def run(self, root: Element) -> None:
        for element in root.iter():
            for attribute in ("href", "src"):
                value = element.get(attribute)
                if value is not None and not is_safe_url(value):
                    del element.attrib[attribute]


class SafeModeExtension(Extension):
    """Escape raw HTML instead of passing it through."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        md.treeprocessors.register(UnsafeLinkTreeprocessor(md), "unsafe_links", -1)


def render_markdown(text: str | None) -> Markup:
    """Render markdown to HTML safe to embed in a template."""
    if not text:
        return Markup("")

    md = markdown.Markdown(extensions=["fenced_code", "tables", "nl2br", SafeModeExtension()])
    return Markup(md.convert(text))
