import logging
import re
import string

import trafilatura

logger = logging.getLogger(__name__)

# ASCII punctuation plus the Arabic comma and question mark
STRIPPED_PUNCTUATION = string.punctuation + "،؟"
# Whitespace as ECMAScript \s defines it (BOM and NEL included, U+001C-U+001F
# kept), not Python's \s, so stored fingerprints keep their positions.
STRIPPED_WHITESPACE = ("\t\n\v\f\r \u0085\u00a0\u1680\u2000-\u200a"
                       "\u2028\u2029\u202f\u205f\u3000\ufeff")
_STRIP_RE = re.compile("[" + STRIPPED_WHITESPACE + re.escape(STRIPPED_PUNCTUATION) + "]")


def read_document(path: str) -> str:
    # newline='' keeps \r\n intact so digests match the bytes on disk
    with open(path, 'r', encoding='utf-8', newline='') as f:
        text = f.read()
    logger.debug("read %d chars from %s", len(text), path)
    return text


def extract_article(html_str: str) -> str:
    res = trafilatura.extract(html_str, include_comments=False, include_tables=False)
    return res or ""


def sanitize(text: str) -> str:
    """
    Drop whitespace and punctuation, then lowercase. Every other character is
    kept in its original order.
    """
    return _STRIP_RE.sub('', text).lower()
