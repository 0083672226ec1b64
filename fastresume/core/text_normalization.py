"""
Text normalization utilities shared by the résumé and JD pipelines.

Everything downstream compares text in one canonical form:
- normalize_text(): lowercase, spelling unification, phrase synonyms
- tokenize(): canonical tokens with stopwords removed
- extract_terms(): top unigram/bigram/trigram terms of a corpus
- stem(): light suffix stripping used only for overlap scoring
"""

import logging
import re
from collections import Counter
from typing import Iterable, List, Optional

from fastresume.core.lexicons import SPELLING_TABLE, STOPWORDS, SYNONYM_TABLE
from fastresume.core.schemas import Term

logger = logging.getLogger(__name__)


# ============================================================================
# Compiled canonicalization tables
# ============================================================================

_SPELLING = dict(SPELLING_TABLE)
SPELLING_RE = re.compile(r"\b(" + "|".join(re.escape(k) for k in _SPELLING) + r")\b")

_SYNONYMS = dict(SYNONYM_TABLE)
# ASCII-only boundaries so CJK phrases match inside unsegmented text
SYNONYM_RE = re.compile(
    r"(?<![a-z0-9])("
    + "|".join(re.escape(k) for k in sorted(_SYNONYMS, key=len, reverse=True))
    + r")(?![a-z0-9])"
)

SLASH_RE = re.compile(r"\s*/\s*")
WS_RE = re.compile(r"\s+")
TOKEN_RE = re.compile(r"[a-z0-9+.#-]{3,}|[㐀-䶿一-鿿]{2,}")

CAMEL_RE = re.compile(r"(?<=[a-z]{2})(?=[A-Z][a-z])")
CLOSER_CAMEL_RE = re.compile(r"([)\]/])([A-Z])")


# ============================================================================
# Email detection
# ============================================================================

# Addresses are read from a bounded window around each "@"
EMAIL_WINDOW = 64
EMAIL_USER_RE = re.compile(r"([A-Za-z0-9._%+()\-]+)\s*$")
EMAIL_DOMAIN_RE = re.compile(r"\s*([A-Za-z0-9\-]+(?:\s*\.\s*[A-Za-z0-9\-]+)*)\s*\.\s*([A-Za-z]{2,})(?![A-Za-z])")


def extract_email_flexible(text: str) -> Optional[str]:
    """
    Extract email from text, handling accidental spaces around @ and the final dot.

    Examples:
    - "annaford0719@gmail.com" → "annaford0719@gmail.com"
    - "annaford0719 @ gmail . com" → "annaford0719@gmail.com"

    Rejects phone+email concatenations:
    - "(856)366-5713k.o.harbaugh@gmail.com" → None (user part looks like phone)
    """
    if not text or "@" not in text:
        return None

    def _user_looks_like_phone(user: str) -> bool:
        digit_count = sum(1 for c in user if c.isdigit())
        has_parens = "(" in user or ")" in user
        has_plus = user.startswith("+")
        return has_parens or has_plus or (digit_count >= 7 and "-" in user)

    at = text.find("@")
    while at != -1:
        user_m = EMAIL_USER_RE.search(text[max(0, at - EMAIL_WINDOW):at])
        domain_m = EMAIL_DOMAIN_RE.match(text[at + 1:at + 1 + EMAIL_WINDOW])
        if user_m and domain_m:
            user = user_m.group(1)
            domain = WS_RE.sub("", domain_m.group(1))
            if not _user_looks_like_phone(user):
                return f"{user}@{domain}.{domain_m.group(2)}"
        at = text.find("@", at + 1)
    return None


# ============================================================================
# Canonical form
# ============================================================================

def normalize_text(text: Optional[str]) -> str:
    """
    Canonicalize text for comparison.

    Examples:
        "Customer Service & Sales" -> "customerservice and sales"
        "Front Desk/Reception centre" -> "reception reception center"
        "Handle e-mail enquiries" -> "handle email inquiries"
    """
    if not text:
        return ""
    s = text.lower()
    s = s.replace("&", " and ")
    s = SLASH_RE.sub(" ", s)
    s = WS_RE.sub(" ", s).strip()
    s = SPELLING_RE.sub(lambda m: _SPELLING[m.group(1)], s)
    s = SYNONYM_RE.sub(lambda m: _SYNONYMS[m.group(1)], s)
    return s


def tokenize(text: Optional[str]) -> List[str]:
    """Canonical tokens of `text`, in order, stopwords removed."""
    tokens = []
    for raw in TOKEN_RE.findall(normalize_text(text)):
        tok = raw.strip(".-")
        if len(tok) <= 1 or tok in STOPWORDS:
            continue
        if not any(c.isalnum() for c in tok):
            continue
        tokens.append(tok)
    return tokens


def ngrams(tokens: List[str], n: int) -> List[str]:
    """Contiguous n-grams over already-filtered tokens."""
    if n <= 0 or len(tokens) < n:
        return []
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def _top(items: Iterable[str], limit: int) -> List[tuple]:
    # most_common() keeps first-seen order among equal counts
    return Counter(items).most_common(limit) if limit > 0 else []


def extract_terms(
    text: Optional[str],
    limit_words: int = 18,
    limit_bigrams: int = 10,
    limit_trigrams: int = 6,
) -> List[Term]:
    """
    Most frequent terms of a single corpus.

    Trigrams come first, then bigrams, then single words; each table is
    ranked independently and the merged list is deduplicated.
    """
    tokens = tokenize(text)
    if not tokens:
        return []

    terms: List[Term] = []
    seen = set()
    for n, limit in ((3, limit_trigrams), (2, limit_bigrams), (1, limit_words)):
        for gram, freq in _top(ngrams(tokens, n), limit):
            if gram in seen:
                continue
            seen.add(gram)
            terms.append(Term(text=gram, frequency=freq, n=n))

    logger.debug(f"extract_terms: {len(tokens)} tokens -> {len(terms)} terms")
    return terms


def top_terms(
    text: Optional[str],
    limit_words: int = 18,
    limit_bigrams: int = 10,
    limit_trigrams: int = 6,
) -> List[str]:
    return [t.text for t in extract_terms(text, limit_words, limit_bigrams, limit_trigrams)]


# ============================================================================
# Stemming
# ============================================================================

def stem(word: str) -> str:
    """
    Strip one common English suffix from words longer than 4 chars.

    Examples:
        "handling" -> "handl", "processed" -> "process", "orders" -> "order"
    """
    if len(word) <= 4:
        return word
    if word.endswith("ing"):
        return word[:-3]
    if word.endswith("ed") or word.endswith("es"):
        return word[:-2]
    if word.endswith("s"):
        return word[:-1]
    return word


def stem_tokens(text: Optional[str]) -> List[str]:
    return [stem(t) for t in tokenize(text)]


# ============================================================================
# Layout repair
# ============================================================================

def split_camel(text: str) -> str:
    """
    Insert spaces at run-on word boundaries left by copy/paste.

    Examples:
        "Marketing AssistantBright Stores" -> "Marketing Assistant Bright Stores"
        "Barista (Casual)Cafe Uno" -> "Barista (Casual) Cafe Uno"
        "Intern/Bright Stores" -> "Intern/ Bright Stores"

    Short prefixes such as "McDonald" or "iPhone" are left alone.
    """
    if not text:
        return text
    s = CAMEL_RE.sub(" ", text)
    s = CLOSER_CAMEL_RE.sub(r"\1 \2", s)
    return s
