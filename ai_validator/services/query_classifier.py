"""
Services - Query Classifier

Rule-based detection of greetings, small talk and typos so they can skip
validation. Total: never raises.
"""

import re
from typing import List, Optional

from ai_validator.schemas import QueryClassificationResult


GREETINGS = {
    "hi", "hello", "hey", "hiya", "howdy", "yo", "greetings", "sup",
    "good morning", "good afternoon", "good evening", "good day",
    "hi there", "hello there", "hey there",
}

# Words that may follow a greeting without turning it into a request
GREETING_FILLER = {
    "there", "all", "everyone", "everybody", "team", "folks", "friend",
    "again", "bot", "assistant",
}

# Vowel-less tokens that are real words in technical queries
ACRONYMS = {
    "html", "http", "https", "grpc", "sftp", "smtp", "xml", "css", "sql",
    "ssh", "ssl", "tls", "dns", "cdn", "jwt", "pdf", "crm", "npm", "rpc",
}

SMALL_TALK_PATTERNS = [
    r"^(thanks|thank you|thx|ty|cheers)\b",
    r"^(bye|goodbye|see you|see ya|later|good night)\b",
    r"^(ok|okay|k|cool|great|nice|awesome|got it|sounds good|perfect)$",
    r"^how are (you|u)\b",
    r"^(what'?s up|how'?s it going)\b",
    r"^(lol|haha+|hmm+)$",
]

CLARIFICATION_PATTERNS = [
    r"\bwhat do you mean\b",
    r"\bclarify\b",
    r"\b(can|could) you (explain|elaborate) (that|this|more)\b",
    r"\bi don'?t (understand|get it)\b",
    r"^(what|huh|sorry)\?*$",
]

COMMAND_VERBS = {
    "show", "list", "explain", "create", "generate", "write", "find",
    "give", "tell", "describe", "summarize", "compare", "fix", "add",
    "remove", "delete", "update", "run", "build", "make", "refactor",
}

QUESTION_WORDS = {
    "what", "why", "how", "when", "where", "which", "who", "whom",
    "whose", "is", "are", "can", "could", "does", "do", "should", "would", "will",
}

SKIP_TYPES = {"greeting", "typo", "small_talk"}


class QueryClassifier:
    """Classifies queries that do not need answer validation."""

    def classify(self, query: str) -> QueryClassificationResult:
        """
        Classify a user query.

        Args:
            query: Raw user query

        Returns:
            QueryClassificationResult; skip_validation only for
            greeting, typo and small_talk
        """
        raw = re.sub(r"\s+", " ", (query or "").strip())
        normalized = raw.lower()
        bare = re.sub(r"[^\w\s']", "", normalized).strip()

        query_type, confidence = self._detect(raw, normalized, bare)
        return QueryClassificationResult(
            type=query_type,
            confidence=confidence,
            skip_validation=query_type in SKIP_TYPES,
        )

    def _detect(self, raw: str, normalized: str, bare: str):
        if not bare or self._looks_like_typo(raw, bare):
            return "typo", 0.9

        if bare in GREETINGS:
            return "greeting", 0.95
        words = bare.split()
        rest = self._strip_greeting(words)
        if rest is not None:
            if self._is_pleasantry(rest):
                return "greeting", 0.85
            # Greeting followed by a real request: classify the request
            words = rest
            bare = " ".join(rest)

        if any(re.search(p, bare) for p in SMALL_TALK_PATTERNS):
            return "small_talk", 0.85

        if any(re.search(p, normalized) for p in CLARIFICATION_PATTERNS):
            return "clarification", 0.8

        first_word = words[0]
        if first_word in COMMAND_VERBS and not normalized.endswith("?"):
            return "command", 0.75

        if normalized.endswith("?") or first_word in QUESTION_WORDS:
            return "question", 0.9

        return "question", 0.6

    def _strip_greeting(self, words: List[str]) -> Optional[List[str]]:
        """Words after a leading greeting, or None when there is no greeting."""
        if " ".join(words[:2]) in GREETINGS:
            return words[2:]
        if words[0] in GREETINGS:
            return words[1:]
        return None

    def _is_pleasantry(self, words: List[str]) -> bool:
        if all(word in GREETING_FILLER for word in words):
            return True
        rest = " ".join(words)
        return rest in GREETINGS or any(re.search(p, rest) for p in SMALL_TALK_PATTERNS)

    def _looks_like_typo(self, raw: str, bare: str) -> bool:
        """Single short token, or lowercase letters with no vowels at all."""
        words = bare.split()
        if len(words) != 1:
            return False
        if len(bare) < 2:
            return True
        token = re.sub(r"[^\w]", "", raw)
        if token.isupper() or bare in ACRONYMS:
            return False
        letters = re.sub(r"[^a-z]", "", bare)
        return len(letters) >= 4 and not re.search(r"[aeiouy]", letters)
