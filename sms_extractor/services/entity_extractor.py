"""
Payee, payer and merchant extraction for transaction SMS
"""

import re
from typing import Iterable, List, Optional, Pattern

import spacy
import structlog

logger = structlog.get_logger()

# Capitalized words such as "AMIT KUMAR" or "Zomato"; lower-case words end the name
NAME = r"([A-Z][A-Za-z&'\-]*(?:[ \t]+[A-Z][A-Za-z&'\-]*)*)"

MIN_ENTITY_LENGTH = 3
MAX_ENTITY_LENGTH = 30

NER_LABELS = ('ORG', 'PERSON', 'PRODUCT')


def load_ner_model(model_name: str = "en_core_web_sm"):
    """Load a spaCy pipeline for the optional NER stage, or None if unavailable"""
    try:
        return spacy.load(model_name)
    except OSError as e:
        logger.warning("ner_model_unavailable", model=model_name, error=str(e))
        return None


class EntityExtractor:
    """
    Recovers who the money went to or came from.

    Stages are tried in order and the first valid capture wins:
    honorific names after to/from, labeled fields and to/from markers,
    UPI handles, known merchants, then spaCy entities when a model is given.
    """

    def __init__(self, merchants: Iterable[str], nlp=None):
        self.merchants = tuple(merchants)
        self.nlp = nlp
        self.patterns = self._compile_patterns()
        self.merchant_patterns = [
            (merchant, re.compile(r'\b' + re.escape(merchant), re.IGNORECASE))
            for merchant in self.merchants
        ]

    def _compile_patterns(self) -> List[List[Pattern]]:
        honorific = r'\b(?i:to|from)\s+(?i:mr|mrs|ms|dr|shri|smt|shrimati)\.?\s+' + NAME
        markers = [
            r'\b(?i:payee|payer|beneficiary|merchant)[\s:]+' + NAME,
            r'\b(?i:to|from)\s+' + NAME,
        ]
        upi = r'([a-z0-9._\-]+@[a-z]+)'

        return [
            [re.compile(honorific)],
            [re.compile(p) for p in markers],
            [re.compile(upi, re.IGNORECASE)],
        ]

    @staticmethod
    def _clean(candidate: str) -> Optional[str]:
        candidate = re.sub(r'\s+', ' ', candidate).strip().rstrip('.,;:-').strip()
        if MIN_ENTITY_LENGTH <= len(candidate) <= MAX_ENTITY_LENGTH:
            return candidate
        return None

    def _match_stage(self, stage: List[Pattern], text: str) -> Optional[str]:
        for pattern in stage:
            # A rejected capture ("to A/c") should not hide a later valid one
            for match in pattern.finditer(text):
                entity = self._clean(match.group(1))
                if entity:
                    return entity
        return None

    def _match_merchant(self, text: str) -> Optional[str]:
        for merchant, pattern in self.merchant_patterns:
            if pattern.search(text):
                return merchant
        return None

    def _match_ner(self, text: str) -> Optional[str]:
        doc = self.nlp(text)
        for ent in doc.ents:
            if ent.label_ in NER_LABELS:
                entity = self._clean(ent.text)
                if entity:
                    return entity
        return None

    def extract(self, text: Optional[str]) -> Optional[str]:
        """Extract payee/payer name from SMS"""
        if not text or not text.strip():
            return None

        for stage in self.patterns:
            entity = self._match_stage(stage, text)
            if entity:
                return entity

        merchant = self._match_merchant(text)
        if merchant:
            return merchant

        if self.nlp is not None:
            return self._match_ner(text)

        return None
