"""
Transaction extraction pipeline.

raw text -> normalize -> fraud check and backend/heuristic resolution
-> entity -> description -> aggregated result
"""

from typing import Optional

import structlog

from sms_extractor.core.vocabulary import Vocabulary
from sms_extractor.ml.inference.model_loader import BackendLoader
from sms_extractor.schemas.transaction import TransactionResult
from sms_extractor.services.aggregator import ResultAggregator, UnknownTypePolicy
from sms_extractor.services.amount_extractor import AmountExtractor
from sms_extractor.services.description import DescriptionSynthesizer
from sms_extractor.services.entity_extractor import EntityExtractor, load_ner_model
from sms_extractor.services.fallback_policy import FallbackPolicy
from sms_extractor.services.fraud_detector import FraudDetector
from sms_extractor.services.normalizer import normalize
from sms_extractor.services.type_classifier import TypeClassifier

logger = structlog.get_logger()


class TransactionExtractor:
    """
    Turns one SMS body into a TransactionResult.

    Never raises for empty or ambiguous input. The backend loader is optional;
    without it, or when it returns no signal, heuristics decide.
    """

    def __init__(
        self,
        policy: FallbackPolicy,
        entity_extractor: EntityExtractor,
        aggregator: ResultAggregator,
        backend_loader: Optional[BackendLoader] = None
    ):
        self.policy = policy
        self.entity_extractor = entity_extractor
        self.aggregator = aggregator
        self.backend_loader = backend_loader

    @classmethod
    def build(
        cls,
        vocabulary: Optional[Vocabulary] = None,
        backend_loader: Optional[BackendLoader] = None,
        type_threshold: float = 0.5,
        fraud_threshold: float = 0.5,
        unknown_policy: UnknownTypePolicy = UnknownTypePolicy.NULLIFY,
        allow_bare_number: bool = True,
        nlp=None
    ) -> "TransactionExtractor":
        vocabulary = vocabulary or Vocabulary()
        policy = FallbackPolicy(
            FraudDetector(vocabulary.fraud_indicators),
            TypeClassifier(vocabulary.credit_keywords, vocabulary.debit_keywords),
            AmountExtractor(allow_bare_number=allow_bare_number),
            type_threshold=type_threshold,
            fraud_threshold=fraud_threshold
        )
        return cls(
            policy=policy,
            entity_extractor=EntityExtractor(vocabulary.merchants, nlp=nlp),
            aggregator=ResultAggregator(DescriptionSynthesizer(), unknown_policy),
            backend_loader=backend_loader
        )

    @classmethod
    def from_settings(
        cls,
        settings,
        vocabulary: Vocabulary,
        backend_loader: Optional[BackendLoader] = None
    ) -> "TransactionExtractor":
        nlp = load_ner_model(settings.SPACY_MODEL) if settings.ENABLE_NER_FALLBACK else None
        return cls.build(
            vocabulary=vocabulary,
            backend_loader=backend_loader,
            type_threshold=settings.TYPE_CONFIDENCE_THRESHOLD,
            fraud_threshold=settings.FRAUD_CONFIDENCE_THRESHOLD,
            unknown_policy=UnknownTypePolicy(settings.UNKNOWN_TYPE_POLICY),
            allow_bare_number=settings.AMOUNT_BARE_NUMBER_FALLBACK,
            nlp=nlp
        )

    def extract(self, text: Optional[str]) -> TransactionResult:
        normalized = normalize(text)

        signal = None
        if self.backend_loader is not None and not normalized.is_empty:
            signal = self.backend_loader.infer(normalized)

        resolution = self.policy.resolve(text, normalized, signal)

        entity = None
        if not resolution.fraud:
            entity = self.entity_extractor.extract(text)

        result = self.aggregator.aggregate(
            resolution.fraud,
            resolution.transaction_type,
            resolution.amount,
            entity
        )

        logger.debug(
            "sms_extracted",
            source=resolution.source,
            type=result.type.value if result.type else None,
            fraud=result.fraud
        )
        return result
