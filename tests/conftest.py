import time

import pytest

from sms_extractor.core.vocabulary import Vocabulary
from sms_extractor.ml.backends.base import BackendSignal
from sms_extractor.services.pipeline import TransactionExtractor


class StubBackend:
    """Backend double returning a fixed signal, raising, or stalling"""

    name = "stub"
    n_features = 128

    def __init__(self, signal=None, error=None, delay=0.0, concurrent=True):
        self.signal = signal or BackendSignal.from_probabilities([0.5, 0.5])
        self.error = error
        self.delay = delay
        self.supports_concurrent_inference = concurrent
        self.calls = 0

    def infer(self, features):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.signal


@pytest.fixture
def vocabulary():
    return Vocabulary()


@pytest.fixture
def extractor(vocabulary):
    return TransactionExtractor.build(vocabulary=vocabulary)
