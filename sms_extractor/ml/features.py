import numpy as np
from sklearn.feature_extraction.text import HashingVectorizer

from sms_extractor.services.normalizer import NormalizedText


class FeatureEncoder:
    """
    Turns normalized text into the fixed-length vector a backend consumes.

    Hashed bag of tokens, so no vocabulary has to be fitted or shipped with
    the model. The same encoder must be used at training time.
    """

    def __init__(self, n_features: int = 128):
        self.n_features = n_features
        self.vectorizer = HashingVectorizer(
            n_features=n_features,
            alternate_sign=False,
            lowercase=False,
            token_pattern=r"(?u)\b\w+\b",
            norm="l2"
        )

    def encode(self, normalized: NormalizedText) -> np.ndarray:
        """Return a float32 vector of shape (n_features,)"""
        matrix = self.vectorizer.transform([" ".join(normalized.tokens)])
        return matrix.toarray()[0].astype(np.float32)

    def encode_batch(self, texts) -> np.ndarray:
        """Encode several NormalizedText values, shape (n, n_features)"""
        matrix = self.vectorizer.transform([" ".join(t.tokens) for t in texts])
        return matrix.toarray().astype(np.float32)
