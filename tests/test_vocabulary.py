import json

import pytest
from pydantic import ValidationError

from sms_extractor.core.vocabulary import KNOWN_MERCHANTS, Vocabulary, load_vocabulary

def test_defaults():
    vocabulary = load_vocabulary()

    assert "urgent" in vocabulary.fraud_indicators
    assert "credited" in vocabulary.credit_keywords
    assert "debited" in vocabulary.debit_keywords
    assert vocabulary.merchants == KNOWN_MERCHANTS

def test_override_from_file(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps({
        "credit_keywords": ["  Credited ", "DEPOSIT", ""],
        "merchants": [" BigBasket ", "Myntra"]
    }))

    vocabulary = load_vocabulary(str(path))

    assert vocabulary.credit_keywords == ("credited", "deposit")
    assert vocabulary.merchants == ("BigBasket", "Myntra")
    assert "debited" in vocabulary.debit_keywords

def test_vocabulary_is_immutable():
    vocabulary = Vocabulary()
    with pytest.raises(ValidationError):
        vocabulary.merchants = ("Other",)

def test_invalid_file_content(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps({"merchants": "Amazon"}))

    with pytest.raises(ValidationError):
        load_vocabulary(str(path))

def test_frozen_through_model_config():
    assert Vocabulary.model_config["frozen"] == True
