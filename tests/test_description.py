import pytest

from sms_extractor.schemas.transaction import TransactionType
from sms_extractor.services.description import DescriptionSynthesizer

@pytest.fixture
def synthesizer():
    return DescriptionSynthesizer()

def word_count(text):
    return len(text.split())

@pytest.mark.parametrize("transaction_type", [
    TransactionType.CREDIT, TransactionType.DEBIT, TransactionType.UNKNOWN, None
])
@pytest.mark.parametrize("entity", [
    None,
    "Zomato",
    "AMIT KUMAR",
    "user@oksbi",
    "A B C D E F G H I J K L M N O P",
])
def test_word_count_is_bounded(synthesizer, transaction_type, entity):
    assert 10 <= word_count(synthesizer.synthesize(transaction_type, entity)) <= 15

def test_credit_with_entity(synthesizer):
    description = synthesizer.synthesize(TransactionType.CREDIT, "AMIT KUMAR")
    assert description.startswith("Received from AMIT KUMAR credit type")

def test_debit_with_entity(synthesizer):
    description = synthesizer.synthesize(TransactionType.DEBIT, "SWIGGY BANGALORE")
    assert description.startswith("Transfer to SWIGGY BANGALORE debit type")

def test_unknown_with_entity_has_no_type_word(synthesizer):
    description = synthesizer.synthesize(TransactionType.UNKNOWN, "Zomato")
    assert description.startswith("Transaction with Zomato processed")

def test_generic_sentences(synthesizer):
    assert synthesizer.synthesize(TransactionType.CREDIT, None).startswith("Money received credit transaction credit type")
    assert synthesizer.synthesize(TransactionType.DEBIT, None).startswith("Payment made debit transaction debit type")
    assert synthesizer.synthesize(None, None).startswith("Bank transaction completed")

def test_long_description_is_truncated_to_fifteen_words(synthesizer):
    description = synthesizer.synthesize(TransactionType.DEBIT, "A B C D E F G H I J K L M N O P")
    assert description == "Transfer to A B C D E F G H I J K L M"

def test_padding_must_have_words():
    with pytest.raises(ValueError):
        DescriptionSynthesizer(padding_clause="   ")
