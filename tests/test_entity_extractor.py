import pytest

from sms_extractor.services.entity_extractor import EntityExtractor

@pytest.fixture
def extractor(vocabulary):
    return EntityExtractor(vocabulary.merchants)

class FakeEntity:
    def __init__(self, text, label):
        self.text = text
        self.label_ = label

class FakeDoc:
    def __init__(self, ents):
        self.ents = ents

def test_honorific_name(extractor):
    assert extractor.extract("Rs 500 sent to Mr. JOHN DOE on 12-Jan") == "JOHN DOE"

def test_honorific_name_wins_over_later_stages(extractor):
    sms = "Rs 900 received from Smt. PRIYA NAIR via swiggy@paytm"
    assert extractor.extract(sms) == "PRIYA NAIR"

def test_labeled_field(extractor):
    assert extractor.extract("NEFT done. Beneficiary: RAHUL SHARMA. Ref 8812") == "RAHUL SHARMA"

def test_from_marker(extractor):
    sms = "Your account has been credited with Rs.2,500.00 from AMIT KUMAR on 01-Jan"
    assert extractor.extract(sms) == "AMIT KUMAR"

def test_rejected_capture_does_not_hide_later_match(extractor):
    # "to A/c" is too short, "from SALARY ACCOUNT" is valid
    sms = "Amt Rs 2500.00 credited to A/c XX9012 on 19-12-2024 from SALARY ACCOUNT. Total Bal Rs 52000.00"
    assert extractor.extract(sms) == "SALARY ACCOUNT"

def test_merchant_after_to(extractor):
    assert extractor.extract("INR 1250 paid to Zomato via UPI. Ref No: 432198765432") == "Zomato"
    assert extractor.extract("Paid Rs.350 to UBER INDIA via PhonePe UPI on 20-12-24") == "UBER INDIA"

def test_upi_handle(extractor):
    assert extractor.extract("Rs 175 paid via Google Pay to user@oksbi. UPI transaction ID: 445678901234") == "user@oksbi"
    assert extractor.extract("Your A/c XX5678 is debited with Rs.850.00 Info: UPI/432156789012/swiggy@paytm") == "swiggy@paytm"

def test_known_merchant_canonical_name(extractor):
    sms = "Card XX3456 used for Rs 1899.00 at AMAZON.IN on 20-12-2024"
    assert extractor.extract(sms) == "Amazon"

def test_merchant_must_start_a_word(extractor):
    assert extractor.extract("Please quote the reference number 4471") is None

def test_length_bounds(extractor):
    assert extractor.extract("Rs 40 paid to AB") is None
    assert extractor.extract("Rs 40 paid to ABCDEFGHIJKLMNOPQRSTUVWXYZ ABCDEFGHIJ") is None

def test_nothing_found(extractor):
    assert extractor.extract("A/c *6617 Debited for Rs:250.00 on 10-12-2025") is None
    assert extractor.extract("") is None
    assert extractor.extract(None) is None

def test_ner_fallback(vocabulary):
    nlp = lambda text: FakeDoc([FakeEntity("12", "CARDINAL"), FakeEntity("Corner Store", "ORG")])
    extractor = EntityExtractor(vocabulary.merchants, nlp=nlp)

    assert extractor.extract("Thanks for shopping with us") == "Corner Store"

def test_ner_only_runs_when_earlier_stages_fail(vocabulary):
    nlp = lambda text: FakeDoc([FakeEntity("Corner Store", "ORG")])
    extractor = EntityExtractor(vocabulary.merchants, nlp=nlp)

    assert extractor.extract("INR 1250 paid to Zomato via UPI") == "Zomato"

def test_extract_is_deterministic(extractor):
    sms = "Rs 450.00 debited from A/c XX1234 on 20-12-24 to SWIGGY BANGALORE. Avl Bal: Rs 25,430.50"
    assert extractor.extract(sms) == extractor.extract(sms) == "SWIGGY BANGALORE"
