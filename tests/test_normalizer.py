from sms_extractor.services.normalizer import normalize

def test_lowercases_trims_and_tokenizes():
    normalized = normalize("  Rs.450 DEBITED from A/c XX1234!  ")

    assert normalized.text == "rs.450 debited from a/c xx1234!"
    assert normalized.tokens == ("rs", "450", "debited", "from", "a", "c", "xx1234")

def test_underscore_is_part_of_a_token():
    assert normalize("ref_no: 42").tokens == ("ref_no", "42")

def test_empty_and_none_give_no_tokens():
    for text in ("", None, "   "):
        normalized = normalize(text)
        assert normalized.tokens == ()
        assert normalized.is_empty

def test_normalize_is_deterministic():
    sms = "INR 1250 paid to Zomato via UPI"
    assert normalize(sms) == normalize(sms)
