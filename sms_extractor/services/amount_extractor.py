"""
Amount extraction for bank and UPI notification messages
"""

import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Pattern

NUMBER = r'(\d+(?:\.\d{1,2})?)'
CURRENCY = r'(?:(?<![a-z])(?:rs|inr|rupees?)(?![a-z])\.?|₹)'

# Standalone number: not glued to a word, and not the fraction of a longer number
BARE_NUMBER = r'(?<![\w.])' + NUMBER + r'(?!\d)'

# Comma between two digits, as in 1,250.50 or 1,00,000
THOUSANDS_SEPARATOR = re.compile(r'(?<=\d),(?=\d)')


class AmountExtractor:
    """
    Recovers the transaction amount with an ordered cascade of patterns.

    Currency-qualified numbers are preferred over labeled ones, and both over
    the bare-number fallback. The fallback matches any standalone number,
    including dates, reference IDs and phone numbers: it trades precision for
    recall across message formats and is only reached when nothing better
    matched. Pass allow_bare_number=False to turn it off.
    """

    def __init__(self, allow_bare_number: bool = True):
        self.allow_bare_number = allow_bare_number
        self.patterns = self._compile_patterns()

    def _compile_patterns(self) -> List[Pattern]:
        patterns = [
            CURRENCY + r'\s*:?\s*' + NUMBER,  # Rs. 1250.50, INR 450, Rs250, ₹99
            NUMBER + r'\s*' + CURRENCY,  # 1250 Rs, 250Rs, 300 rupees
            r'\b(?:amount|amt)\b\.?\s*[:\-]?\s*(?:' + CURRENCY + r'\s*:?\s*)?' + NUMBER,  # Amount: 1234
        ]
        if self.allow_bare_number:
            patterns.append(BARE_NUMBER)

        return [re.compile(p, re.IGNORECASE) for p in patterns]

    def extract(self, text: Optional[str]) -> Optional[Decimal]:
        """Extract amount from SMS text"""
        if not text:
            return None

        # Remove thousands separators before matching
        text = THOUSANDS_SEPARATOR.sub('', text)

        for pattern in self.patterns:
            match = pattern.search(text)
            if match:
                try:
                    return Decimal(match.group(1))
                except InvalidOperation:
                    continue
        return None
