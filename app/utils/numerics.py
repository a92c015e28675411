"""
Numeric token helpers for scraped table rows

Provides consistent handling of row text from history tables:
- Whitespace tokenization
- Thousands-separator commas (e.g., "15," or "1,024")
"""
from typing import List, Optional


def tokenize_row_text(text: Optional[str]) -> List[str]:
    """
    Split flattened row text into whitespace-separated tokens
    
    Examples:
        >>> tokenize_row_text("Feb 15, 2023 0.24 Dividend")
        ['Feb', '15,', '2023', '0.24', 'Dividend']
        >>> tokenize_row_text(None)
        []
    """
    if not text:
        return []
    return text.split()


def parse_integer_token(token: Optional[str]) -> int:
    """
    Parse a day/year token into an int
    
    Commas are removed before parsing so "15," and "1,024" are accepted.
    
    Args:
        token: raw token from the row text
        
    Returns:
        Parsed integer
        
    Raises:
        ValueError: token is missing or not a plain base-10 integer
    
    Examples:
        >>> parse_integer_token("15,")
        15
        >>> parse_integer_token("2023")
        2023
    """
    if token is None:
        raise ValueError("Missing integer token")
    
    cleaned = str(token).replace(",", "").strip()
    
    # int() alone would also accept "1_5" and "+15"
    if not cleaned.isdigit() or not cleaned.isascii():
        raise ValueError(f"Not an integer token: {token!r}")
    
    return int(cleaned)
